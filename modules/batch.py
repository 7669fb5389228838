"""
Batch Module - Generate sample avatars and LinkedIn images for every
color/size/variant combination
"""

from dataclasses import dataclass, field
from multiprocessing import Pool, cpu_count
from pathlib import Path
from typing import Callable, Dict, List, Optional
import time

from loguru import logger

from config import settings
from modules.exporter import Exporter
from modules.palette import PaletteResolver
from modules.platforms import LINKEDIN_SPECS, get_image_spec
from modules.renderer import Renderer
from utils.image_utils import load_image_bytes

# (filename suffix, grayscale, with_shadow, description)
SAMPLE_VARIANTS = [
    {"suffix": "", "grayscale": False, "with_shadow": True, "description": "Standard"},
    {"suffix": "-grayscale", "grayscale": True, "with_shadow": True, "description": "Grayscale"},
]

# Overlay text per LinkedIn image type (None = no text)
SAMPLE_TEXTS: Dict[str, Optional[str]] = {
    "logo": None,
    "title": "kieks.me GbR",
    "culture-main": "Unternehmenskultur",
    "culture-module": "Team",
    "photo": None,
    "post": "We're hiring!",
}


@dataclass
class BatchResult:
    """Outcome of a batch run"""
    output_dir: Path
    generated: List[str] = field(default_factory=list)
    failed: Dict[str, str] = field(default_factory=dict)

    @property
    def total(self) -> int:
        return len(self.generated)


def _render_avatar_job(job: Dict) -> Dict:
    """
    Render and save one avatar (runs in a worker process)

    Errors are returned in the result so one bad portrait does not stop
    the rest of the batch.
    """
    filename = job['filename']
    try:
        renderer = Renderer()
        output = renderer.create_avatar(
            load_image_bytes(job['portrait_path']),
            job['color'],
            job['size'],
            grayscale=job['grayscale'],
            with_shadow=job['with_shadow'],
        )
        Exporter(Path(job['output_dir'])).save(output, filename)
        return {'filename': filename, 'success': True, 'budget_exceeded': output.budget_exceeded}

    except Exception as e:
        logger.error(f"  Failed {filename}: {e}")
        return {'filename': filename, 'success': False, 'error': str(e)}


def _render_social_job(job: Dict) -> Dict:
    """Render and save one LinkedIn image (runs in a worker process)"""
    filename = job['filename']
    try:
        output = Renderer().create_social_image(
            job['image_type'],
            color=job['color'],
            text=job['text'],
            fmt=job['fmt'],
            use_recommended=True,
        )
        Exporter(Path(job['output_dir'])).save(output, filename)
        return {'filename': filename, 'success': True, 'budget_exceeded': output.budget_exceeded}

    except Exception as e:
        logger.error(f"  Failed {filename}: {e}")
        return {'filename': filename, 'success': False, 'error': str(e)}


def _default_workers(num_workers: Optional[int]) -> int:
    return num_workers or settings.BATCH_NUM_WORKERS or min(4, max(1, cpu_count() // 2))


def _run_jobs(
    worker: Callable[[Dict], Dict],
    jobs: List[Dict],
    num_workers: int,
    output_dir: Path
) -> BatchResult:
    """
    Run jobs in a process pool (or inline for a single worker)

    Returns:
        BatchResult with generated and failed filenames
    """
    start_time = time.time()

    if num_workers > 1:
        with Pool(processes=num_workers) as pool:
            results = pool.map(worker, jobs)
    else:
        results = [worker(job) for job in jobs]

    batch = BatchResult(output_dir=output_dir)
    for result in results:
        if result['success']:
            batch.generated.append(result['filename'])
        else:
            batch.failed[result['filename']] = result['error']

    elapsed = time.time() - start_time
    logger.info(
        f"✅ Batch complete: {batch.total} generated, {len(batch.failed)} failed "
        f"in {elapsed:.1f}s"
    )
    return batch


class SampleGenerator:
    """
    Generates example avatars for each portrait in a source folder
    """

    def __init__(
        self,
        source_dir: Path = None,
        output_dir: Path = None,
        colors: Optional[List[str]] = None,
        sizes: Optional[List[int]] = None,
        num_workers: int = None
    ):
        """
        Initialize SampleGenerator

        Args:
            source_dir: Folder with cut-out portraits (default: settings.SOURCE_DIR)
            output_dir: Folder for generated avatars (default: settings.OUT_DIR)
            colors: Brand colors to render (default: whole palette)
            sizes: Avatar sizes (default: settings.SAMPLE_SIZES)
            num_workers: Worker processes (default: settings or CPU based)
        """
        self.source_dir = Path(source_dir or settings.SOURCE_DIR)
        self.output_dir = Path(output_dir or settings.OUT_DIR)
        self.colors = colors or PaletteResolver().names()
        self.sizes = sizes or settings.SAMPLE_SIZES
        self.num_workers = _default_workers(num_workers)

        logger.info(
            f"SampleGenerator initialized: source={self.source_dir}, "
            f"colors={self.colors}, sizes={self.sizes}, workers={self.num_workers}"
        )

    def discover_portraits(self) -> List[Path]:
        """
        Find portrait images in source directory

        Returns:
            Sorted list of portrait paths
        """
        if not self.source_dir.exists():
            logger.error(f"Source directory does not exist: {self.source_dir}")
            return []

        portraits = [
            p for p in self.source_dir.iterdir()
            if p.is_file() and p.suffix.lower() in settings.ALLOWED_EXTENSIONS
        ]
        return sorted(portraits)

    def build_jobs(self, portraits: List[Path]) -> List[Dict]:
        exporter = Exporter(self.output_dir)
        jobs = []
        for portrait_path in portraits:
            for color in self.colors:
                for size in self.sizes:
                    for variant in SAMPLE_VARIANTS:
                        jobs.append({
                            'portrait_path': str(portrait_path),
                            'color': color,
                            'size': size,
                            'grayscale': variant['grayscale'],
                            'with_shadow': variant['with_shadow'],
                            'output_dir': str(self.output_dir),
                            'filename': exporter.avatar_filename(
                                portrait_path.stem, color, size, variant['grayscale']
                            ),
                        })
        return jobs

    def run(self) -> BatchResult:
        """
        Render all sample avatars

        Returns:
            BatchResult with generated and failed filenames
        """
        portraits = self.discover_portraits()
        if not portraits:
            raise FileNotFoundError(f"No portrait files found in {self.source_dir}")

        jobs = self.build_jobs(portraits)
        logger.info(f"🚀 Generating {len(jobs)} avatars from {len(portraits)} portraits...")
        return _run_jobs(_render_avatar_job, jobs, self.num_workers, self.output_dir)


class SocialSampleGenerator:
    """
    Generates example LinkedIn images: every image type x brand color at
    the recommended size, with the default logo and per-type sample text
    """

    def __init__(
        self,
        output_dir: Path = None,
        colors: Optional[List[str]] = None,
        image_types: Optional[List[str]] = None,
        texts: Optional[Dict[str, Optional[str]]] = None,
        num_workers: int = None
    ):
        self.output_dir = Path(output_dir or settings.OUT_DIR)
        self.colors = colors or PaletteResolver().names()
        self.image_types = image_types or list(LINKEDIN_SPECS)
        self.texts = texts if texts is not None else SAMPLE_TEXTS
        self.num_workers = _default_workers(num_workers)

        logger.info(
            f"SocialSampleGenerator initialized: types={self.image_types}, "
            f"colors={self.colors}, workers={self.num_workers}"
        )

    def build_jobs(self) -> List[Dict]:
        exporter = Exporter(self.output_dir)
        jobs = []
        for image_type in self.image_types:
            spec = get_image_spec(image_type)
            width, height = spec.dimensions(use_recommended=True)
            for color in self.colors:
                jobs.append({
                    'image_type': image_type,
                    'color': color,
                    'text': self.texts.get(image_type),
                    'fmt': spec.default_format,
                    'output_dir': str(self.output_dir),
                    'filename': exporter.social_filename(
                        image_type, color, width, height, spec.default_format
                    ),
                })
        return jobs

    def run(self) -> BatchResult:
        """
        Render all sample LinkedIn images

        Returns:
            BatchResult with generated and failed filenames
        """
        jobs = self.build_jobs()
        logger.info(f"🚀 Generating {len(jobs)} LinkedIn images...")
        return _run_jobs(_render_social_job, jobs, self.num_workers, self.output_dir)
