import pytest
from PIL import Image

from modules.batch import SAMPLE_TEXTS, SampleGenerator, SocialSampleGenerator
from modules.renderer import Renderer

from conftest import to_png_bytes, make_disc


@pytest.fixture
def source_dir(tmp_path):
    source = tmp_path / "source"
    source.mkdir()
    (source / "jane.png").write_bytes(to_png_bytes(make_disc(64, 20)))
    (source / "notes.txt").write_text("not a portrait")
    return source


def test_generates_every_variant(source_dir, tmp_path):
    out = tmp_path / "out"
    generator = SampleGenerator(source_dir, out, colors=["navy", "aqua"], sizes=[64], num_workers=1)

    result = generator.run()

    assert result.total == 4
    assert not result.failed
    assert sorted(p.name for p in out.glob("*.png")) == [
        "avatar-jane-aqua-64-grayscale.png",
        "avatar-jane-aqua-64.png",
        "avatar-jane-navy-64-grayscale.png",
        "avatar-jane-navy-64.png",
    ]


def test_bad_portrait_does_not_stop_batch(source_dir, tmp_path):
    (source_dir / "broken.png").write_bytes(b"garbage")
    generator = SampleGenerator(source_dir, tmp_path / "out", colors=["navy"], sizes=[64], num_workers=1)

    result = generator.run()

    assert result.total == 2
    assert set(result.failed) == {"avatar-broken-navy-64.png", "avatar-broken-navy-64-grayscale.png"}


def test_discover_skips_other_files(source_dir, tmp_path):
    generator = SampleGenerator(source_dir, tmp_path / "out", colors=["navy"], sizes=[64], num_workers=1)
    assert [p.name for p in generator.discover_portraits()] == ["jane.png"]


def test_empty_source_dir(tmp_path):
    generator = SampleGenerator(tmp_path / "missing", tmp_path / "out", colors=["navy"], num_workers=1)
    with pytest.raises(FileNotFoundError):
        generator.run()


def test_portrait_over_pixel_limit_does_not_stop_batch(source_dir, tmp_path, monkeypatch):
    (source_dir / "huge.png").write_bytes(to_png_bytes(make_disc(200, 60)))
    monkeypatch.setattr(Image, "MAX_IMAGE_PIXELS", 5000)
    generator = SampleGenerator(source_dir, tmp_path / "out", colors=["navy"], sizes=[64], num_workers=1)

    result = generator.run()

    assert result.total == 2
    assert set(result.failed) == {"avatar-huge-navy-64.png", "avatar-huge-navy-64-grayscale.png"}


def test_unexpected_error_is_contained_per_job(source_dir, tmp_path, monkeypatch):
    def explode(*args, **kwargs):
        raise RuntimeError("renderer crashed")

    monkeypatch.setattr(Renderer, "create_avatar", explode)
    generator = SampleGenerator(source_dir, tmp_path / "out", colors=["navy"], sizes=[64], num_workers=1)

    result = generator.run()

    assert result.total == 0
    assert set(result.failed.values()) == {"renderer crashed"}


class TestSocialSampleGenerator:
    def test_jobs_cover_types_and_colors(self, tmp_path):
        generator = SocialSampleGenerator(tmp_path, colors=["navy", "aqua"], num_workers=1)
        jobs = generator.build_jobs()

        assert len(jobs) == 12
        by_name = {job["filename"]: job for job in jobs}
        assert by_name["linkedin-title-navy-4200x700.jpg"]["text"] == "kieks.me GbR"
        assert by_name["linkedin-post-aqua-1200x627.jpg"]["text"] == "We're hiring!"
        assert by_name["linkedin-logo-navy-400x400.png"]["fmt"] == "png"
        assert by_name["linkedin-photo-aqua-900x600.jpg"]["text"] is None

    def test_sample_texts_cover_every_type(self):
        assert SAMPLE_TEXTS["logo"] is None
        assert SAMPLE_TEXTS["culture-main"] == "Unternehmenskultur"
        assert SAMPLE_TEXTS["culture-module"] == "Team"

    def test_run_writes_images(self, tmp_path):
        out = tmp_path / "out"
        generator = SocialSampleGenerator(out, colors=["navy"], image_types=["logo", "post"], num_workers=1)

        result = generator.run()

        assert not result.failed
        assert sorted(p.name for p in out.iterdir()) == [
            "linkedin-logo-navy-400x400.png",
            "linkedin-post-navy-1200x627.jpg",
        ]

    def test_unknown_color_does_not_stop_batch(self, tmp_path):
        generator = SocialSampleGenerator(
            tmp_path, colors=["navy", "orange"], image_types=["post"], num_workers=1
        )

        result = generator.run()

        assert result.generated == ["linkedin-post-navy-1200x627.jpg"]
        assert list(result.failed) == ["linkedin-post-orange-1200x627.jpg"]
