"""
Brand Image Generator - FastAPI Application
"""

from fastapi import FastAPI, HTTPException, UploadFile, File, Form
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse
from pydantic import BaseModel
from typing import Optional, List, Dict
from pathlib import Path
from loguru import logger
import sys

from config import settings
from modules import Renderer, Exporter
from modules.exporter import EncodedOutput
from modules.platforms import LINKEDIN_SPECS, get_image_spec
from utils.exceptions import (
    CompositionError,
    CorruptImageError,
    EmptyVisibleRegionError,
    NoShadowColorAvailableError,
    UnsupportedFormatError,
)

# Configure logging
logger.remove()
logger.add(sys.stderr, level="INFO")
logger.add("logs/app.log", rotation="500 MB", retention="10 days", level="DEBUG")

# Create logs directory
Path("logs").mkdir(exist_ok=True)

# Initialize FastAPI app
app = FastAPI(
    title=settings.API_TITLE,
    version=settings.API_VERSION,
    description="Brand-compliant avatars and LinkedIn images with shadow silhouettes"
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # In production, replace with specific origins
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

MEDIA_TYPES = {"png": "image/png", "jpg": "image/jpeg", "jpeg": "image/jpeg"}


# ============================================================================
# Response models
# ============================================================================
class GenerateResponse(BaseModel):
    """Response model for image generation"""
    success: bool
    filename: Optional[str] = None
    image_path: Optional[str] = None
    format: Optional[str] = None
    byte_length: Optional[int] = None
    budget_exceeded: bool = False
    metadata: Optional[dict] = None


class StatusResponse(BaseModel):
    """Status response model"""
    status: str
    message: str


class ImageTypeInfo(BaseModel):
    """LinkedIn image type description"""
    name: str
    description: str
    min_size: List[int]
    recommended_size: List[int]
    default_format: str


# ============================================================================
# Pipeline
# ============================================================================
renderer = Renderer()
exporter = Exporter()


def _raise_http(e: CompositionError) -> None:
    """Map composition errors to HTTP errors"""
    if isinstance(e, (CorruptImageError, UnsupportedFormatError)):
        raise HTTPException(status_code=415, detail=str(e))
    if isinstance(e, (NoShadowColorAvailableError, EmptyVisibleRegionError)):
        logger.error(f"Configuration error: {e}")
        raise HTTPException(status_code=500, detail=str(e))
    raise HTTPException(status_code=400, detail=str(e))


def _save(output: EncodedOutput, filename: str, metadata: dict) -> GenerateResponse:
    metadata = {
        **metadata,
        "byte_length": output.byte_length,
        "retried": output.retried,
        "budget_exceeded": output.budget_exceeded,
    }
    path = exporter.save(output, filename, metadata)
    return GenerateResponse(
        success=True,
        filename=path.name,
        image_path=str(path),
        format=output.format,
        byte_length=output.byte_length,
        budget_exceeded=output.budget_exceeded,
        metadata=metadata,
    )


# ============================================================================
# Endpoints
# ============================================================================
@app.get("/health", response_model=StatusResponse)
async def health():
    """Health check"""
    return StatusResponse(status="ok", message="Brand Image Generator is running")


@app.get("/colors", response_model=Dict[str, str])
async def list_colors():
    """
    List brand colors

    Returns:
        Mapping of color name to hex value
    """
    palette = renderer.palette
    return {name: palette.resolve(name).hex for name in palette.names()}


@app.get("/image-types", response_model=List[ImageTypeInfo])
async def list_image_types():
    """
    List LinkedIn image types and their sizes
    """
    return [
        ImageTypeInfo(
            name=spec.name,
            description=spec.description,
            min_size=list(spec.min_size),
            recommended_size=list(spec.recommended_size),
            default_format=spec.default_format,
        )
        for spec in LINKEDIN_SPECS.values()
    ]


@app.post("/avatar", response_model=GenerateResponse)
async def generate_avatar(
    portrait: UploadFile = File(..., description="Cut-out portrait (PNG with transparency)"),
    color: str = Form(..., description="Brand color name"),
    size: int = Form(settings.AVATAR_DEFAULT_SIZE, ge=settings.AVATAR_MIN_SIZE, le=settings.AVATAR_MAX_SIZE),
    grayscale: bool = Form(False, description="Convert portrait to grayscale (background stays colored)"),
    shadow: bool = Form(True, description="Add shadow silhouette behind the portrait"),
):
    """
    Generate square avatar with brand color background

    Returns:
        Generation result
    """
    data = await portrait.read()
    try:
        output = renderer.create_avatar(data, color, size, grayscale=grayscale, with_shadow=shadow)
        portrait_name = Path(portrait.filename or "portrait").stem
        filename = exporter.avatar_filename(portrait_name, color, size, grayscale)
    except CompositionError as e:
        _raise_http(e)

    return _save(output, filename, {
        "type": "avatar",
        "color": color.lower(),
        "size": size,
        "grayscale": grayscale,
        "shadow": shadow,
    })


@app.post("/social-image", response_model=GenerateResponse)
async def generate_social_image(
    image_type: str = Form(..., description="logo, title, culture-main, culture-module, photo, post"),
    color: str = Form("navy", description="Brand color name"),
    text: Optional[str] = Form(None, description="Text to display"),
    output_format: Optional[str] = Form(None, description="jpeg or png (default depends on type)"),
    use_recommended: bool = Form(True, description="Use recommended instead of minimum size"),
    logo: Optional[UploadFile] = File(None, description="Logo image (PNG/JPEG)"),
):
    """
    Generate LinkedIn image

    Returns:
        Generation result
    """
    logo_bytes = await logo.read() if logo is not None else None
    try:
        spec = get_image_spec(image_type)
        output = renderer.create_social_image(
            image_type,
            color=color,
            logo_bytes=logo_bytes,
            text=text,
            fmt=output_format,
            use_recommended=use_recommended,
        )
        width, height = spec.dimensions(use_recommended)
        filename = exporter.social_filename(image_type, color, width, height, output.format)
    except CompositionError as e:
        _raise_http(e)

    return _save(output, filename, {
        "type": image_type,
        "color": color.lower(),
        "size": [width, height],
        "text": text,
    })


@app.get("/images/{filename}")
async def get_image(filename: str):
    """
    Get generated image file

    Args:
        filename: Image filename

    Returns:
        Image file
    """
    file_path = exporter.output_dir / Path(filename).name

    if not file_path.exists():
        raise HTTPException(status_code=404, detail="Image not found")

    return FileResponse(
        file_path,
        media_type=MEDIA_TYPES.get(file_path.suffix.lower().lstrip("."), "application/octet-stream"),
        filename=file_path.name
    )


@app.get("/images", response_model=List[str])
async def list_images():
    """
    List all generated images

    Returns:
        List of image filenames
    """
    return [image.name for image in exporter.list_images()]


if __name__ == "__main__":
    import uvicorn

    logger.info(f"Starting {settings.API_TITLE} on {settings.API_HOST}:{settings.API_PORT}")
    uvicorn.run(app, host=settings.API_HOST, port=settings.API_PORT)
