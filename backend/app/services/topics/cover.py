"""Topic cover branding."""
from app.config import settings
from app.services.images.brand import Brand
from app.services.images.pipeline import ImagePipeline

# Height/width ratio is locked at 0.56
TOPIC_COVER_BRAND = Brand(
    type="topic-cover",
    sizes={
        "s": (360, 202),
        "m": (720, 404),
        "l": (1080, 606),
    },
)


def get_cover_pipeline() -> ImagePipeline:
    """Build the image pipeline for topic covers from settings."""
    return ImagePipeline(
        TOPIC_COVER_BRAND,
        upload_dir=settings.upload_dir,
        upload_url=settings.upload_url,
        static_url=settings.static_url,
        max_size=settings.image_max_size,
        max_pixels=settings.image_max_pixels,
    )
