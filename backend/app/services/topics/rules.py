"""Field rules shared by topic create and update validation."""
from __future__ import annotations

from app.services.images.pipeline import ImagePipeline, UploadedImage

NAME_MAX_LENGTH = 20
DESCRIPTION_MAX_LENGTH = 1000


def check_text(field: str, value: str | None, max_length: int, *, required: bool = True) -> str | None:
    """Return an error message for a text field, or None when it passes.

    With ``required`` off a ``None`` value means the field is not being
    changed and is skipped; an empty string always fails.
    """
    if value is None and not required:
        return None
    if not value:
        return f"{field} required"
    if len(value) > max_length:
        return f"{field} too long"
    return None


def check_cover(
    images: ImagePipeline, cover: UploadedImage | None, *, required: bool = True
) -> str | None:
    """Return an error message for the cover upload, or None when it passes."""
    if cover is None:
        return "cover required" if required else None
    return images.validate_image(cover)


def collect_field_errors(
    images: ImagePipeline,
    name: str | None,
    description: str | None,
    cover: UploadedImage | None,
    *,
    required: bool,
) -> dict[str, str]:
    """Run every field rule and map failing fields to their messages."""
    checks = {
        "name": check_text("name", name, NAME_MAX_LENGTH, required=required),
        "description": check_text("description", description, DESCRIPTION_MAX_LENGTH, required=required),
        "cover": check_cover(images, cover, required=required),
    }
    return {field: message for field, message in checks.items() if message}
