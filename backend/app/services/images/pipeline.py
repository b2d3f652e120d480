"""Image pipeline for validating, storing and resolving branded images."""
from __future__ import annotations

import io
import logging
import uuid
from pathlib import Path
from typing import BinaryIO, Protocol

from PIL import Image, ImageOps

from app.services.images.brand import Brand

logger = logging.getLogger(__name__)

# Pillow format name -> stored file extension
FORMAT_EXTENSIONS = {
    "JPEG": "jpg",
    "PNG": "png",
    "GIF": "gif",
}


class UploadedImage(Protocol):
    """Anything exposing a binary ``file`` object, such as an UploadFile."""

    file: BinaryIO


class ImagePipeline:
    """Store uploaded images together with their resized brand variants.

    Files live under ``{upload_dir}/{brand.type}/{owner_id}/``. For an upload
    stored as ``{token}.{ext}`` every size tag gets a ``{token}_{size}.{ext}``
    variant, and the original and each variant also get a ``.webp`` copy.
    """

    def __init__(
        self,
        brand: Brand,
        upload_dir: str | Path,
        upload_url: str,
        static_url: str,
        max_size: int,
        max_pixels: int = 40_000_000,
    ):
        self.brand = brand
        self.upload_dir = Path(upload_dir)
        self.upload_url = upload_url
        self.static_url = static_url
        self.max_size = max_size
        self.max_pixels = max_pixels

    def validate_image(self, upload: UploadedImage) -> str | None:
        """Check an upload and return an error message, or None when valid."""
        data = self._read(upload)
        if not data:
            return "cover is empty"
        if len(data) > self.max_size:
            return "cover too large"
        try:
            with Image.open(io.BytesIO(data)) as image:
                image_format = image.format
                width, height = image.size
                image.verify()
        except Image.DecompressionBombError:
            return "cover dimensions too large"
        except (OSError, SyntaxError):
            return "cover must be a jpg, png or gif image"
        if width * height > self.max_pixels:
            return "cover dimensions too large"
        if image_format not in FORMAT_EXTENSIONS:
            return "cover must be a jpg, png or gif image"
        return None

    def upload_image(self, owner_id: int, upload: UploadedImage) -> str:
        """Write the original and all variants, returning the stored file name."""
        data = self._read(upload)
        directory = self._owner_dir(owner_id)
        directory.mkdir(parents=True, exist_ok=True)

        with Image.open(io.BytesIO(data)) as image:
            image_format = image.format
            ext = FORMAT_EXTENSIONS[image_format]
            token = uuid.uuid4().hex
            filename = f"{token}.{ext}"

            try:
                (directory / filename).write_bytes(data)
                self._save_webp(image, directory / f"{token}.webp")

                for size, (width, height) in self.brand.sizes.items():
                    variant = ImageOps.fit(image, (width, height), method=Image.Resampling.LANCZOS)
                    variant.save(directory / f"{token}_{size}.{ext}", format=image_format)
                    self._save_webp(variant, directory / f"{token}_{size}.webp")
                    logger.debug("Wrote %s variant %s (%sx%s) for %s", self.brand.type, size, width, height, owner_id)
            except Exception:
                logger.warning("Failed writing %s %s for %s, removing partial files", self.brand.type, filename, owner_id)
                self.delete_image(owner_id, filename)
                raise

        return filename

    def delete_image(self, owner_id: int, filename: str | None) -> None:
        """Remove a stored image and every variant; missing files are ignored."""
        if not filename:
            return
        directory = self._owner_dir(owner_id)
        for name in self._variant_names(filename):
            (directory / name).unlink(missing_ok=True)
        logger.debug("Deleted %s %s for %s", self.brand.type, filename, owner_id)

    def brand_urls(self, owner_id: int, filename: str | None, webp: bool) -> dict[str, str]:
        """Resolve URLs of a stored image, or of the default image when unset."""
        if not filename:
            return self.brand.default_urls(webp, self.static_url)
        stem, _, ext = filename.rpartition(".")
        suffix = "webp" if webp else ext
        base = f"{self.upload_url}{self.brand.type}/{owner_id}/"
        urls = {"o": f"{base}{stem}.{suffix}"}
        for size in self.brand.sizes:
            urls[size] = f"{base}{stem}_{size}.{suffix}"
        return urls

    def _owner_dir(self, owner_id: int) -> Path:
        return self.upload_dir / self.brand.type / str(owner_id)

    def _variant_names(self, filename: str) -> list[str]:
        stem, _, ext = filename.rpartition(".")
        names = [filename, f"{stem}.webp"]
        for size in self.brand.sizes:
            names.append(f"{stem}_{size}.{ext}")
            names.append(f"{stem}_{size}.webp")
        return names

    @staticmethod
    def _read(upload: UploadedImage) -> bytes:
        upload.file.seek(0)
        data = upload.file.read()
        upload.file.seek(0)
        return data

    @staticmethod
    def _save_webp(image: Image.Image, path: Path) -> None:
        mode = "RGBA" if image.mode in ("RGBA", "LA", "P") else "RGB"
        image.convert(mode).save(path, format="WEBP")
