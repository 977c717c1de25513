"""
Local image directory for prompt output images.

Files live in a single uploads directory and are associated with a prompt
by carrying the prompt id in their filename.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from uuid import UUID, uuid4

import aiofiles
import aiofiles.os

from core.config import get_settings
from core.exceptions import StorageError, ValidationError

logger = logging.getLogger(__name__)

ALLOWED_EXTENSIONS = {".png", ".jpg", ".jpeg", ".gif", ".webp"}


@dataclass
class UploadedImage:
    """An uploaded image file held in memory."""

    filename: str
    content_type: str
    data: bytes


@dataclass
class ImageLookup:
    """Result of an image-directory lookup.

    ``error`` is set when the directory could not be read; ``urls`` is then
    empty and callers fall back to the stored image.
    """

    urls: list[str] = field(default_factory=list)
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class ImageIndex:
    """Filenames from one scan of the uploads directory."""

    url_prefix: str
    names: list[str] = field(default_factory=list)
    error: str | None = None

    def lookup(self, prompt_id: UUID | str) -> ImageLookup:
        """Public URLs of every scanned file whose name contains the prompt id."""
        if self.error is not None:
            return ImageLookup(error=self.error)
        key = str(prompt_id)
        return ImageLookup(urls=[f"{self.url_prefix}/{name}" for name in self.names if key in name])


class PromptImageStorage:
    """Reads and writes prompt images in the uploads directory."""

    def __init__(self, base_dir: str | None = None, url_prefix: str | None = None):
        settings = get_settings()
        self.base_path = Path(base_dir or settings.uploads_dir)
        self.url_prefix = (url_prefix or settings.uploads_url_prefix).rstrip("/")

    def _url_for(self, filename: str) -> str:
        return f"{self.url_prefix}/{filename}"

    def _path_for_url(self, url: str) -> Path | None:
        if not url.startswith(self.url_prefix + "/"):
            return None
        return self.base_path / url[len(self.url_prefix) + 1 :]

    async def scan(self) -> ImageIndex:
        """List the uploads directory once; a missing directory is empty."""
        try:
            names = await aiofiles.os.listdir(self.base_path)
        except FileNotFoundError:
            return ImageIndex(url_prefix=self.url_prefix)
        except OSError as e:
            logger.warning("Could not read image directory %s: %s", self.base_path, e)
            return ImageIndex(url_prefix=self.url_prefix, error=str(e))

        return ImageIndex(url_prefix=self.url_prefix, names=sorted(names))

    async def list_prompt_images(self, prompt_id: UUID | str) -> ImageLookup:
        """Images of a single prompt."""
        index = await self.scan()
        return index.lookup(prompt_id)

    async def save_prompt_images(
        self,
        prompt_id: UUID | str,
        images: list[UploadedImage],
    ) -> list[str]:
        """
        Write images named after the prompt and return their public URLs.

        Either every image is written or none is: files written before a
        failure are removed and StorageError is raised.
        """
        for image in images:
            if not image.content_type.startswith("image/"):
                raise ValidationError(
                    message="Only image uploads are allowed",
                    details={"filename": image.filename, "content_type": image.content_type},
                )

        await aiofiles.os.makedirs(self.base_path, exist_ok=True)

        written: list[str] = []
        try:
            for index, image in enumerate(images):
                ext = Path(image.filename).suffix.lower()
                if ext not in ALLOWED_EXTENSIONS:
                    ext = ".png"
                filename = f"{prompt_id}-{index}-{uuid4().hex[:8]}{ext}"
                async with aiofiles.open(self.base_path / filename, "wb") as f:
                    await f.write(image.data)
                written.append(self._url_for(filename))
        except OSError as e:
            logger.error("Failed to save images for prompt %s: %s", prompt_id, e)
            await self.delete_urls(written)
            raise StorageError(
                message="Failed to save uploaded images",
                details={"prompt_id": str(prompt_id)},
            ) from e

        logger.info("Saved %d image(s) for prompt %s", len(written), prompt_id)
        return written

    async def delete_urls(self, urls: list[str]) -> int:
        """Remove files previously written by save_prompt_images."""
        deleted = 0
        for url in urls:
            path = self._path_for_url(url)
            if path is None:
                continue
            try:
                await aiofiles.os.remove(path)
                deleted += 1
            except FileNotFoundError:
                continue
            except OSError as e:
                logger.error("Failed to delete image %s: %s", path, e)
        return deleted
