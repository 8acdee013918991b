from __future__ import annotations

import logging
import time
from typing import Optional
from urllib.parse import urlparse

from django.conf import settings
from django.core.files.storage import Storage, default_storage
from django.core.files.uploadedfile import UploadedFile
from django.utils.text import get_valid_filename

from core.errors import StorefrontError

logger = logging.getLogger(__name__)


class ImageStorage:
    """
    Product image bucket on top of a Django storage backend.
    Images are addressed by their public URL; the file name is the last path segment.
    """

    def __init__(self, storage: Optional[Storage] = None, prefix: Optional[str] = None):
        self.storage = storage or default_storage
        self.prefix = (prefix or getattr(settings, "PRODUCT_IMAGE_PREFIX", "product-images")).strip("/")

    def upload(self, image: UploadedFile) -> str:
        """Store *image* under a timestamped name and return its public URL."""
        name = f"{self.prefix}/{int(time.time() * 1000)}-{get_valid_filename(image.name)}"
        saved = self.storage.save(name, image)
        if not saved:
            raise StorefrontError("Image upload failed")
        logger.info("Uploaded product image %s", saved)
        return self.storage.url(saved)

    def delete(self, url: str) -> None:
        image_name = urlparse(url or "").path.rstrip("/").split("/")[-1]
        if not image_name:
            raise StorefrontError("Invalid image filename or url")
        name = f"{self.prefix}/{image_name}"
        if self.storage.exists(name):
            self.storage.delete(name)
            logger.info("Deleted product image %s", name)
        else:
            logger.warning("Product image %s already gone", name)


def get_image_storage() -> ImageStorage:
    return ImageStorage()
