"""Object storage for office images."""

from __future__ import annotations

import logging
import os
from abc import ABC, abstractmethod
from uuid import uuid4

from django.conf import settings  # type: ignore
from django.core.files.storage import Storage, default_storage  # type: ignore
from django.utils.module_loading import import_string  # type: ignore

logger = logging.getLogger(__name__)


class ImageStorage(ABC):
    """Persists uploaded files and hands back the stored path."""

    @abstractmethod
    def store(self, file) -> str:  # type: ignore
        """Persist ``file`` and return its path."""

    @abstractmethod
    def delete(self, path: str) -> None:
        """Remove the file at ``path``; missing files are ignored."""


class DjangoImageStorage(ImageStorage):
    """Stores images on a Django storage backend (``default_storage`` by default)."""

    def __init__(self, storage: Storage | None = None, directory: str = "offices"):
        self.storage = storage or default_storage
        self.directory = directory

    def store(self, file) -> str:  # type: ignore
        extension = os.path.splitext(getattr(file, "name", ""))[1].lower()
        path = self.storage.save(f"{self.directory}/{uuid4().hex}{extension}", file)
        logger.info(f"Stored office image at {path}")
        return path

    def delete(self, path: str) -> None:
        self.storage.delete(path)
        logger.info(f"Deleted office image {path}")


def get_image_storage() -> ImageStorage:
    backend = getattr(settings, "OFFICE_IMAGE_STORAGE", "apps.offices.storage.DjangoImageStorage")
    return import_string(backend)()
