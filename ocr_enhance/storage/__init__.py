"""Image storage backends."""

from .base import ImageStore
from .local import LocalImageStore, normalize_extension
from .references import HashReferenceGenerator, RandomReferenceGenerator, ReferenceGenerator

__all__ = [
    "ImageStore",
    "LocalImageStore",
    "normalize_extension",
    "HashReferenceGenerator",
    "RandomReferenceGenerator",
    "ReferenceGenerator",
]
