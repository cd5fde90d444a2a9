"""
Reference generation strategies for newly stored images.
"""

import hashlib
import uuid
from abc import ABC, abstractmethod


class ReferenceGenerator(ABC):
    """Creates a storage reference for image bytes."""

    @abstractmethod
    def create_reference(self, image_bytes: bytes) -> str:
        pass


class RandomReferenceGenerator(ReferenceGenerator):
    """Short random references such as 'A1B2C3D4'."""

    def create_reference(self, image_bytes: bytes) -> str:
        return uuid.uuid4().hex[:8].upper()


class HashReferenceGenerator(ReferenceGenerator):
    """
    Content-addressed references.

    The same bytes always produce the same reference. Saving the same
    bytes twice still yields two references, since the store appends a
    disambiguator to taken ones.
    """

    def __init__(self, prefix: str = "img_", length: int = 16):
        if length <= 0 or length > 64:
            raise ValueError("length must be between 1 and 64")
        self.prefix = prefix
        self.length = length

    def create_reference(self, image_bytes: bytes) -> str:
        digest = hashlib.sha256(image_bytes).hexdigest()
        return f"{self.prefix}{digest[:self.length]}"
