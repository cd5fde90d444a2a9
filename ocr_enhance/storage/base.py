from abc import ABC, abstractmethod
from typing import BinaryIO

from ocr_enhance.schemas.image import ImageAsset


class ImageStore(ABC):
    """
    Abstract storage for images addressed by opaque references.

    Implementations decide how references map to physical locations and
    how reference collisions on save are avoided.
    """

    @abstractmethod
    async def save(
        self,
        image: bytes | BinaryIO,
        extension: str,
        suggested_reference: str | None = None,
    ) -> str:
        """
        Store a new image.

        Args:
            image: Encoded image bytes or stream.
            extension: File extension, with or without the leading dot.
            suggested_reference: Preferred reference; a fresh one is generated if None.

        Returns:
            The reference the image was stored under.
        """
        pass

    @abstractmethod
    async def exists(self, reference: str) -> bool:
        """Check whether an image is stored under the reference."""
        pass

    @abstractmethod
    async def open_read(self, reference: str) -> BinaryIO:
        """
        Open a stored image for reading.

        Raises:
            ImageNotFoundError: If nothing is stored under the reference.
        """
        pass

    @abstractmethod
    async def save_variant(
        self,
        image: bytes | BinaryIO,
        base_reference: str,
        suffix: str,
        extension: str,
    ) -> str:
        """
        Store a derivative of an existing image.

        Args:
            image: Encoded image bytes or stream.
            base_reference: Reference of the source image.
            suffix: Variant suffix appended to the base reference.
            extension: File extension.

        Returns:
            The reference of the stored variant.
        """
        pass

    async def describe(self, reference: str) -> ImageAsset:
        """
        Return metadata for a stored image.

        Raises:
            ImageNotFoundError: If nothing is stored under the reference.
        """
        raise NotImplementedError(f"{type(self).__name__} does not provide image metadata")
