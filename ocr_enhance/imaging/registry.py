from typing import Type

from ocr_enhance.imaging.base import ImageOperation, OperationKind


class OperationRegistry:
    """
    Registry for image operation implementations.

    Operations are registered by kind and looked up by the processor when
    executing plan steps.
    """

    _operations: dict[OperationKind, Type[ImageOperation]] = {}

    @classmethod
    def register(cls, operation_class: Type[ImageOperation]) -> Type[ImageOperation]:
        """
        Register an operation class.

        Can be used as a decorator:
            @OperationRegistry.register
            class RotateOperation(ImageOperation):
                ...

        Args:
            operation_class: The operation class to register.

        Returns:
            The same operation class (for decorator usage).
        """
        kind = operation_class().kind
        cls._operations[kind] = operation_class
        return operation_class

    @classmethod
    def create_operation(cls, kind: OperationKind) -> ImageOperation | None:
        """
        Create an instance of an operation.

        Args:
            kind: The operation kind.

        Returns:
            An operation instance, or None if the kind is not registered.
        """
        operation_class = cls._operations.get(kind)
        if operation_class is None:
            return None
        return operation_class()

    @classmethod
    def list_registered(cls) -> list[str]:
        """List all registered operation names."""
        return [kind.value for kind in cls._operations]

    @classmethod
    def is_registered(cls, kind: OperationKind) -> bool:
        """Check if an operation is registered."""
        return kind in cls._operations
