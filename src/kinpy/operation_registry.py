"""Registry binding request types to the operations that execute them."""

from typing import Any, Dict, Optional, Type

from .logging import DefaultLogger, Logger
from .transaction import PaginatedOperation


class OperationRegistry:
    """
    Maps each request type to exactly one operation class.

    Every client owns its own registry, so registering an operation never
    affects another client.
    """

    def __init__(self, logger: Optional[Logger] = None):
        """
        Initialize the registry.

        Args:
            logger: Optional logger instance for logging events
        """
        self._operations: Dict[type, Type[PaginatedOperation]] = {}
        self.logger = logger or DefaultLogger(name="kinpy-operations")

    def register_operation(
        self, request_type: type, operation_cls: Type[PaginatedOperation]
    ) -> None:
        """
        Register the operation executing ``request_type``.

        Args:
            request_type: The request class
            operation_cls: The operation class handling it

        Raises:
            TypeError: If either argument is not a class, or the operation does
                not implement the PaginatedOperation protocol when built with
                a ``logger`` keyword
        """
        if not isinstance(request_type, type):
            raise TypeError(f"Expected a request class, got {type(request_type)}")
        if not isinstance(operation_cls, type):
            raise TypeError(f"Expected an operation class, got {type(operation_cls)}")

        try:
            operation = operation_cls(logger=self.logger)
        except TypeError as e:
            raise TypeError(
                f"Class {operation_cls.__name__} must accept a logger keyword argument"
            ) from e

        # runtime_checkable only sees members on instances
        if not isinstance(operation, PaginatedOperation):
            raise TypeError(
                f"Class {operation_cls.__name__} does not implement the PaginatedOperation protocol"
            )

        self._operations[request_type] = operation_cls
        self.logger.debug(f"Registered operation {operation_cls.__name__}: {request_type.__name__}")

    def unregister_operation(self, request_type: type) -> None:
        """
        Remove the operation registered for ``request_type``.

        Raises:
            KeyError: If nothing is registered for the request type
        """
        if request_type not in self._operations:
            raise KeyError(f"No operation registered for {request_type.__name__}")

        del self._operations[request_type]
        self.logger.debug(f"Unregistered operation: {request_type.__name__}")

    def get_operation(self, request: Any, logger: Optional[Logger] = None) -> PaginatedOperation:
        """
        Get an operation instance for a request.

        Args:
            request: The request to execute
            logger: Logger handed to the operation (the registry's own if None)

        Returns:
            A new instance of the operation registered for the request's type

        Raises:
            KeyError: If no operation is registered for the request's type
        """
        request_type = type(request)
        if request_type not in self._operations:
            raise KeyError(f"No operation registered for {request_type.__name__}")

        return self._operations[request_type](logger=logger if logger is not None else self.logger)

    def list_operations(self) -> Dict[type, Type[PaginatedOperation]]:
        """Return a copy of the request type to operation class mapping."""
        return self._operations.copy()

    def register_builtin_operations(self) -> None:
        """Register the operations shipped with kinpy."""
        # Import here to avoid circular imports
        from .commands import ListStreams, ListStreamsOperation

        self.register_operation(ListStreams, ListStreamsOperation)
