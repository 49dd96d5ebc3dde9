__version__ = "0.1.0"

from .client import KinesisClient
from .commands import (
    ListStreams,
    ListStreamsExceptions,
    ListStreamsOperation,
    ListStreamsResponse,
)
from .config import KinesisConfiguration
from .exceptions import (
    CredentialsError,
    KinpyError,
    MalformedResponseError,
    ServiceError,
    TransportError,
)
from .operation_registry import OperationRegistry
from .pagination import Page, drain, iterate_pages
from .transaction import IteratedTransaction, ListResponse, PaginatedOperation, Transaction
from .types import KinesisAction, KinesisMetadata, StreamName

__all__ = [
    "KinesisClient",
    "KinesisConfiguration",
    "OperationRegistry",
    # Contracts
    "Transaction",
    "IteratedTransaction",
    "ListResponse",
    "PaginatedOperation",
    # Pagination
    "Page",
    "iterate_pages",
    "drain",
    # Operations
    "ListStreams",
    "ListStreamsResponse",
    "ListStreamsExceptions",
    "ListStreamsOperation",
    # Types
    "KinesisAction",
    "KinesisMetadata",
    "StreamName",
    # Exceptions
    "KinpyError",
    "TransportError",
    "ServiceError",
    "MalformedResponseError",
    "CredentialsError",
]
