from .list_streams import (
    ListStreams,
    ListStreamsExceptions,
    ListStreamsOperation,
    ListStreamsResponse,
)

__all__ = [
    "ListStreams",
    "ListStreamsResponse",
    "ListStreamsExceptions",
    "ListStreamsOperation",
]
