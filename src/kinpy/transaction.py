"""Contracts every Kinesis operation implements.

An operation object is stateless: it knows how to put a request on the wire,
how to read a response off it, and, for list operations, how to get from one
page to the next. The client and the pagination driver only talk to
operations through these protocols.
"""

from typing import ClassVar, List, Optional, Protocol, TypeVar, runtime_checkable

from .types import KinesisAction

RequestT = TypeVar("RequestT")
ResponseT = TypeVar("ResponseT")
ItemT = TypeVar("ItemT")


@runtime_checkable
class Transaction(Protocol[RequestT, ResponseT]):
    """One signed request mapped to exactly one response type."""

    action: ClassVar[KinesisAction]

    def encode(self, request: RequestT) -> bytes:
        """
        Serialize a request to its wire body.

        Args:
            request: The request value

        Returns:
            The JSON body to sign and send
        """
        ...

    def decode(self, body: bytes) -> ResponseT:
        """
        Parse a wire body into a response.

        Args:
            body: The raw response body

        Returns:
            The decoded response

        Raises:
            MalformedResponseError: If a required field is missing or mistyped
        """
        ...


@runtime_checkable
class IteratedTransaction(Transaction[RequestT, ResponseT], Protocol):
    """A transaction whose result may span several pages."""

    def next_request(self, request: RequestT, response: ResponseT) -> Optional[RequestT]:
        """
        Derive the request for the page after ``response``.

        Args:
            request: The request that produced ``response``
            response: The page just received

        Returns:
            The next request, or None if iteration is over
        """
        ...


@runtime_checkable
class ListResponse(Protocol[ResponseT, ItemT]):
    """Exposes the items of a page, independent of its pagination metadata."""

    def items(self, response: ResponseT) -> List[ItemT]:
        ...


@runtime_checkable
class PaginatedOperation(
    IteratedTransaction[RequestT, ResponseT],
    ListResponse[ResponseT, ItemT],
    Protocol[RequestT, ResponseT, ItemT],
):
    """An iterated transaction over a homogeneous item collection."""
