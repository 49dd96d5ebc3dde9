"""
Pagination driver for iterated transactions.

The driver owns no state between calls: everything needed to resume a listing
is the ``next_request`` of the last completed page. A caller that persists it
can pick the listing up later by passing it back in as the initial request.
"""

from dataclasses import dataclass
from typing import AsyncIterator, Awaitable, Callable, Generic, List, Optional

from .logging import DefaultLogger, Logger
from .transaction import ItemT, PaginatedOperation, RequestT, ResponseT

Send = Callable[[RequestT], Awaitable[ResponseT]]


@dataclass(frozen=True)
class Page(Generic[RequestT, ResponseT, ItemT]):
    """
    One completed round trip of a paginated listing.

    Attributes:
        number: 1-based position of the page within this drain
        request: Request that produced the page
        response: Decoded response
        items: Items of this page, in service order
        next_request: Request for the following page (None if this is the last)
    """

    number: int
    request: RequestT
    response: ResponseT
    items: List[ItemT]
    next_request: Optional[RequestT]

    @property
    def has_more(self) -> bool:
        """Returns True if another page will be requested."""
        return self.next_request is not None


def _check_max_pages(max_pages: Optional[int]) -> None:
    if max_pages is not None and max_pages <= 0:
        raise ValueError("max_pages must be a positive integer")


async def iterate_pages(
    send: Send,
    operation: PaginatedOperation,
    request: RequestT,
    max_pages: Optional[int] = None,
    logger: Optional[Logger] = None,
) -> AsyncIterator[Page]:
    """Yield pages until the operation stops deriving a next request.

    Args:
        send: Executes one round trip for a request
        operation: Decides continuation and extracts items
        request: Request for the first page
        max_pages: Stop after this many pages (None for all)
        logger: Optional logger instance

    Yields:
        Each completed page, in call order

    Raises:
        ValueError: If ``max_pages`` is not positive
        Whatever ``send`` raises, as soon as it raises
    """
    _check_max_pages(max_pages)
    logger = logger or DefaultLogger(name="kinpy-pagination")

    current: Optional[RequestT] = request
    number = 0

    while current is not None:
        response = await send(current)
        number += 1

        items = operation.items(response)
        next_request = operation.next_request(current, response)
        logger.debug(
            f"Fetched page {number} with {len(items)} items",
            action=operation.action.value,
            has_more=next_request is not None,
        )

        yield Page(
            number=number,
            request=current,
            response=response,
            items=items,
            next_request=next_request,
        )

        if next_request is not None and max_pages is not None and number >= max_pages:
            logger.info(f"Reached maximum page count: {max_pages}")
            break

        current = next_request

    logger.debug(f"Finished after {number} pages", action=operation.action.value)


async def drain(
    send: Send,
    operation: PaginatedOperation,
    request: RequestT,
    max_pages: Optional[int] = None,
    logger: Optional[Logger] = None,
) -> AsyncIterator[ItemT]:
    """Yield every item of every page, concatenated in call order.

    Items are neither filtered nor deduplicated. Items of pages already
    received stay yielded when a later round trip fails.
    """
    async for page in iterate_pages(send, operation, request, max_pages=max_pages, logger=logger):
        for item in page.items:
            yield item
