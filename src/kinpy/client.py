import asyncio
import json
from contextlib import AsyncExitStack
from typing import Any, AsyncContextManager, AsyncIterator, ClassVar, Dict, List, Optional

from aiohttp import ClientError, ClientSession, ClientTimeout
from pydantic import BaseModel, ConfigDict, Field

from . import __version__, pagination
from .commands import ListStreams
from .config import KinesisConfiguration
from .exceptions import ServiceError, TransportError
from .logging import DefaultLogger, Logger
from .operation_registry import OperationRegistry
from .pagination import Page
from .signing import RequestSigner
from .transaction import PaginatedOperation
from .types import KinesisAction, KinesisMetadata


def _parse_error_body(body: bytes) -> Dict[str, str]:
    """Extract ``code`` and ``message`` from a Kinesis JSON error body."""
    try:
        data = json.loads(body) if body else {}
    except ValueError:
        data = {}
    if not isinstance(data, dict):
        data = {}

    # "__type" may be namespaced, e.g. "com.amazonaws.kinesis#LimitExceededException"
    code = str(data.get("__type") or "Unknown").rsplit("#", 1)[-1]
    message = data.get("message") or data.get("Message")
    if not message:
        message = body.decode("utf-8", errors="replace") if body else "no error message"
    return {"code": code, "message": str(message)}


class KinesisClient(BaseModel, AsyncContextManager["KinesisClient"]):
    """Async Kinesis client executing signed JSON transactions."""

    config: KinesisConfiguration = Field(default_factory=KinesisConfiguration.from_env)
    session: Optional[ClientSession] = None
    headers: Dict[str, str] = None
    timeout_obj: Optional[ClientTimeout] = None
    logger: Optional[Logger] = None
    _exit_stack: Optional[AsyncExitStack] = None
    _owns_session: bool = False
    _registry: Optional[OperationRegistry] = None
    _signer: Optional[RequestSigner] = None

    DEFAULT_USER_AGENT: ClassVar[str] = f"kinpy/{__version__}"

    DEFAULT_HEADERS: ClassVar[Dict[str, str]] = {
        "Accept": "application/json",
        "User-Agent": DEFAULT_USER_AGENT,
    }

    model_config = ConfigDict(arbitrary_types_allowed=True)

    def __init__(self, **data):
        super().__init__(**data)
        default_headers = self.DEFAULT_HEADERS.copy()
        if self.headers:
            default_headers.update(self.headers)
        self.headers = default_headers

        self.timeout_obj = ClientTimeout(total=self.config.timeout)

        if self.logger is None:
            self.logger = DefaultLogger(name="kinpy-client")

        self._registry = OperationRegistry(logger=self.logger)
        self._registry.register_builtin_operations()

    async def __aenter__(self) -> "KinesisClient":
        """Enter the async context manager."""
        self._exit_stack = AsyncExitStack()
        if self.session is None:
            self.session = await self._exit_stack.enter_async_context(
                ClientSession(timeout=self.timeout_obj)
            )
            self._owns_session = True
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Exit the async context manager."""
        try:
            if self._exit_stack:
                await self._exit_stack.aclose()
        finally:
            self._exit_stack = None
            # A caller-supplied session stays with the caller
            if self._owns_session:
                self.session = None
                self._owns_session = False

    def get_registry(self) -> OperationRegistry:
        """Get the operation registry of this client."""
        return self._registry

    async def get_signer(self) -> RequestSigner:
        """Get the request signer, resolving credentials on first use.

        The botocore credential chain may block on files or the instance
        metadata service, so it runs in a worker thread.
        """
        if self._signer is None:
            credentials = await asyncio.to_thread(self.config.resolve_credentials)
            self._signer = RequestSigner(
                credentials=credentials,
                region=self.config.region,
                service_name=self.config.SERVICE_NAME,
                logger=self.logger,
            )
        return self._signer

    async def sign_and_send(
        self, action: KinesisAction, body: bytes, faults: Optional[type] = None
    ) -> bytes:
        """Sign a serialized request, post it, and return the raw response body.

        Args:
            action: Action routed through ``X-Amz-Target``
            body: Serialized request body
            faults: Enumeration with a ``from_code`` lookup for the
                operation's documented service faults

        Returns:
            The response body

        Raises:
            TransportError: If the request could not be completed
            ServiceError: If the service answered with an error status
        """
        if self.session is None:
            raise TransportError("Session not initialized. Use async with context.")

        url = self.config.endpoint_url
        headers = self.headers.copy()
        signer = await self.get_signer()
        headers.update(signer.sign(url, action, body))

        self.logger.debug(f"Sending {action.value} request", url=url, size=len(body))

        try:
            response = await self.session.request(
                method="POST",
                url=url,
                data=body,
                headers=headers,
                timeout=self.timeout_obj,
            )
            payload = await response.read()
        except asyncio.TimeoutError as e:
            raise TransportError(f"{action.value} request timed out", original_error=e) from e
        except ClientError as e:
            raise TransportError(f"{action.value} request failed: {e}", original_error=e) from e

        metadata = KinesisMetadata.from_headers(response.status, response.headers)
        self.logger.debug(
            f"Received {action.value} response",
            status=metadata.status,
            request_id=metadata.request_id,
        )

        if metadata.status >= 400:
            error = _parse_error_body(payload)
            fault = faults.from_code(error["code"]) if faults is not None else None
            self.logger.error(
                f"{action.value} failed: {error['code']}",
                status=metadata.status,
                request_id=metadata.request_id,
            )
            raise ServiceError(
                error["message"],
                code=error["code"],
                status=metadata.status,
                metadata=metadata,
                fault=fault,
            )

        return payload

    def _resolve_operation(self, request: Any, operation: Optional[PaginatedOperation]):
        if operation is not None:
            return operation
        return self._registry.get_operation(request, logger=self.logger)

    async def transact(self, request: Any, operation: Optional[PaginatedOperation] = None) -> Any:
        """Execute a single round trip for ``request``.

        Args:
            request: The request value
            operation: Operation to use (looked up in the registry if None)

        Returns:
            The decoded response

        Raises:
            TransportError, ServiceError, MalformedResponseError: Never retried
        """
        operation = self._resolve_operation(request, operation)
        body = operation.encode(request)
        payload = await self.sign_and_send(
            operation.action, body, faults=getattr(operation, "faults", None)
        )
        return operation.decode(payload)

    async def pages(
        self,
        request: Any,
        operation: Optional[PaginatedOperation] = None,
        max_pages: Optional[int] = None,
    ) -> AsyncIterator[Page]:
        """Yield each page of a paginated listing, starting at ``request``."""
        operation = self._resolve_operation(request, operation)

        async def send(current):
            return await self.transact(current, operation)

        async for page in pagination.iterate_pages(
            send, operation, request, max_pages=max_pages, logger=self.logger
        ):
            yield page

    async def drain(
        self,
        request: Any,
        operation: Optional[PaginatedOperation] = None,
        max_pages: Optional[int] = None,
    ) -> AsyncIterator[Any]:
        """Yield every item of a paginated listing, page after page."""
        operation = self._resolve_operation(request, operation)

        async def send(current):
            return await self.transact(current, operation)

        async for item in pagination.drain(
            send, operation, request, max_pages=max_pages, logger=self.logger
        ):
            yield item

    async def get_all_items(
        self,
        request: Any,
        operation: Optional[PaginatedOperation] = None,
        max_pages: Optional[int] = None,
    ) -> List[Any]:
        """Collect every item of a paginated listing into a list.

        Args:
            request: Request for the first page
            operation: Operation to use (looked up in the registry if None)
            max_pages: Maximum number of pages to fetch (None for all)

        Returns:
            All items from all pages, in call order
        """
        items = [item async for item in self.drain(request, operation, max_pages=max_pages)]
        self.logger.info(f"Fetched {len(items)} items", request=type(request).__name__)
        return items

    async def list_streams(
        self,
        limit: Optional[int] = None,
        exclusive_start_stream_name: Optional[str] = None,
        max_pages: Optional[int] = None,
    ) -> List[str]:
        """List the stream names of the account.

        Args:
            limit: Maximum number of names per page
            exclusive_start_stream_name: Resume after this stream name
            max_pages: Maximum number of pages to fetch (None for all)

        Returns:
            Stream names in service order
        """
        request = ListStreams(
            exclusive_start_stream_name=exclusive_start_stream_name, limit=limit
        )
        return await self.get_all_items(request, max_pages=max_pages)
