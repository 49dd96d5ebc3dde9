"""ListStreams: list the names of the streams of the calling account.

The service returns at most ``Limit`` names per call (10 when no limit is
given) together with a ``HasMoreStreams`` flag. The next page is requested by
passing the last returned name as ``ExclusiveStartStreamName``.

ListStreams is limited to 5 transactions per second per account.
"""

import json
from enum import Enum
from typing import Any, ClassVar, Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

from ..exceptions import MalformedResponseError
from ..logging import DefaultLogger, Logger
from ..types import KinesisAction, StreamName


class ListStreams(BaseModel):
    """Request for one page of stream names."""

    exclusive_start_stream_name: Optional[StreamName] = None
    limit: Optional[int] = Field(default=None, ge=1, le=10000)

    model_config = ConfigDict(frozen=True)


class ListStreamsResponse(BaseModel):
    """One page of stream names."""

    has_more_streams: bool
    stream_names: Tuple[str, ...] = ()

    model_config = ConfigDict(frozen=True)


class ListStreamsExceptions(str, Enum):
    """Server-side faults documented for ListStreams.

    Never raised by kinpy itself; carried in ``ServiceError.fault``.
    """

    LIMIT_EXCEEDED = "LimitExceededException"  # HTTP 400

    @classmethod
    def from_code(cls, code: str) -> Optional["ListStreamsExceptions"]:
        for fault in cls:
            if fault.value == code:
                return fault
        return None


class ListStreamsOperation:
    """Wire format and paging rules of ListStreams."""

    action: ClassVar[KinesisAction] = KinesisAction.LIST_STREAMS
    faults: ClassVar[type] = ListStreamsExceptions

    def __init__(self, logger: Optional[Logger] = None):
        self.logger = logger or DefaultLogger(name="kinpy-list-streams")

    def encode(self, request: ListStreams) -> bytes:
        # Absent fields are omitted, never sent as null
        body: Dict[str, Any] = {}
        if request.exclusive_start_stream_name is not None:
            body["ExclusiveStartStreamName"] = request.exclusive_start_stream_name
        if request.limit is not None:
            body["Limit"] = request.limit
        return json.dumps(body).encode("utf-8")

    def decode(self, body: bytes) -> ListStreamsResponse:
        try:
            data = json.loads(body)
        except (UnicodeDecodeError, ValueError) as e:
            raise MalformedResponseError(
                f"ListStreams response is not valid JSON: {e}", body=body, original_error=e
            ) from e

        if not isinstance(data, dict):
            raise MalformedResponseError("ListStreams response is not a JSON object", body=body)

        if "HasMoreStreams" not in data:
            raise MalformedResponseError("ListStreams response lacks HasMoreStreams", body=body)
        has_more = data["HasMoreStreams"]
        if not isinstance(has_more, bool):
            raise MalformedResponseError(
                f"HasMoreStreams must be a boolean, got {type(has_more).__name__}", body=body
            )

        if "StreamNames" not in data:
            raise MalformedResponseError("ListStreams response lacks StreamNames", body=body)
        names = data["StreamNames"]
        if not isinstance(names, list) or not all(isinstance(name, str) for name in names):
            raise MalformedResponseError("StreamNames must be an array of strings", body=body)

        return ListStreamsResponse(has_more_streams=has_more, stream_names=tuple(names))

    def items(self, response: ListStreamsResponse) -> List[str]:
        return list(response.stream_names)

    def next_request(
        self, request: ListStreams, response: ListStreamsResponse
    ) -> Optional[ListStreams]:
        """Continue after the last name of the page while the service reports more.

        A page flagged ``HasMoreStreams`` that carries no names ends the
        iteration: re-issuing the same request could loop forever and there is
        no cursor to continue from. ``limit`` is a per-page setting and is
        carried over unchanged.
        """
        last = response.stream_names[-1] if response.stream_names else None

        if response.has_more_streams and last is not None:
            return request.model_copy(update={"exclusive_start_stream_name": last})

        if response.has_more_streams:
            self.logger.warning(
                "Empty page flagged HasMoreStreams, ending iteration",
                cursor=request.exclusive_start_stream_name,
            )
        return None
