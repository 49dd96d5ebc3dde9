"""Shared Kinesis types: action identifiers, stream names and response metadata."""

from dataclasses import dataclass
from enum import Enum
from typing import Annotated, Mapping, Optional

from pydantic import StringConstraints

API_VERSION = "2013-12-02"
TARGET_PREFIX = "Kinesis_" + API_VERSION.replace("-", "")

StreamName = Annotated[
    str, StringConstraints(min_length=1, max_length=128, pattern=r"^[a-zA-Z0-9_.-]+$")
]
"""Name of a Kinesis stream, unique per account and region."""


class KinesisAction(str, Enum):
    """Routing catalog of the Kinesis API: every action the service accepts
    through the ``X-Amz-Target`` header.

    Only actions with an operation in ``kinpy.commands`` are executed; the
    rest name the targets further operations register under. The pagination
    core treats these as opaque; only the signer reads them.
    """

    ADD_TAGS_TO_STREAM = "AddTagsToStream"
    CREATE_STREAM = "CreateStream"
    DELETE_STREAM = "DeleteStream"
    DESCRIBE_STREAM = "DescribeStream"
    GET_RECORDS = "GetRecords"
    GET_SHARD_ITERATOR = "GetShardIterator"
    LIST_STREAMS = "ListStreams"
    LIST_TAGS_FOR_STREAM = "ListTagsForStream"
    MERGE_SHARDS = "MergeShards"
    PUT_RECORD = "PutRecord"
    REMOVE_TAGS_FROM_STREAM = "RemoveTagsFromStream"
    SPLIT_SHARD = "SplitShard"

    @property
    def target(self) -> str:
        """Value of the ``X-Amz-Target`` header for this action."""
        return f"{TARGET_PREFIX}.{self.value}"


@dataclass(frozen=True)
class KinesisMetadata:
    """Metadata of a single round trip."""

    status: int
    request_id: Optional[str] = None

    @classmethod
    def from_headers(cls, status: int, headers: Mapping[str, str]) -> "KinesisMetadata":
        request_id = None
        for key, value in headers.items():
            if key.lower() == "x-amzn-requestid":
                request_id = value
                break
        return cls(status=status, request_id=request_id)
