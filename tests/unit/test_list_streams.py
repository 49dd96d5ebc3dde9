import json

import pytest
from pydantic import ValidationError

from kinpy.commands.list_streams import (
    ListStreams,
    ListStreamsExceptions,
    ListStreamsOperation,
    ListStreamsResponse,
)
from kinpy.exceptions import MalformedResponseError
from kinpy.types import KinesisAction


@pytest.fixture
def operation():
    return ListStreamsOperation()


class TestListStreamsRequest:
    def test_defaults(self):
        request = ListStreams()
        assert request.exclusive_start_stream_name is None
        assert request.limit is None

    @pytest.mark.parametrize("limit", [0, -1, 10001])
    def test_limit_out_of_range(self, limit):
        with pytest.raises(ValidationError):
            ListStreams(limit=limit)

    @pytest.mark.parametrize("name", ["", "has space", "slash/name", "x" * 129])
    def test_invalid_stream_name(self, name):
        with pytest.raises(ValidationError):
            ListStreams(exclusive_start_stream_name=name)

    def test_request_is_immutable(self):
        request = ListStreams(limit=10)
        with pytest.raises(ValidationError):
            request.limit = 20


class TestEncode:
    def test_empty_request_omits_optional_fields(self, operation):
        assert json.loads(operation.encode(ListStreams())) == {}

    def test_absent_cursor_is_omitted_not_null(self, operation):
        body = json.loads(operation.encode(ListStreams(limit=10)))
        assert body == {"Limit": 10}
        assert "ExclusiveStartStreamName" not in body

    def test_cursor_and_limit(self, operation):
        body = json.loads(
            operation.encode(ListStreams(exclusive_start_stream_name="orders", limit=25))
        )
        assert body == {"ExclusiveStartStreamName": "orders", "Limit": 25}

    def test_limit_is_not_sent_as_stream_name(self, operation):
        # Earlier Kinesis bindings sent the limit under "StreamName"; the API expects "Limit"
        body = json.loads(operation.encode(ListStreams(limit=5)))
        assert body["Limit"] == 5
        assert "StreamName" not in body


class TestDecode:
    def test_decode_page(self, operation):
        response = operation.decode(b'{"HasMoreStreams": true, "StreamNames": ["a", "b"]}')
        assert response == ListStreamsResponse(has_more_streams=True, stream_names=("a", "b"))

    def test_extra_fields_are_ignored(self, operation):
        body = json.dumps(
            {"HasMoreStreams": False, "StreamNames": ["a"], "NextToken": "abc", "Extra": {}}
        ).encode()
        response = operation.decode(body)
        assert response.has_more_streams is False
        assert response.stream_names == ("a",)

    @pytest.mark.parametrize(
        "payload",
        [
            {"StreamNames": ["a"]},
            {"HasMoreStreams": True},
            {},
        ],
    )
    def test_missing_required_field(self, operation, payload):
        with pytest.raises(MalformedResponseError):
            operation.decode(json.dumps(payload).encode())

    @pytest.mark.parametrize(
        "payload",
        [
            {"HasMoreStreams": "true", "StreamNames": []},
            {"HasMoreStreams": 1, "StreamNames": []},
            {"HasMoreStreams": False, "StreamNames": "a"},
            {"HasMoreStreams": False, "StreamNames": ["a", 2]},
            {"HasMoreStreams": False, "StreamNames": None},
        ],
    )
    def test_mistyped_field(self, operation, payload):
        with pytest.raises(MalformedResponseError):
            operation.decode(json.dumps(payload).encode())

    @pytest.mark.parametrize("body", [b"", b"not json", b"[1, 2]", b"\xff\xfe"])
    def test_not_a_json_object(self, operation, body):
        with pytest.raises(MalformedResponseError) as excinfo:
            operation.decode(body)
        assert excinfo.value.body == body


class TestNextRequest:
    def test_terminates_when_no_more_streams(self, operation):
        request = ListStreams(limit=2)
        response = ListStreamsResponse(has_more_streams=False, stream_names=("a", "b"))
        assert operation.next_request(request, response) is None

    def test_terminates_on_empty_page_without_more(self, operation):
        response = ListStreamsResponse(has_more_streams=False, stream_names=())
        assert operation.next_request(ListStreams(), response) is None

    def test_terminates_on_empty_page_flagged_more(self, operation):
        response = ListStreamsResponse(has_more_streams=True, stream_names=())
        assert operation.next_request(ListStreams(limit=3), response) is None

    def test_advances_cursor_to_last_name(self, operation):
        request = ListStreams(limit=3)
        response = ListStreamsResponse(has_more_streams=True, stream_names=("a", "b", "c"))

        next_request = operation.next_request(request, response)

        assert next_request == ListStreams(exclusive_start_stream_name="c", limit=3)

    def test_limit_is_carried_not_page_size(self, operation):
        request = ListStreams(exclusive_start_stream_name="a", limit=10)
        response = ListStreamsResponse(has_more_streams=True, stream_names=("b",))

        next_request = operation.next_request(request, response)

        assert next_request.limit == 10
        assert next_request.exclusive_start_stream_name == "b"

    def test_absent_limit_stays_absent(self, operation):
        response = ListStreamsResponse(has_more_streams=True, stream_names=("a",))
        assert operation.next_request(ListStreams(), response).limit is None

    def test_previous_request_is_not_modified(self, operation):
        request = ListStreams(limit=3)
        response = ListStreamsResponse(has_more_streams=True, stream_names=("a",))

        operation.next_request(request, response)

        assert request.exclusive_start_stream_name is None


class TestItemsAndFaults:
    def test_items_preserve_order(self, operation):
        response = ListStreamsResponse(has_more_streams=False, stream_names=("b", "a", "b"))
        assert operation.items(response) == ["b", "a", "b"]

    def test_action(self, operation):
        assert operation.action is KinesisAction.LIST_STREAMS
        assert operation.action.target == "Kinesis_20131202.ListStreams"

    def test_fault_lookup(self):
        assert (
            ListStreamsExceptions.from_code("LimitExceededException")
            is ListStreamsExceptions.LIMIT_EXCEEDED
        )
        assert ListStreamsExceptions.from_code("ResourceNotFoundException") is None
