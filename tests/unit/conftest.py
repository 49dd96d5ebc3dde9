import json
from unittest.mock import AsyncMock, MagicMock

import pytest
from aiohttp import ClientSession

from kinpy.client import KinesisClient
from kinpy.config import KinesisConfiguration


@pytest.fixture
def config():
    return KinesisConfiguration(
        region="us-east-1",
        access_key_id="AKIDEXAMPLE",
        secret_access_key="wJalrXUtnFEMI/K7MDENG+bPxRfiCYEXAMPLEKEY",
    )


@pytest.fixture
def mock_response_factory():
    """
    Factory fixture to create mock aiohttp responses carrying a Kinesis body.
    """

    def _create_response(json_data=None, status=200, body=None, request_id="req-0001"):
        mock_response = MagicMock()
        mock_response.status = status
        mock_response.headers = {"x-amzn-RequestId": request_id} if request_id else {}

        if body is None:
            body = json.dumps(json_data if json_data is not None else {}).encode("utf-8")
        mock_response.read = AsyncMock(return_value=body)

        return mock_response

    return _create_response


@pytest.fixture
def page_factory(mock_response_factory):
    """Factory fixture for ListStreams page responses."""

    def _create_page(names, has_more, **kwargs):
        return mock_response_factory(
            json_data={"HasMoreStreams": has_more, "StreamNames": list(names)}, **kwargs
        )

    return _create_page


@pytest.fixture
def mock_client_session():
    def _create_session(response=None, side_effect=None):
        mock_session = MagicMock(spec=ClientSession)
        mock_session.closed = False

        async def mock_close():
            mock_session.closed = True

        mock_session.close = mock_close

        if side_effect is not None:
            mock_session.request = AsyncMock(side_effect=side_effect)
        else:
            mock_session.request = AsyncMock(return_value=response)

        return mock_session

    return _create_session


@pytest.fixture
async def client_factory(config, mock_client_session):
    """
    Factory fixture that provides KinesisClient instances bound to a mock session.

    Returns the client and its session so tests can inspect outgoing requests.
    """
    clients = []

    async def _create_client(response=None, side_effect=None, logger=None):
        session = mock_client_session(response=response, side_effect=side_effect)
        client = KinesisClient(config=config, session=session, logger=logger)
        await client.__aenter__()
        clients.append(client)
        return client, session

    yield _create_client

    for client in clients:
        await client.__aexit__(None, None, None)


@pytest.fixture
def sent_bodies():
    """Decode the JSON bodies of every request sent through a mock session."""

    def _bodies(session):
        return [json.loads(call.kwargs["data"]) for call in session.request.call_args_list]

    return _bodies
