"""SigV4 signing of Kinesis JSON requests."""

from typing import Dict, Optional

from botocore.auth import SigV4Auth
from botocore.awsrequest import AWSRequest
from botocore.credentials import Credentials

from .logging import DefaultLogger, Logger
from .types import KinesisAction

CONTENT_TYPE = "application/x-amz-json-1.1"


class RequestSigner:
    """Produces the headers of a signed Kinesis ``POST``.

    The action only ends up in ``X-Amz-Target``; the body is signed as given.
    """

    def __init__(
        self,
        credentials: Credentials,
        region: str,
        service_name: str = "kinesis",
        logger: Optional[Logger] = None,
    ):
        self.credentials = credentials
        self.region = region
        self.service_name = service_name
        self.logger = logger or DefaultLogger(name="kinpy-signing")

    def sign(self, url: str, action: KinesisAction, body: bytes) -> Dict[str, str]:
        """Sign a request and return the headers to send with it.

        Args:
            url: Endpoint URL the request is posted to
            action: Operation routed by the service
            body: Serialized request body

        Returns:
            Header mapping including ``Authorization`` and ``X-Amz-Date``
        """
        request = AWSRequest(
            method="POST",
            url=url,
            data=body,
            headers={
                "Content-Type": CONTENT_TYPE,
                "X-Amz-Target": action.target,
            },
        )
        SigV4Auth(self.credentials, self.service_name, self.region).add_auth(request)
        self.logger.debug("Signed request", action=action.value, region=self.region)
        return dict(request.headers.items())
