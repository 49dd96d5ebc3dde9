"""Connection settings for the Kinesis endpoint."""

import os
from typing import ClassVar, Mapping, Optional

from botocore.credentials import Credentials
from botocore.session import get_session
from pydantic import BaseModel, ConfigDict, field_validator

from .exceptions import CredentialsError


class KinesisConfiguration(BaseModel):
    """Region, endpoint, credentials and timeout for a Kinesis client.

    Explicit keys take precedence; without them credentials are resolved
    through botocore's default chain (environment, shared config, instance
    metadata) at signing time.
    """

    region: str = "us-east-1"
    endpoint: Optional[str] = None
    access_key_id: Optional[str] = None
    secret_access_key: Optional[str] = None
    session_token: Optional[str] = None
    timeout: float = 60

    SERVICE_NAME: ClassVar[str] = "kinesis"

    model_config = ConfigDict(frozen=True)

    @field_validator("timeout")
    @classmethod
    def _validate_timeout(cls, value: float) -> float:
        if value <= 0:
            raise ValueError("Timeout must be a positive number")
        return value

    @field_validator("region")
    @classmethod
    def _validate_region(cls, value: str) -> str:
        if not value:
            raise ValueError("Region must not be empty")
        return value

    @property
    def endpoint_url(self) -> str:
        """URL requests are posted to."""
        if self.endpoint:
            return self.endpoint.rstrip("/") + "/"
        return f"https://{self.SERVICE_NAME}.{self.region}.amazonaws.com/"

    def resolve_credentials(self) -> Credentials:
        """Return the credentials used to sign requests.

        Raises:
            CredentialsError: If neither explicit keys nor the botocore chain
                yield credentials
        """
        if self.access_key_id and self.secret_access_key:
            return Credentials(self.access_key_id, self.secret_access_key, self.session_token)

        if self.access_key_id or self.secret_access_key:
            raise CredentialsError("Both access_key_id and secret_access_key must be set")

        credentials = get_session().get_credentials()
        if credentials is None:
            raise CredentialsError("Unable to locate AWS credentials")
        return credentials

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "KinesisConfiguration":
        """Build a configuration from ``AWS_*`` and ``KINESIS_*`` variables.

        Args:
            environ: Mapping to read from, ``os.environ`` if None
        """
        env = os.environ if environ is None else environ
        settings = {
            "region": env.get("AWS_REGION") or env.get("AWS_DEFAULT_REGION"),
            "endpoint": env.get("KINESIS_ENDPOINT"),
            "access_key_id": env.get("AWS_ACCESS_KEY_ID"),
            "secret_access_key": env.get("AWS_SECRET_ACCESS_KEY"),
            "session_token": env.get("AWS_SESSION_TOKEN"),
            "timeout": env.get("KINESIS_TIMEOUT"),
        }
        return cls(**{key: value for key, value in settings.items() if value})
