"""Environment-driven gateway configuration."""

import os
from typing import Optional, Union
from urllib.parse import urlparse

from dotenv import load_dotenv
from pydantic import BaseModel, Field

from .constants import (
    DEFAULT_REGION,
    ENV_ACCESS_KEY_ID,
    ENV_API_KEY,
    ENV_AUTH_METHOD,
    ENV_AWS_REGION,
    ENV_CONNECT_TIMEOUT,
    ENV_ENDPOINT_URL,
    ENV_REGION,
    ENV_SECRET_ACCESS_KEY,
    ENV_SESSION_TOKEN,
    ENV_TIMEOUT,
)
from ..models.credentials import AuthMethod, BearerCredential, SigningCredential


class GatewaySettings(BaseModel):
    """Gateway configuration, usually loaded with ``from_env()``."""

    auth_method: Optional[AuthMethod] = None
    api_key: Optional[str] = None
    access_key_id: Optional[str] = None
    secret_access_key: Optional[str] = None
    session_token: Optional[str] = None
    region: str = DEFAULT_REGION
    endpoint_host: Optional[str] = Field(None, description="Override for the runtime host name")
    endpoint_scheme: str = Field("https", description="URL scheme used with the runtime host")
    timeout_seconds: float = Field(120.0, gt=0)
    connect_timeout_seconds: float = Field(10.0, gt=0)

    @classmethod
    def from_env(cls, load_dotenv_file: bool = True) -> "GatewaySettings":
        """
        Load settings from environment variables.

        A ``.env`` file in the working directory is read first unless
        ``load_dotenv_file`` is False. ``BEDROCK_AUTH_METHOD`` accepts
        ``api_key`` or ``signature_v4`` (any case); without it the method is
        inferred from which keys are present, preferring the API key.
        """
        if load_dotenv_file:
            load_dotenv()

        method = os.getenv(ENV_AUTH_METHOD)
        auth_method = None
        if method:
            normalized = method.strip().upper().replace("-", "_")
            if normalized in ("SIGV4", "SIGNATURE_V4"):
                auth_method = AuthMethod.SIGNATURE_V4
            elif normalized in ("API_KEY", "BEARER"):
                auth_method = AuthMethod.API_KEY
            else:
                raise ValueError(f"Unknown {ENV_AUTH_METHOD}: {method}")

        endpoint = os.getenv(ENV_ENDPOINT_URL)
        endpoint_host = None
        endpoint_scheme = "https"
        if endpoint:
            if "://" in endpoint:
                parsed = urlparse(endpoint)
                endpoint_host = parsed.netloc
                endpoint_scheme = parsed.scheme or endpoint_scheme
            else:
                endpoint_host = endpoint.strip("/")

        values = {
            "auth_method": auth_method,
            "api_key": os.getenv(ENV_API_KEY),
            "access_key_id": os.getenv(ENV_ACCESS_KEY_ID),
            "secret_access_key": os.getenv(ENV_SECRET_ACCESS_KEY),
            "session_token": os.getenv(ENV_SESSION_TOKEN) or None,
            "region": os.getenv(ENV_REGION) or os.getenv(ENV_AWS_REGION) or DEFAULT_REGION,
            "endpoint_host": endpoint_host,
            "endpoint_scheme": endpoint_scheme,
        }
        if os.getenv(ENV_TIMEOUT):
            values["timeout_seconds"] = float(os.environ[ENV_TIMEOUT])
        if os.getenv(ENV_CONNECT_TIMEOUT):
            values["connect_timeout_seconds"] = float(os.environ[ENV_CONNECT_TIMEOUT])
        return cls(**values)

    def credential(self) -> Optional[Union[SigningCredential, BearerCredential]]:
        """Build the configured credential variant, or None when nothing is set."""
        method = self.auth_method
        if method is None:
            if self.api_key:
                method = AuthMethod.API_KEY
            elif self.access_key_id or self.secret_access_key:
                method = AuthMethod.SIGNATURE_V4
            else:
                return None

        if method == AuthMethod.API_KEY:
            return BearerCredential(api_key=self.api_key or "", region=self.region)
        return SigningCredential(
            access_key_id=self.access_key_id or "",
            secret_access_key=self.secret_access_key or "",
            session_token=self.session_token,
            region=self.region,
        )
