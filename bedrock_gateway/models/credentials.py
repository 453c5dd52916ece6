"""
Credential variants for the two Bedrock authentication protocols.

A credential is a tagged union: either a SigningCredential (access key pair
used for request signing) or a BearerCredential (opaque API key sent in the
Authorization header). Both are frozen so a snapshot taken at the start of a
call cannot change underneath it.
"""

from enum import Enum
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter

from ..config.constants import DEFAULT_REGION


class AuthMethod(str, Enum):
    """Supported authentication protocols."""
    SIGNATURE_V4 = "SIGNATURE_V4"
    API_KEY = "API_KEY"


class _CredentialBase(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    region: str = DEFAULT_REGION


class SigningCredential(_CredentialBase):
    """Access key pair for Signature Version 4 request signing."""

    auth_method: Literal["SIGNATURE_V4"] = Field("SIGNATURE_V4", alias="authMethod")
    access_key_id: str = Field("", alias="accessKeyId")
    secret_access_key: str = Field("", alias="secretAccessKey")
    session_token: Optional[str] = Field(None, alias="sessionToken")

    def is_complete(self) -> bool:
        return bool(self.access_key_id.strip()) and bool(self.secret_access_key.strip())


class BearerCredential(_CredentialBase):
    """Bedrock API key sent verbatim as a bearer token."""

    auth_method: Literal["API_KEY"] = Field("API_KEY", alias="authMethod")
    api_key: str = Field("", alias="apiKey")

    def is_complete(self) -> bool:
        return bool(self.api_key.strip())


Credential = Annotated[
    Union[SigningCredential, BearerCredential],
    Field(discriminator="auth_method"),
]

_credential_adapter = TypeAdapter(Credential)


def parse_credential(data: dict) -> Union[SigningCredential, BearerCredential]:
    """Build a credential from the settings collaborator's stored mapping.

    The stored format uses camelCase keys and defaults ``authMethod`` to
    ``API_KEY`` when it is missing.
    """
    payload = dict(data)
    if "authMethod" not in payload and "auth_method" not in payload:
        payload["authMethod"] = AuthMethod.API_KEY.value
    if payload.get("region") in (None, ""):
        payload["region"] = DEFAULT_REGION
    return _credential_adapter.validate_python(payload)


def credential_to_dict(credential: Union[SigningCredential, BearerCredential]) -> dict:
    """Serialize a credential back to the stored camelCase mapping."""
    return credential.model_dump(mode="json", by_alias=True)
