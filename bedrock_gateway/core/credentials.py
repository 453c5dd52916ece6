"""
Credential store.

Holds the one active credential variant for the gateway. The settings layer
mutates it; the gateway only reads it, once per call, and works from that
immutable snapshot for the rest of the call.
"""

import json
import threading
from typing import Optional, Union

from ..config.constants import DEFAULT_REGION
from ..config.settings import GatewaySettings
from ..models.credentials import (
    BearerCredential,
    SigningCredential,
    credential_to_dict,
    parse_credential,
)

AnyCredential = Union[SigningCredential, BearerCredential]


class CredentialStore:
    """Thread-safe holder for the active credential."""

    def __init__(self, credential: Optional[AnyCredential] = None):
        self._lock = threading.Lock()
        self._credential = credential

    @classmethod
    def from_settings(cls, settings: GatewaySettings) -> "CredentialStore":
        return cls(settings.credential())

    def get_active(self) -> Optional[AnyCredential]:
        """Return the current credential snapshot, or None."""
        with self._lock:
            return self._credential

    def set_credentials(self, credential: Optional[AnyCredential]) -> None:
        """Replace the active credential wholesale (None clears it)."""
        with self._lock:
            self._credential = credential

    def set_signing_credentials(
        self,
        access_key_id: str,
        secret_access_key: str,
        region: str = DEFAULT_REGION,
        session_token: Optional[str] = None,
    ) -> None:
        self.set_credentials(
            SigningCredential(
                access_key_id=access_key_id,
                secret_access_key=secret_access_key,
                region=region or DEFAULT_REGION,
                session_token=session_token,
            )
        )

    def set_region(self, region: str) -> None:
        """Move the active credential to another region.

        With no credential configured this installs an empty bearer
        credential in that region, which still fails the completeness check.
        """
        with self._lock:
            if self._credential is None:
                self._credential = BearerCredential(region=region)
            else:
                self._credential = self._credential.model_copy(update={"region": region})

    def clear(self) -> None:
        self.set_credentials(None)

    def load_json(self, text: Optional[str]) -> None:
        """Replace the credential from the settings layer's stored JSON.

        Blank input clears the store; malformed input raises ValueError.
        """
        if not text or not text.strip():
            self.clear()
            return
        data = json.loads(text)
        if not isinstance(data, dict):
            raise ValueError("Stored credentials must be a JSON object")
        self.set_credentials(parse_credential(data))

    def to_json(self) -> Optional[str]:
        credential = self.get_active()
        if credential is None:
            return None
        return json.dumps(credential_to_dict(credential))
