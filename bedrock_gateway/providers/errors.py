"""
Error normalization for the gateway.

This module converts every failure the gateway can observe into an
ErrorChunk from the closed taxonomy (auth_error, network_error, parse_error,
api_error). Nothing here raises: the facade relies on it to keep the external
contract a plain chunk stream.
"""

import json
from typing import Any, Optional, Union

import httpx

from ..config.constants import (
    MISSING_API_KEY_MESSAGE,
    MISSING_CREDENTIALS_MESSAGE,
    MISSING_SIGNING_KEYS_MESSAGE,
    UNKNOWN_ERROR_MESSAGE,
)
from ..models.credentials import BearerCredential, SigningCredential
from ..models.events import ErrorChunk, ErrorKind
from .base import ProviderError


class ErrorMapper:
    """Maps gateway failures to normalized ErrorChunk values."""

    @staticmethod
    def check_credential(
        credential: Optional[Union[SigningCredential, BearerCredential]]
    ) -> Optional[ErrorChunk]:
        """
        Validate a credential snapshot before any request is built.

        Args:
            credential: The active credential, or None

        Returns:
            Optional[ErrorChunk]: an auth_error chunk when the credential is
            absent or incomplete, None when the call may proceed
        """
        if credential is None:
            return ErrorChunk(ErrorKind.AUTH_ERROR, MISSING_CREDENTIALS_MESSAGE)
        if isinstance(credential, BearerCredential):
            if not credential.is_complete():
                return ErrorChunk(ErrorKind.AUTH_ERROR, MISSING_API_KEY_MESSAGE)
            return None
        if isinstance(credential, SigningCredential):
            if not credential.is_complete():
                return ErrorChunk(ErrorKind.AUTH_ERROR, MISSING_SIGNING_KEYS_MESSAGE)
            return None
        return ErrorChunk(
            ErrorKind.AUTH_ERROR,
            f"Unsupported credential type: {type(credential).__name__}",
        )

    @staticmethod
    def map_exception(error: BaseException) -> ErrorChunk:
        """
        Map any exception escaping the call to an ErrorChunk.

        ProviderError keeps its own kind; everything else, including
        httpx timeouts and connection failures, is a network_error.
        """
        if isinstance(error, ProviderError):
            return ErrorChunk(error.kind, error.message)

        message = str(error)
        if isinstance(error, httpx.TimeoutException) and not message:
            message = "Request timed out"
        if not message:
            message = type(error).__name__
        return ErrorChunk(ErrorKind.NETWORK_ERROR, message)

    @staticmethod
    def vendor_error(error_object: Any) -> ErrorChunk:
        """Build an api_error chunk from a vendor-reported error object."""
        message = None
        if isinstance(error_object, dict):
            message = error_object.get("message")
        elif isinstance(error_object, str):
            message = error_object
        if not isinstance(message, str) or not message:
            message = UNKNOWN_ERROR_MESSAGE
        return ErrorChunk(ErrorKind.API_ERROR, message)

    @staticmethod
    def parse_failure(error: Exception) -> ErrorChunk:
        """Build a parse_error chunk for a malformed single-document body."""
        return ErrorChunk(ErrorKind.PARSE_ERROR, f"Failed to parse response: {error}")

    @staticmethod
    def status_error(status_code: int, body: str) -> ProviderError:
        """
        Build the ProviderError for a non-success HTTP response.

        The message comes from the vendor body when it carries one
        (``message``, ``Message`` or ``error.message``), else ``HTTP <status>``.
        """
        message = None
        try:
            document = json.loads(body) if body else None
        except ValueError:
            document = None

        if isinstance(document, dict):
            for key in ("message", "Message"):
                if isinstance(document.get(key), str) and document[key]:
                    message = document[key]
                    break
            if message is None and isinstance(document.get("error"), dict):
                nested = document["error"].get("message")
                if isinstance(nested, str) and nested:
                    message = nested

        return ProviderError(
            message=message or f"HTTP {status_code}",
            kind=ErrorKind.API_ERROR,
            status_code=status_code,
        )
