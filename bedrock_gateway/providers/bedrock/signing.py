"""
AWS Signature Version 4 request signing.

Signs an outgoing request with a SigningCredential:

1. Canonicalize method, URI, query string, headers and payload hash.
2. Build the credential scope ``<date>/<region>/<service>/aws4_request``.
3. Derive the signing key with the HMAC-SHA256 chain
   ``AWS4<secret> -> date -> region -> service -> aws4_request``.
4. Sign the string-to-sign with the derived key and attach the
   ``Authorization`` and ``X-Amz-Date`` headers.

Identical inputs (including the timestamp) always produce an identical
signature.
"""

import hashlib
import hmac
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Dict, Iterable, Mapping, Optional, Tuple, Union
from urllib.parse import quote

from ...models.credentials import SigningCredential

ALGORITHM = "AWS4-HMAC-SHA256"
TERMINATOR = "aws4_request"


@dataclass(frozen=True)
class SignedRequest:
    """Headers to send plus the intermediate values, for debugging and tests."""
    headers: Dict[str, str]
    signature: str
    canonical_request: str
    string_to_sign: str
    credential_scope: str


def _sha256_hex(data: bytes) -> str:
    return hashlib.sha256(data).hexdigest()


def _hmac(key: bytes, message: str) -> bytes:
    return hmac.new(key, message.encode("utf-8"), hashlib.sha256).digest()


def _to_bytes(payload: Union[str, bytes, None]) -> bytes:
    if payload is None:
        return b""
    if isinstance(payload, str):
        return payload.encode("utf-8")
    return payload


def canonical_uri(path: str) -> str:
    """URI-encode each path segment (already-encoded segments are encoded again)."""
    if not path:
        return "/"
    return "/".join(quote(segment, safe="-_.~") for segment in path.split("/"))


def canonical_query(params: Optional[Iterable[Tuple[str, str]]]) -> str:
    if not params:
        return ""
    encoded = sorted(
        (quote(str(key), safe="-_.~"), quote(str(value), safe="-_.~"))
        for key, value in params
    )
    return "&".join(f"{key}={value}" for key, value in encoded)


def canonical_headers(headers: Mapping[str, str]) -> Tuple[str, str]:
    """Return (canonical header block, signed header list)."""
    normalized: Dict[str, str] = {}
    for name, value in headers.items():
        key = name.strip().lower()
        # Collapse internal whitespace runs to one space
        normalized[key] = " ".join(str(value).split())
    names = sorted(normalized)
    block = "".join(f"{name}:{normalized[name]}\n" for name in names)
    return block, ";".join(names)


def derive_signing_key(secret_access_key: str, date_stamp: str, region: str, service: str) -> bytes:
    k_date = _hmac(f"AWS4{secret_access_key}".encode("utf-8"), date_stamp)
    k_region = _hmac(k_date, region)
    k_service = _hmac(k_region, service)
    return _hmac(k_service, TERMINATOR)


def sign_request(
    method: str,
    path: str,
    headers: Mapping[str, str],
    payload: Union[str, bytes, None],
    credential: SigningCredential,
    service: str,
    host: str,
    region: Optional[str] = None,
    timestamp: Optional[datetime] = None,
    query: Optional[Iterable[Tuple[str, str]]] = None,
) -> SignedRequest:
    """
    Sign a request with Signature Version 4.

    Args:
        method: HTTP method
        path: Request path as it will appear on the wire
        headers: Headers to sign and send (Host and X-Amz-Date are added)
        payload: Request body
        credential: Access key pair, optionally with a session token
        service: Service name used in the scope (e.g., "bedrock")
        host: Host header value
        region: Scope region, defaults to the credential's region
        timestamp: Signing time, defaults to now (UTC)
        query: Query parameters as (key, value) pairs

    Returns:
        SignedRequest whose ``headers`` include Authorization
    """
    when = timestamp or datetime.now(timezone.utc)
    if when.tzinfo is not None:
        when = when.astimezone(timezone.utc)
    amz_date = when.strftime("%Y%m%dT%H%M%SZ")
    date_stamp = when.strftime("%Y%m%d")
    scope_region = region or credential.region

    send_headers = dict(headers)
    send_headers["Host"] = host
    send_headers["X-Amz-Date"] = amz_date
    if credential.session_token:
        send_headers["X-Amz-Security-Token"] = credential.session_token

    header_block, signed_headers = canonical_headers(send_headers)
    payload_hash = _sha256_hex(_to_bytes(payload))

    canonical_request = "\n".join([
        method.upper(),
        canonical_uri(path),
        canonical_query(query),
        header_block,
        signed_headers,
        payload_hash,
    ])

    credential_scope = f"{date_stamp}/{scope_region}/{service}/{TERMINATOR}"
    string_to_sign = "\n".join([
        ALGORITHM,
        amz_date,
        credential_scope,
        _sha256_hex(canonical_request.encode("utf-8")),
    ])

    signing_key = derive_signing_key(credential.secret_access_key, date_stamp, scope_region, service)
    signature = hmac.new(signing_key, string_to_sign.encode("utf-8"), hashlib.sha256).hexdigest()

    send_headers["Authorization"] = (
        f"{ALGORITHM} Credential={credential.access_key_id}/{credential_scope}, "
        f"SignedHeaders={signed_headers}, Signature={signature}"
    )

    return SignedRequest(
        headers=send_headers,
        signature=signature,
        canonical_request=canonical_request,
        string_to_sign=string_to_sign,
        credential_scope=credential_scope,
    )
