"""
Security helpers: password hashing, bearer tokens and the caller
identity dependency.

Tokens are compact JWTs signed with HMAC‑SHA256 and base64url encoded.
They carry the user id in ``sub`` and an expiration timestamp in
``exp``.  Passwords are hashed with PBKDF2‑HMAC‑SHA256 and a random
salt, stored as ``"salthex$hashhex"``.

``get_current_user_id`` is the only place the API resolves who is
calling.  It returns a plain user id that the endpoints pass on to
the services explicitly.  Every failure raises a 401
``HTTPException``; the application's exception handler renders all of
them with the same fixed message.
"""

import base64
import hashlib
import hmac
import json
import logging
import os
import time
from typing import Any, Dict, Optional

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from .config import settings


logger = logging.getLogger(__name__)

PBKDF2_ITERATIONS = 100_000


def _b64_url_encode(data: bytes) -> str:
    """Base64‑url encode bytes without padding."""
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode("utf-8")


def _b64_url_decode(data: str) -> bytes:
    """Decode base64‑url encoded string, adding padding if necessary."""
    padding = '=' * (-len(data) % 4)
    return base64.urlsafe_b64decode(data + padding)


def _sign(message: bytes, secret: str) -> bytes:
    return hmac.new(secret.encode("utf-8"), message, hashlib.sha256).digest()


def create_access_token(data: Dict[str, Any], expires_delta: Optional[int] = None) -> str:
    """Create a signed token with the given claims.

    Parameters
    ----------
    data : dict
        Claims to embed in the token, e.g. ``{"sub": "42"}``.
    expires_delta : Optional[int]
        Lifetime of the token in seconds.  Defaults to
        ``settings.access_token_expire_minutes * 60``.

    Returns
    -------
    str
        A token of the form ``header.payload.signature``.  Clients send
        it as ``Authorization: Bearer <token>``.
    """
    to_encode = data.copy()
    exp_seconds = expires_delta or settings.access_token_expire_minutes * 60
    to_encode["exp"] = int(time.time()) + exp_seconds
    header = {"alg": "HS256", "typ": "JWT"}
    header_b64 = _b64_url_encode(json.dumps(header, separators=(',', ':')).encode("utf-8"))
    payload_b64 = _b64_url_encode(json.dumps(to_encode, separators=(',', ':')).encode("utf-8"))
    signing_input = f"{header_b64}.{payload_b64}".encode("utf-8")
    signature_b64 = _b64_url_encode(_sign(signing_input, settings.secret_key))
    return f"{header_b64}.{payload_b64}.{signature_b64}"


def decode_access_token(token: str) -> Optional[Dict[str, Any]]:
    """Verify a token and return its claims, or ``None`` if it is
    malformed, forged or expired."""
    parts = token.split('.')
    if len(parts) != 3:
        return None
    header_b64, payload_b64, signature_b64 = parts
    signing_input = f"{header_b64}.{payload_b64}".encode("utf-8")
    try:
        actual_sig = _b64_url_decode(signature_b64)
        expected_sig = _sign(signing_input, settings.secret_key)
        if not hmac.compare_digest(expected_sig, actual_sig):
            return None
        data = json.loads(_b64_url_decode(payload_b64).decode("utf-8"))
    except (ValueError, UnicodeDecodeError):
        return None
    if not isinstance(data, dict):
        return None
    try:
        if data.get("exp") is None or int(data["exp"]) < int(time.time()):
            return None
    except (TypeError, ValueError):
        return None
    return data


def hash_password(password: str) -> str:
    """Hash a password using PBKDF2‑HMAC with SHA‑256 and a 16 byte salt."""
    salt = os.urandom(16)
    dk = hashlib.pbkdf2_hmac('sha256', password.encode('utf-8'), salt, PBKDF2_ITERATIONS)
    return f"{salt.hex()}${dk.hex()}"


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Check a plain password against a stored ``"salthex$hashhex"`` string."""
    try:
        salt_hex, hash_hex = hashed_password.split('$', 1)
        salt = bytes.fromhex(salt_hex)
        stored_hash = bytes.fromhex(hash_hex)
    except ValueError:
        return False
    dk = hashlib.pbkdf2_hmac('sha256', plain_password.encode('utf-8'), salt, PBKDF2_ITERATIONS)
    return hmac.compare_digest(dk, stored_hash)


security = HTTPBearer(auto_error=False)


def _unauthenticated(reason: str) -> HTTPException:
    logger.info("Rejected request: %s", reason)
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=reason,
        headers={"WWW-Authenticate": "Bearer"},
    )


def get_current_user_id(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> int:
    """Dependency that resolves the authenticated caller's user id.

    The token subject must still name an existing user; tokens of
    deleted accounts are rejected like any other invalid token.
    """
    if credentials is None:
        raise _unauthenticated("Not authenticated")
    payload = decode_access_token(credentials.credentials)
    if not payload:
        raise _unauthenticated("Invalid or expired token")
    try:
        user_id = int(payload.get("sub"))
    except (TypeError, ValueError):
        raise _unauthenticated("Token has no valid subject")

    from loan_ledger_api.app.stores import UserStore

    users = UserStore(getattr(request.app.state, "database_path", None))
    if not users.exists(user_id):
        raise _unauthenticated("User no longer exists")
    return user_id
