"""
Authentication and signing utilities for OKX API
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Dict, Optional
import base64
import hashlib
import hmac

from .constants import (
    HEADER_API_KEY,
    HEADER_PASSPHRASE,
    HEADER_SIGN,
    HEADER_SIMULATED,
    HEADER_TIMESTAMP,
)


@dataclass
class ApiCredentials:
    """Container for API credentials"""
    api_key: str
    api_secret: str
    passphrase: str


def okx_timestamp(now: Optional[datetime] = None) -> str:
    """
    Build the request timestamp: UTC, millisecond precision, ISO-8601 with 'Z'.

    Example: 2024-01-02T03:04:05.678Z
    """
    now = now or datetime.now(timezone.utc)
    now = now.astimezone(timezone.utc)
    return now.strftime("%Y-%m-%dT%H:%M:%S.") + f"{now.microsecond // 1000:03d}Z"


class OkxSigner:
    """
    Handles request signing for OKX API authentication.

    The pre-hash string is timestamp + METHOD + path with query + body and the
    signature is the base64-encoded HMAC-SHA256 of it.
    """

    def __init__(self, credentials: ApiCredentials, simulated: bool = False):
        """
        Initialize the signer with API credentials.

        Args:
            credentials: API key, secret and passphrase
            simulated: Mark requests for the demo trading environment
        """
        self.credentials = credentials
        self.simulated = simulated

    def sign(self, timestamp: str, method: str, path: str, body: str = "") -> str:
        """
        Generate the request signature.

        Args:
            timestamp: Value sent in the timestamp header
            method: HTTP method (case-insensitive)
            path: Request path including the '?query' part, if any
            body: Serialized JSON body, empty for GET requests

        Returns:
            Base64-encoded HMAC-SHA256 signature
        """
        prehash = f"{timestamp}{method.upper()}{path}{body or ''}"
        digest = hmac.new(
            self.credentials.api_secret.encode("utf-8"),
            prehash.encode("utf-8"),
            hashlib.sha256,
        ).digest()
        return base64.b64encode(digest).decode("utf-8")

    def get_auth_headers(self, timestamp: str, signature: str) -> Dict[str, str]:
        """
        Get authentication headers for API requests.

        Returns:
            Dictionary containing required authentication headers
        """
        headers = {
            HEADER_API_KEY: self.credentials.api_key,
            HEADER_SIGN: signature,
            HEADER_TIMESTAMP: timestamp,
            HEADER_PASSPHRASE: self.credentials.passphrase,
            "Content-Type": "application/json",
        }
        if self.simulated:
            headers[HEADER_SIMULATED] = "1"
        return headers

    def validate_credentials(self) -> bool:
        """
        Validate that API key, secret and passphrase are present.

        Returns:
            True if credentials are valid, False otherwise
        """
        return bool(
            self.credentials.api_key
            and self.credentials.api_secret
            and self.credentials.passphrase
        )
