"""
HTTP client for OKX API.

Handles request signing, execution and response processing. Every call is a
single attempt; failures are raised with the method and path that produced them.
"""

import asyncio
import json
from typing import Any, Dict, List, Optional, Union
from urllib.parse import quote

import aiohttp
from aiohttp import ClientSession
from yarl import URL

from .auth import ApiCredentials, OkxSigner, okx_timestamp
from .constants import SUCCESS_CODE
from .models.config import ConnectionConfig

Body = Union[Dict[str, Any], List[Dict[str, Any]]]


class HttpClient:
    """HTTP client specialized for OKX API interactions."""

    def __init__(self, config: ConnectionConfig):
        """Initialize HTTP client with configuration."""
        self._config = config
        self._signer = OkxSigner(
            ApiCredentials(config.api_key, config.api_secret, config.passphrase),
            simulated=config.simulated,
        )

    @property
    def signer(self) -> OkxSigner:
        return self._signer

    async def request(
        self,
        session: ClientSession,
        method: str,
        path: str,
        params: Optional[Dict[str, Any]] = None,
        data: Optional[Body] = None,
    ) -> Dict[str, Any]:
        """Execute a signed request and return the decoded response envelope."""
        method = method.upper()
        path_with_query = path + build_query_string(params)
        body = self._serialize_body(method, path, data)

        timestamp = okx_timestamp()
        signature = self._signer.sign(timestamp, method, path_with_query, body)
        headers = self._signer.get_auth_headers(timestamp, signature)

        request_kwargs: Dict[str, Any] = {
            "method": method,
            "url": URL(f"{self._config.base_url}{path_with_query}", encoded=True),
            "headers": headers,
        }
        if method in ("POST", "PUT"):
            request_kwargs["data"] = body

        try:
            async with session.request(**request_kwargs) as response:
                status = response.status
                response_text = await response.text()
        except asyncio.TimeoutError as e:
            raise HttpTransportError(
                f"{method} {path} timed out", method=method, path=path
            ) from e
        except aiohttp.ClientError as e:
            raise HttpTransportError(
                f"{method} {path} failed: {e}", method=method, path=path
            ) from e

        if not 200 <= status < 300:
            raise _status_error(method, path, status, response_text)

        payload = self._process_response(method, path, status, response_text)
        self._check_envelope(method, path, status, payload)
        return payload

    def _serialize_body(self, method: str, path: str, data: Optional[Body]) -> str:
        """Compact JSON for POST/PUT bodies; GET requests sign an empty body."""
        if method not in ("POST", "PUT") or not data:
            return ""
        try:
            return json.dumps(data, separators=(",", ":"))
        except (TypeError, ValueError) as e:
            raise HttpSerializationError(
                f"Failed to serialize request body for {method} {path}: {e}",
                method=method,
                path=path,
            ) from e

    def _process_response(
        self, method: str, path: str, status: int, response_text: str
    ) -> Dict[str, Any]:
        """Decode the JSON envelope."""
        try:
            payload = json.loads(response_text)
        except json.JSONDecodeError as e:
            raise HttpDecodeError(
                f"Invalid JSON response from {method} {path} "
                f"(Status {status}): {response_text[:200]}",
                status_code=status,
                method=method,
                path=path,
            ) from e

        if not isinstance(payload, dict):
            raise HttpDecodeError(
                f"Unexpected response shape from {method} {path}: {response_text[:200]}",
                status_code=status,
                method=method,
                path=path,
            )
        return payload

    def _check_envelope(
        self, method: str, path: str, status: int, payload: Dict[str, Any]
    ) -> None:
        """Raise ExchangeAPIError when the exchange reports a non-zero code."""
        code = str(payload.get("code", SUCCESS_CODE))
        if code == SUCCESS_CODE:
            return

        msg = payload.get("msg") or ""
        items = payload.get("data") or []
        item = items[0] if isinstance(items, list) and items and isinstance(items[0], dict) else {}
        item_code = item.get("sCode")
        item_msg = item.get("sMsg")
        detail = f" ({item_code}: {item_msg})" if item_code and item_code != SUCCESS_CODE else ""

        raise ExchangeAPIError(
            f"{method} {path} rejected by exchange: code={code} msg={msg}{detail}",
            code=code,
            msg=msg,
            status_code=status,
            response_data=payload,
            method=method,
            path=path,
        )


def build_query_string(params: Optional[Dict[str, Any]]) -> str:
    """'?k1=v1&k2=v2' with keys in sorted order, '' when there are no params."""
    if not params:
        return ""
    parts = [
        f"{key}={quote(str(params[key]), safe='-_.~')}" for key in sorted(params)
    ]
    return "?" + "&".join(parts)


def _status_error(method: str, path: str, status: int, response_text: str) -> "HttpStatusError":
    try:
        response_data = json.loads(response_text) if response_text else None
    except json.JSONDecodeError:
        response_data = None

    error_cls = HttpServerError if status >= 500 else HttpClientClientError
    if status == 401:
        message = (
            f"Authentication failed for {method} {path}: please check OKX_API_KEY, "
            f"OKX_API_SECRET and OKX_PASSPHRASE. Server response: {response_text[:200]}"
        )
    else:
        message = f"HTTP {status} from {method} {path}: {response_text[:200]}"

    return error_cls(
        message,
        status_code=status,
        response_data=response_data if isinstance(response_data, dict) else None,
        method=method,
        path=path,
    )


class HttpClientError(Exception):
    """Base exception for HTTP client errors."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        response_data: Optional[Dict[str, Any]] = None,
        method: Optional[str] = None,
        path: Optional[str] = None,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.response_data = response_data
        self.method = method
        self.path = path


class HttpSerializationError(HttpClientError):
    """Request body could not be encoded."""
    pass


class HttpTransportError(HttpClientError):
    """Connection failure or timeout."""
    pass


class HttpStatusError(HttpClientError):
    """Exception for non-2xx responses."""
    pass


class HttpServerError(HttpStatusError):
    """Exception for server errors (5xx)."""
    pass


class HttpClientClientError(HttpStatusError):
    """Exception for client errors (4xx)."""
    pass


class HttpDecodeError(HttpClientError):
    """Response body is not a JSON object."""
    pass


class ExchangeAPIError(HttpClientError):
    """HTTP 2xx response whose envelope carries a non-zero code."""

    def __init__(self, message: str, code: str, msg: str = "", **kwargs):
        super().__init__(message, **kwargs)
        self.code = code
        self.msg = msg
