"""REST transport.

`Transport` is the seam the query layer talks through: one synchronous
`request(method, endpoint, parameters)` call returning a `Response`.
Failures (network errors, non-2xx statuses, unreadable bodies) are
returned as data, never raised; `Response.raise_for_error()` is there for
callers that prefer exceptions.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

import httpx
from pydantic import BaseModel, Field

from .constants import HTTPMethod
from .exceptions import InvalidConfigError, MissingConfigError, RequestError
from .logger import get_logger
from .settings import settings
from .types import Parameters

__all__ = (
    "Response",
    "Transport",
    "HTTPTransport",
    "get_default_transport",
    "set_default_transport",
)


class Response(BaseModel):
    """Outcome of one REST request."""

    status_code: Optional[int] = Field(None, description="HTTP status, None if no response was received.")
    value: Optional[Dict[str, Any]] = Field(None, description="Parsed JSON object body.")
    error: Optional[str] = Field(None, description="Failure description, None on success.")

    @property
    def is_success(self) -> bool:
        return self.error is None and self.status_code is not None and 200 <= self.status_code < 300

    def raise_for_error(self) -> "Response":
        """Raise `RequestError` if the request failed, else return self."""
        if not self.is_success:
            raise RequestError(self.error or "Request failed", status_code=self.status_code)
        return self


class Transport(ABC):
    """Abstract synchronous transport."""

    @abstractmethod
    def request(self, method: str, endpoint: str, parameters: Optional[Parameters] = None) -> Response:
        """Issue `method` against `endpoint` and return the outcome.

        Implementations must not raise for transport-level failures.
        """
        raise NotImplementedError


class HTTPTransport(Transport):
    """`Transport` on top of `httpx.Client`.

    Requests go to `{api_server}/{api_version}/{endpoint}`. GET parameters
    are sent as the query string, other methods send them as a JSON body.

    Attributes:
        base_url: Server URL including the API version
    """

    def __init__(
        self,
        api_server: Optional[str] = None,
        app_id: Optional[str] = None,
        app_key: Optional[str] = None,
        api_version: Optional[str] = None,
        timeout: Optional[float] = None,
        client: Optional[httpx.Client] = None,
    ) -> None:
        """Initialize the transport, falling back to settings for unset arguments.

        Args:
            api_server: REST server URL, e.g. https://abc.api.lncldglobal.com
            app_id: Application id (X-LC-Id header)
            app_key: Application key (X-LC-Key header)
            api_version: API version path segment
            timeout: Request timeout in seconds
            client: Preconfigured httpx client, mainly for tests

        Raises:
            MissingConfigError: If no API server is configured
            InvalidConfigError: If the timeout is not positive
        """
        server = api_server or settings.LEANCLOUD_API_SERVER
        if not server:
            raise MissingConfigError("API server not set", config_key="LEANCLOUD_API_SERVER")
        timeout = settings.LEANCLOUD_REQUEST_TIMEOUT if timeout is None else timeout
        if timeout <= 0:
            raise InvalidConfigError("Invalid config value", config_key="LEANCLOUD_REQUEST_TIMEOUT", value=timeout, expected=">0")

        version = api_version or settings.LEANCLOUD_API_VERSION
        self.base_url = f"{server.rstrip('/')}/{version.strip('/')}"
        self.logger = get_logger(self.__class__.__name__)

        headers = {"Accept": "application/json"}
        app_id = app_id or settings.LEANCLOUD_APP_ID
        app_key = app_key or settings.LEANCLOUD_APP_KEY
        if app_id:
            headers["X-LC-Id"] = app_id
        if app_key:
            headers["X-LC-Key"] = app_key

        self._owns_client = client is None
        self._client = client or httpx.Client(timeout=timeout)
        self._headers = headers

    def request(self, method: str, endpoint: str, parameters: Optional[Parameters] = None) -> Response:
        url = f"{self.base_url}/{endpoint.lstrip('/')}"
        kwargs: Dict[str, Any] = {"headers": self._headers}
        if parameters:
            if method == HTTPMethod.GET:
                kwargs["params"] = parameters
            else:
                kwargs["json"] = parameters

        self.logger.debug("%s %s params=%s", method, url, parameters)
        try:
            http_response = self._client.request(method, url, **kwargs)
        except httpx.HTTPError as e:
            self.logger.warning("%s %s failed: %s", method, url, e)
            return Response(error=f"{e.__class__.__name__}: {e}")

        return self._to_response(method, url, http_response)

    def _to_response(self, method: str, url: str, http_response: httpx.Response) -> Response:
        status = http_response.status_code
        try:
            body = http_response.json()
        except ValueError:
            self.logger.warning("%s %s returned a non-JSON body (status=%s)", method, url, status)
            return Response(status_code=status, error="Malformed response body")

        if not isinstance(body, dict):
            self.logger.warning("%s %s returned a non-object body (status=%s)", method, url, status)
            return Response(status_code=status, error="Malformed response body")

        if not http_response.is_success:
            error = body.get("error") if isinstance(body.get("error"), str) else http_response.reason_phrase
            self.logger.warning("%s %s failed: status=%s error=%s", method, url, status, error)
            return Response(status_code=status, value=body, error=error or f"HTTP {status}")

        return Response(status_code=status, value=body)

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> "HTTPTransport":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()


_default_transport: Optional[Transport] = None


def get_default_transport() -> Transport:
    """Return the process default transport, building it from settings on first use."""
    global _default_transport
    if _default_transport is None:
        _default_transport = HTTPTransport()
    return _default_transport


def set_default_transport(transport: Optional[Transport]) -> None:
    """Replace the process default transport. None resets to lazy construction."""
    global _default_transport
    _default_transport = transport
