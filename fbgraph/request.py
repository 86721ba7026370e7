"""Graph API request: builds the call from a session, verb, path and params and executes it.

A FacebookRequest is fixed at construction. ``execute()`` performs exactly
one HTTP exchange, plus at most two narrowly targeted retries:

  - certificate verification failed: retry once trusting the bundled CA chain;
  - connect to an IPv6 address failed with "Network is unreachable": retry
    once over IPv4 only.
"""

import dataclasses
import enum
import json
import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

import httpx

from fbgraph import transport
from fbgraph.config import (
    BASE_GRAPH_URL,
    GRAPH_API_VERSION,
    SIGNED_REQUEST_ALGORITHM,
    VERSION,
    settings,
)
from fbgraph.exceptions import FacebookRequestException, FacebookSDKException
from fbgraph.response import FacebookResponse
from fbgraph.url_utils import append_params_to_url, build_query, parse_query

if TYPE_CHECKING:
    from fbgraph.session import FacebookSession

logger = logging.getLogger(__name__)


class HttpMethod(str, enum.Enum):
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"


class FacebookRequest:
    VERSION = VERSION
    GRAPH_API_VERSION = GRAPH_API_VERSION
    SIGNED_REQUEST_ALGORITHM = SIGNED_REQUEST_ALGORITHM
    BASE_GRAPH_URL = BASE_GRAPH_URL

    def __init__(
        self,
        session: "FacebookSession | None",
        method: str,
        path: str,
        parameters: Mapping[str, Any] | None = None,
        version: str | None = None,
    ):
        self._session = session
        self._method = HttpMethod(method.upper())
        self._path = path
        self._version = version or self.GRAPH_API_VERSION

        params = dict(parameters or {})
        if session and "access_token" not in params:
            params["access_token"] = session.get_token()
        if (
            session
            and settings.use_appsecret_proof
            and session.app_secret
            and "appsecret_proof" not in params
        ):
            params["appsecret_proof"] = session.app_secret_proof(params["access_token"])
        self._params = params

    def __repr__(self) -> str:
        return f"<FacebookRequest {self._method.value} {self._path} ({self._version})>"

    @property
    def session(self) -> "FacebookSession | None":
        return self._session

    @property
    def method(self) -> str:
        return self._method.value

    @property
    def path(self) -> str:
        return self._path

    @property
    def version(self) -> str:
        return self._version

    @property
    def params(self) -> dict[str, Any]:
        return dict(self._params)

    def get_parameters(self) -> dict[str, Any]:
        return self.params

    def get_request_url(self) -> str:
        return f"{self.BASE_GRAPH_URL}/{self._version}{self._path}"

    @staticmethod
    def append_params_to_url(url: str, params: Mapping[str, Any] | None = None) -> str:
        return append_params_to_url(url, params)

    def transport_options(self) -> transport.TransportOptions:
        """Describe the HTTP exchange for this request."""
        url = self.get_request_url()
        params = self.get_parameters()

        if self._method is HttpMethod.GET:
            return transport.TransportOptions(url=append_params_to_url(url, params))

        custom_method = None
        if self._method in (HttpMethod.PUT, HttpMethod.DELETE):
            custom_method = self._method.value
        return transport.TransportOptions(
            url=url, body=build_query(params), custom_method=custom_method
        )

    def execute(self) -> FacebookResponse:
        """Make the request to Graph API and return the result.

        Raises FacebookSDKException when the call cannot be completed and a
        FacebookRequestException subclass when Graph API returns an error.
        """
        log_extra = {
            "method": self.method,
            "path": self._path,
            "graph_version": self._version,
        }
        options = self.transport_options()
        logger.debug(f"Graph API {self.method} {self._path}", extra=log_extra)

        response, error = _attempt(options)

        if error is not None and transport.is_certificate_error(error):
            logger.warning(
                f"Certificate verification failed for {self._path}, "
                "retrying with the bundled CA chain",
                extra=log_extra,
            )
            options = dataclasses.replace(options, ca_bundle=transport.default_ca_bundle())
            response, error = _attempt(options)

        # With dual stacked DNS responses a server can have IPv6 enabled but
        # no IPv6 connectivity, leaving the connect to fail with ENETUNREACH.
        if error is not None and not options.ipv4_only:
            if transport.unreachable_ipv6_host(error, options.url):
                logger.error(
                    "Invalid IPv6 configuration on server, "
                    "Please disable or get native IPv6 on your server.",
                    extra=log_extra,
                )
                options = dataclasses.replace(options, ipv4_only=True)
                response, error = _attempt(options)

        if error is not None:
            logger.error(f"Graph API {self.method} {self._path} failed: {error}", extra=log_extra)
            raise FacebookSDKException(str(error), transport.error_code(error)) from error

        raw = response.text
        status = response.status_code

        try:
            decoded = json.loads(raw)
        except ValueError:
            decoded = None

        if decoded is None:
            return FacebookResponse(self, parse_query(raw), raw)

        if isinstance(decoded, dict) and decoded.get("error") is not None:
            logger.info(
                f"Graph API returned an error for {self.method} {self._path}: HTTP {status}",
                extra={**log_extra, "http_status": status},
            )
            raise FacebookRequestException.create(raw, decoded["error"], status)

        return FacebookResponse(self, decoded, raw)


def _attempt(
    options: transport.TransportOptions,
) -> tuple[httpx.Response | None, Exception | None]:
    try:
        return transport.send(options), None
    except (httpx.RequestError, httpx.InvalidURL, OSError) as e:
        return None, e
