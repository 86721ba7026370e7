"""Exception hierarchy for fbgraph.

Two kinds of failure reach callers:

  - FacebookSDKException: the call could not be completed (network, TLS,
    malformed signed request, ...). Carries a message and a numeric code.
  - FacebookRequestException: Graph API answered with an ``error`` object.
    ``FacebookRequestException.create`` picks the subclass from the error's
    code, subcode and type.
"""

import logging
from typing import Any

from pydantic import ValidationError

from fbgraph.schemas import GraphError

logger = logging.getLogger(__name__)

# Subcodes that mean the user has to log in again
AUTHORIZATION_SUBCODES = frozenset({458, 459, 460, 463, 464, 467})

# Login status or token expired, revoked, or invalid
AUTHORIZATION_CODES = frozenset({100, 102, 190})
# Server issue, possible downtime
SERVER_CODES = frozenset({1, 2})
# API throttling
THROTTLE_CODES = frozenset({4, 17, 341})
# Duplicate post
CLIENT_CODES = frozenset({506})


class FacebookSDKException(Exception):
    def __init__(self, message: str = "", code: int = 0):
        super().__init__(message)
        self.message = message
        self.code = code

    def __str__(self) -> str:
        return self.message


class FacebookRequestException(FacebookSDKException):
    """An error object returned by the Graph API."""

    def __init__(self, raw_response: str, response_data: dict, status_code: int):
        self.raw_response = raw_response
        self.response_data = response_data
        self.http_status_code = status_code
        self.error = _parse_error(response_data)
        super().__init__(self.error.message, self.error.code)

    @property
    def sub_error_code(self) -> int:
        return self.error.error_subcode

    @property
    def error_type(self) -> str:
        return self.error.type

    @classmethod
    def create(
        cls, raw_response: str, data: Any, status_code: int
    ) -> "FacebookRequestException":
        """Build the exception subclass matching the error payload.

        ``data`` is either the ``error`` object itself or a whole response
        body holding one under ``error``.
        """
        data = dict(data) if isinstance(data, dict) else {}
        nested = data.get("error")
        if not (isinstance(nested, dict) and "code" in nested) and "code" in data:
            data = {"error": data}

        error = _parse_error(data)
        code = error.code

        if error.error_subcode in AUTHORIZATION_SUBCODES:
            exc_class = FacebookAuthorizationException
        elif code in AUTHORIZATION_CODES:
            exc_class = FacebookAuthorizationException
        elif code in SERVER_CODES:
            exc_class = FacebookServerException
        elif code in THROTTLE_CODES:
            exc_class = FacebookThrottleException
        elif code in CLIENT_CODES:
            exc_class = FacebookClientException
        elif code == 10 or 200 <= code <= 299:
            exc_class = FacebookPermissionException
        elif error.type == "OAuthException":
            exc_class = FacebookAuthorizationException
        else:
            exc_class = FacebookOtherException

        return exc_class(raw_response, data, status_code)


class FacebookAuthorizationException(FacebookRequestException):
    pass


class FacebookClientException(FacebookRequestException):
    pass


class FacebookPermissionException(FacebookRequestException):
    pass


class FacebookServerException(FacebookRequestException):
    pass


class FacebookThrottleException(FacebookRequestException):
    pass


class FacebookOtherException(FacebookRequestException):
    pass


def _parse_error(response_data: dict) -> GraphError:
    payload = response_data.get("error") if isinstance(response_data, dict) else None
    if not isinstance(payload, dict):
        return GraphError()
    try:
        return GraphError.model_validate({k: v for k, v in payload.items() if v is not None})
    except ValidationError as e:
        logger.warning(f"Unexpected Graph API error payload {payload!r}: {e}")
        return GraphError()
