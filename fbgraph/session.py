"""Access token holder, app sessions and signed request parsing."""

import base64
import hashlib
import hmac
import json
import logging

from fbgraph.config import SIGNED_REQUEST_ALGORITHM, settings
from fbgraph.exceptions import FacebookSDKException
from fbgraph.graph_object import GraphObject

logger = logging.getLogger(__name__)

# FacebookSDKException codes for signed request failures
INVALID_SIGNATURE = 602
CSRF_MISMATCH = 604
MALFORMED_SIGNED_REQUEST = 606


class FacebookSession:
    def __init__(self, access_token: str, app_id: str | None = None, app_secret: str | None = None):
        self._access_token = access_token
        self.app_id = app_id
        self.app_secret = app_secret

    def __repr__(self) -> str:
        return f"<FacebookSession app_id={self.app_id!r}>"

    def get_token(self) -> str:
        return self._access_token

    def app_secret_proof(self, access_token: str | None = None) -> str:
        """HMAC-SHA256 of the access token keyed by the app secret, hex encoded."""
        if not self.app_secret:
            raise FacebookSDKException("An app secret is required to sign requests.")
        token = access_token if access_token is not None else self._access_token
        return hmac.new(self.app_secret.encode(), token.encode(), hashlib.sha256).hexdigest()

    @classmethod
    def new_app_session(
        cls, app_id: str | None = None, app_secret: str | None = None
    ) -> "FacebookSession":
        """Session authenticated as the app itself (``app_id|app_secret`` token)."""
        app_id = app_id or settings.app_id
        app_secret = app_secret or settings.app_secret
        if not app_id or not app_secret:
            raise FacebookSDKException(
                "You must provide or set a default application id and secret.", 700
            )
        return cls(f"{app_id}|{app_secret}", app_id=app_id, app_secret=app_secret)

    def get_session_info(self) -> GraphObject:
        """Inspect this session's token with the ``/debug_token`` endpoint."""
        from fbgraph.request import FacebookRequest

        app_session = FacebookSession.new_app_session(self.app_id, self.app_secret)
        response = FacebookRequest(
            app_session, "GET", "/debug_token", {"input_token": self._access_token}
        ).execute()
        return response.get_graph_object().get_property("data") or GraphObject()


def _base64_url_decode(value: str) -> bytes:
    padded = value + "=" * (-len(value) % 4)
    return base64.urlsafe_b64decode(padded.encode())


def parse_signed_request(
    signed_request: str, state: str | None = None, app_secret: str | None = None
) -> dict:
    """Verify and decode a signed request posted by Facebook.

    Raises FacebookSDKException on a malformed payload, a bad signature or a
    ``state`` mismatch.
    """
    app_secret = app_secret or settings.app_secret
    if not app_secret:
        raise FacebookSDKException("You must provide or set a default application secret.", 701)

    try:
        encoded_sig, encoded_data = signed_request.split(".", 1)
        sig = _base64_url_decode(encoded_sig)
        data = json.loads(_base64_url_decode(encoded_data))
    except ValueError as e:
        logger.warning(f"Could not decode signed request: {e}")
        raise FacebookSDKException("Malformed signed request.", MALFORMED_SIGNED_REQUEST) from e

    if not isinstance(data, dict) or data.get("algorithm") != SIGNED_REQUEST_ALGORITHM:
        raise FacebookSDKException("Malformed signed request.", MALFORMED_SIGNED_REQUEST)

    expected = hmac.new(app_secret.encode(), encoded_data.encode(), hashlib.sha256).digest()
    if not hmac.compare_digest(sig, expected):
        raise FacebookSDKException("Invalid signature on signed request.", INVALID_SIGNATURE)

    if state is not None and data.get("state") != state:
        raise FacebookSDKException("Signed request did not pass CSRF validation.", CSRF_MISMATCH)

    return data
