"""Python client for the Facebook Graph API."""

from fbgraph.config import BASE_GRAPH_URL, GRAPH_API_VERSION, SIGNED_REQUEST_ALGORITHM, VERSION
from fbgraph.exceptions import (
    FacebookAuthorizationException,
    FacebookClientException,
    FacebookOtherException,
    FacebookPermissionException,
    FacebookRequestException,
    FacebookSDKException,
    FacebookServerException,
    FacebookThrottleException,
)
from fbgraph.graph_object import GraphObject
from fbgraph.request import FacebookRequest, HttpMethod
from fbgraph.response import FacebookResponse
from fbgraph.session import FacebookSession, parse_signed_request

__all__ = [
    "BASE_GRAPH_URL",
    "GRAPH_API_VERSION",
    "SIGNED_REQUEST_ALGORITHM",
    "VERSION",
    "FacebookAuthorizationException",
    "FacebookClientException",
    "FacebookOtherException",
    "FacebookPermissionException",
    "FacebookRequest",
    "FacebookRequestException",
    "FacebookResponse",
    "FacebookSDKException",
    "FacebookServerException",
    "FacebookSession",
    "FacebookThrottleException",
    "GraphObject",
    "HttpMethod",
    "parse_signed_request",
]
