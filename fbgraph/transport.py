"""Per-call httpx transport for Graph API requests and transport error classification."""

import errno
import ipaddress
import re
import socket
import ssl
from dataclasses import dataclass

import certifi
import httpx

from fbgraph.config import CONNECT_TIMEOUT, REQUEST_TIMEOUT, USER_AGENT, settings

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"

IPV6_UNREACHABLE_RE = re.compile(r"Failed to connect to ([^:].*): Network is unreachable")
CERTIFICATE_ERROR_RE = re.compile(
    r"CERTIFICATE_VERIFY_FAILED|certificate verify failed|SSL certificate problem|SSL CA cert",
    re.IGNORECASE,
)


@dataclass(frozen=True)
class TransportOptions:
    """Everything needed to perform one HTTP exchange."""

    url: str
    body: str | None = None
    custom_method: str | None = None
    connect_timeout: float = CONNECT_TIMEOUT
    timeout: float = REQUEST_TIMEOUT
    user_agent: str = USER_AGENT
    ca_bundle: str | None = None
    ipv4_only: bool = False

    @property
    def http_method(self) -> str:
        if self.custom_method:
            return self.custom_method
        return "POST" if self.body is not None else "GET"


def default_ca_bundle() -> str:
    """CA chain to fall back on when certificate verification fails."""
    return settings.ca_bundle_path or certifi.where()


def build_transport(options: TransportOptions) -> httpx.BaseTransport:
    verify: ssl.SSLContext | bool = True
    if options.ca_bundle:
        verify = ssl.create_default_context(cafile=options.ca_bundle)
    # Binding to the IPv4 wildcard address restricts connections to IPv4.
    local_address = "0.0.0.0" if options.ipv4_only else None
    return httpx.HTTPTransport(verify=verify, local_address=local_address)


def send(options: TransportOptions) -> httpx.Response:
    """Perform one request and return the fully read response.

    The client is closed before returning, also when the request raises.
    """
    headers = {"User-Agent": options.user_agent}
    if options.body is not None:
        headers["Content-Type"] = FORM_CONTENT_TYPE

    with httpx.Client(
        transport=build_transport(options),
        timeout=httpx.Timeout(options.timeout, connect=options.connect_timeout),
        headers=headers,
    ) as client:
        return client.request(options.http_method, options.url, content=options.body)


# ---------------------------------------------------------------------------
# Error classification
# ---------------------------------------------------------------------------


def _chain(exc: BaseException):
    seen = set()
    while exc is not None and id(exc) not in seen:
        seen.add(id(exc))
        yield exc
        exc = exc.__cause__ or exc.__context__


def is_certificate_error(exc: BaseException) -> bool:
    """Whether the failure came from verifying the server certificate chain."""
    for err in _chain(exc):
        if isinstance(err, ssl.SSLCertVerificationError):
            return True
        if CERTIFICATE_ERROR_RE.search(str(err)):
            return True
    return False


def unreachable_ipv6_host(exc: BaseException, url: str | None = None) -> str | None:
    """Return the IPv6 address a connect attempt failed on with ENETUNREACH.

    Happens on hosts that resolve AAAA records but have no IPv6 route. httpx
    reports a bare ``[Errno 101] Network is unreachable``, so the address is
    taken from ``url``'s host: the literal itself, or its first AAAA record.
    Messages naming the address (curl style) are read directly.
    """
    for err in _chain(exc):
        match = IPV6_UNREACHABLE_RE.search(str(err))
        if not match:
            continue
        host = _ipv6_literal(match.group(1))
        if host:
            return host

    if url is None or error_code(exc) != errno.ENETUNREACH:
        return None

    parsed = httpx.URL(url)
    if not parsed.host:
        return None
    return _ipv6_literal(parsed.host) or _resolve_ipv6(parsed.host, parsed.port or 443)


def _ipv6_literal(host: str) -> str | None:
    host = host.strip("[]")
    try:
        if ipaddress.ip_address(host).version == 6:
            return host
    except ValueError:
        pass
    return None


def _resolve_ipv6(host: str, port: int) -> str | None:
    try:
        infos = socket.getaddrinfo(host, port, socket.AF_UNSPEC, socket.SOCK_STREAM)
    except OSError:
        return None
    for family, _, _, _, sockaddr in infos:
        if family == socket.AF_INET6:
            return sockaddr[0]
    return None


def error_code(exc: BaseException) -> int:
    """First OS errno found in the exception chain, 0 when there is none."""
    for err in _chain(exc):
        if isinstance(err, OSError) and isinstance(err.errno, int):
            return err.errno
    return 0
