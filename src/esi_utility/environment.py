"""Request environment introspection.

:class:`Environment` wraps a WSGI/CGI-style environ mapping (``HTTP_HOST``,
``REMOTE_ADDR``, ``HTTPS``, ...) and answers the usual questions about the
current request: which host, which client address, is it secure, what
method, what URL. It never mutates the mapping it was given.

The module-level IP helpers classify addresses against fixed private and
reserved ranges.
"""

from __future__ import annotations

import ipaddress
import logging
import os
import re
from collections.abc import Mapping
from typing import Any

from esi_utility.arrays import get_value, map_deep

logger = logging.getLogger(__name__)

HOST_HEADERS = {
    "forwarded": "HTTP_X_FORWARDED_HOST",
    "server": "SERVER_NAME",
    "host": "HTTP_HOST",
    "default": "localhost",
}

HTTPS_HEADERS = {
    "default": "HTTPS",
    "scheme": "wsgi.url_scheme",
    "forwarded": "HTTP_X_FORWARDED_PROTO",
    "frontend": "HTTP_FRONT_END_HTTPS",
}

IP_ADDRESS_HEADERS = {
    "cloudflare": "HTTP_CF_CONNECTING_IP",
    "forwarded": "HTTP_X_FORWARDED_FOR",
    "realip": "HTTP_X_REAL_IP",
    "client": "HTTP_CLIENT_IP",
    "default": "REMOTE_ADDR",
}

REQUEST_HEADERS = {
    "override": "HTTP_X_HTTP_METHOD_OVERRIDE",
    "method": "REQUEST_METHOD",
    "default": "GET",
}

URL_HEADERS = {
    "authuser": "AUTH_USER",
    "authpw": "AUTH_PASSWORD",
    "port": "SERVER_PORT",
    "script": "SCRIPT_NAME",
    "path": "PATH_INFO",
    "query": "QUERY_STRING",
    "request": "REQUEST_URI",
}

PORT_SECURE = 443
PORT_UNSECURE = 80

# Dot-separated labels; brackets and colons allow IPv6 literals.
VALIDATE_HOST_REGEX = re.compile(
    r"^\[?[a-z0-9\-:\]_]+(?:\.[a-z0-9\-:\]_]+)*\.?$", re.IGNORECASE
)

PRIVATE_NETWORKS = tuple(
    ipaddress.ip_network(network)
    for network in ("10.0.0.0/8", "172.16.0.0/12", "192.168.0.0/16", "fc00::/7")
)

RESERVED_NETWORKS = tuple(
    ipaddress.ip_network(network)
    for network in (
        "0.0.0.0/8",
        "127.0.0.0/8",
        "169.254.0.0/16",
        "240.0.0.0/4",
        "::1/128",
        "::/128",
        "::ffff:0:0/96",
        "fe80::/10",
    )
)


# ============================================================================
#                               IP classification
# ============================================================================


def _in_networks(address: str, networks: tuple[Any, ...]) -> bool:
    """Membership test; an unparsable address counts as a member."""
    try:
        parsed = ipaddress.ip_address(address.strip())
    except ValueError:
        logger.debug("Unparsable IP address %r", address)
        return True
    return any(parsed in network for network in networks)


def is_private_ip(address: str) -> bool:
    """True for 10/8, 172.16/12, 192.168/16, fc00::/7 or an invalid address."""
    return _in_networks(address, PRIVATE_NETWORKS)


def is_reserved_ip(address: str) -> bool:
    """True for loopback, link-local, unspecified, 0/8, 240/4, mapped or invalid."""
    return _in_networks(address, RESERVED_NETWORKS)


def is_public_ip(address: str) -> bool:
    return not is_private_ip(address) and not is_reserved_ip(address)


# ============================================================================
#                               Request context
# ============================================================================


class Environment:
    """Read-only view over a request environ.

    Args:
        environ: WSGI environ or CGI-style mapping. Defaults to
            ``os.environ`` for plain CGI scripts.
    """

    def __init__(self, environ: Mapping[str, Any] | None = None) -> None:
        self.environ: Mapping[str, Any] = os.environ if environ is None else environ

    def var(self, name: str, default: Any = "") -> Any:
        """Return ``environ[name]``, or ``default`` when missing or ``None``."""
        value = get_value(self.environ, name)
        return default if value is None else value

    def _text(self, name: str) -> str:
        return str(self.var(name)).strip()

    # ------------------------------------------------------------------------
    # Host / address
    # ------------------------------------------------------------------------

    def host(self, strip_www: bool = False, accept_forwarded: bool = False) -> str:
        """Host name of the current request, lower-cased.

        ``X-Forwarded-Host`` is only honoured with ``accept_forwarded``;
        otherwise ``Host`` then ``SERVER_NAME`` are used. A missing or
        malformed value yields ``"localhost"``.
        """
        forwarded = self._text(HOST_HEADERS["forwarded"]).split(",")[0].strip()

        if accept_forwarded and forwarded:
            host = forwarded
        else:
            host = self._text(HOST_HEADERS["host"]) or self._text(HOST_HEADERS["server"])

        if not host or VALIDATE_HOST_REGEX.match(host) is None:
            logger.debug("Host %r missing or invalid; using default", host)
            host = HOST_HEADERS["default"]

        host = host.lower()

        if strip_www and host.startswith("www."):
            host = host[len("www."):]

        return host

    def ip_address(self, trust_proxy: bool = False) -> str:
        """Client IP address.

        ``CF-Connecting-IP`` replaces ``REMOTE_ADDR`` when present. With
        ``trust_proxy``, the last public address listed in
        ``X-Forwarded-For`` (or else ``X-Real-IP``) wins, falling back to
        ``Client-IP`` and then the remote address.
        """
        remote = self._text(IP_ADDRESS_HEADERS["cloudflare"]) or self._text(
            IP_ADDRESS_HEADERS["default"]
        )

        if not trust_proxy:
            return remote

        forwarded = self._text(IP_ADDRESS_HEADERS["forwarded"])
        realip = self._text(IP_ADDRESS_HEADERS["realip"])
        candidates = [ip for ip in map_deep((forwarded or realip).split(","), str.strip) if ip]

        ip = ""
        for candidate in candidates:
            if is_public_ip(candidate):
                ip = candidate

        return ip or self._text(IP_ADDRESS_HEADERS["client"]) or remote

    # ------------------------------------------------------------------------
    # Request line
    # ------------------------------------------------------------------------

    def is_https(self) -> bool:
        https = self._text(HTTPS_HEADERS["default"]).lower()
        if https and https != "off":
            return True

        if self._text(HTTPS_HEADERS["scheme"]).lower() == "https":
            return True

        if self._text(HTTPS_HEADERS["forwarded"]).lower() == "https":
            return True

        frontend = self._text(HTTPS_HEADERS["frontend"]).lower()
        return frontend not in ("", "off")

    def request_method(self) -> str:
        """Upper-cased method, honouring ``X-HTTP-Method-Override``."""
        method = (
            self._text(REQUEST_HEADERS["override"])
            or self._text(REQUEST_HEADERS["method"])
            or REQUEST_HEADERS["default"]
        )
        return method.upper()

    def _port(self) -> int:
        raw = self._text(URL_HEADERS["port"])
        if not raw.isdigit():
            return 0
        return int(raw)

    def url(self) -> str:
        """Reconstruct the full URL of the current request.

        Example:
            >>> Environment({"HTTP_HOST": "test.dev", "REQUEST_URI": "/t.php?a=b"}).url()
            'http://test.dev/t.php?a=b'
        """
        secure = self.is_https()
        scheme = "https://" if secure else "http://"

        user = self._text(URL_HEADERS["authuser"])
        password = self._text(URL_HEADERS["authpw"])
        auth = f"{user}:{password}@" if user or password else ""

        host = self.host()

        port = self._port()
        default_port = PORT_SECURE if secure else PORT_UNSECURE
        port_part = "" if port in (0, default_port) else f":{port}"

        request = self._text(URL_HEADERS["request"])
        if request:
            path = request
        else:
            query = self._text(URL_HEADERS["query"])
            path = self._text(URL_HEADERS["script"]) + self._text(URL_HEADERS["path"])
            path += f"?{query}" if query else ""

        return f"{scheme}{auth}{host}{port_part}{path}"
