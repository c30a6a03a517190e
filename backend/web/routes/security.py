"""
Shared web security helpers for the course page routes.

Contains the CSRF same-origin check that guards the edit actions. The
actions are plain links in the rendered outline, so a foreign page could
otherwise trigger them through the viewer's browser.
"""
from __future__ import annotations

from urllib.parse import urlparse

from fastapi import Request


def _default_port(scheme: str) -> int:
    return 443 if scheme == "https" else 80


def _parse_origin(url: str) -> tuple[str, str, int]:
    p = urlparse(url)
    if not p.scheme or not p.hostname:
        raise ValueError("invalid_origin")
    scheme = p.scheme.lower()
    host = p.hostname.lower()
    port = p.port if p.port is not None else _default_port(scheme)
    return scheme, host, int(port)


def _parse_server(request: Request, *, trust_proxy: bool) -> tuple[str, str, int]:
    if trust_proxy:
        xf_proto = (request.headers.get("x-forwarded-proto") or request.url.scheme or "").split(",")[0].strip()
        xf_host = (request.headers.get("x-forwarded-host") or request.headers.get("host") or "").split(",")[0].strip()
        scheme = (xf_proto or request.url.scheme or "http").lower()
        if ":" in xf_host:
            host_only, port_str = xf_host.rsplit(":", 1)
            host = host_only.lower()
            port = int(port_str) if port_str.isdigit() else _default_port(scheme)
        else:
            host = (xf_host or (request.url.hostname or "")).lower()
            port = int(request.url.port) if request.url.port else _default_port(scheme)
        xf_port = (request.headers.get("x-forwarded-port") or "").split(",")[0].strip()
        if xf_port.isdigit():
            port = int(xf_port)
        return scheme, host, port

    scheme = (request.url.scheme or "http").lower()
    host = (request.url.hostname or "").lower()
    port = int(request.url.port) if request.url.port else _default_port(scheme)
    return scheme, host, port


def _is_same_origin(request: Request, *, trust_proxy: bool = False) -> bool:
    """Verify same-origin using Origin or Referer headers.

    Behavior:
    - If Origin is present, require exact scheme/host/port match with server.
    - Else if Referer is present, validate its origin similarly.
    - Else (no headers): allow to not break non-browser clients.
    Proxy awareness: X-Forwarded-* is only trusted when `trust_proxy` is set.
    """
    server = _parse_server(request, trust_proxy=trust_proxy)
    indicator = request.headers.get("origin") or request.headers.get("referer")
    if not indicator:
        return True
    try:
        return _parse_origin(indicator) == server
    except ValueError:
        return False


def _has_origin_indicator(request: Request) -> bool:
    return bool(request.headers.get("origin") or request.headers.get("referer"))


__all__ = ["_is_same_origin", "_has_origin_indicator"]
