"""
Route Gating

Decides where a browser route should redirect given the caller's session and
onboarding state.
"""

from __future__ import annotations

PUBLIC_ROUTES = frozenset({"/", "/login", "/register"})
ONBOARDING_ROUTE = "/onboarding"
LOGIN_ROUTE = "/login"
AUTHENTICATED_ROUTES = frozenset(
    {"/dashboard", "/ai-tools", "/calendar", "/resources", "/settings"}
)


def _normalize(path: str) -> str:
    path = path.split("?", 1)[0].split("#", 1)[0]
    if len(path) > 1:
        path = path.rstrip("/")
    return path or "/"


def is_authenticated_route(path: str) -> bool:
    path = _normalize(path)
    return any(path == route or path.startswith(route + "/") for route in AUTHENTICATED_ROUTES)


def resolve_route(
    path: str, *, authenticated: bool, onboarding_completed: bool | None
) -> str | None:
    """Redirect target for ``path``, or None to render it.

    Args:
        path: Requested browser path
        authenticated: Whether a session exists
        onboarding_completed: Profile flag; None when the profile is unknown

    Returns:
        ``/login``, ``/onboarding`` or None
    """
    path = _normalize(path)

    if path in PUBLIC_ROUTES:
        return None

    gated = path == ONBOARDING_ROUTE or is_authenticated_route(path)
    if not gated:
        return None

    if not authenticated:
        return LOGIN_ROUTE

    if is_authenticated_route(path) and onboarding_completed is False:
        return ONBOARDING_ROUTE

    return None
