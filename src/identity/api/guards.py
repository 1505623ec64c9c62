"""Route guard for views that need a signed-in user."""

from urllib.parse import quote

from fastapi import HTTPException, Request

from identity.session.principal import Principal
from identity.session.state import AccessDecision, resolve_access
from storefront import get_storefront


def require_principal(request: Request) -> Principal:
    """FastAPI dependency returning the signed-in principal.

    While the session is still being resolved the request is answered with
    503 and a Retry-After header instead of a login redirect.
    """
    session = get_storefront(request).session
    decision = resolve_access(session.status)

    if decision == AccessDecision.PENDING:
        raise HTTPException(
            status_code=503,
            detail={"message": "Session is still being resolved"},
            headers={"Retry-After": "1"},
        )
    if decision == AccessDecision.LOGIN_REQUIRED:
        raise HTTPException(
            status_code=401,
            detail={
                "message": "Sign in required",
                "redirect": f"/login?redirect={quote(request.url.path)}",
            },
        )
    return session.principal
