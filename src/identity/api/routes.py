"""FastAPI endpoints for the session: sign in, sign up, sign out."""

from fastapi import APIRouter, Depends

from identity.api.schemas import CredentialsRequest, LogoutResponse, PrincipalSchema, SessionResponse
from identity.session.state import SessionState, SessionStatus
from storefront import Storefront, get_storefront

router = APIRouter(prefix="/session", tags=["session"])


def _session_response(session: SessionState) -> SessionResponse:
    principal = session.principal
    return SessionResponse(
        status=session.status.value,
        principal=(
            PrincipalSchema(user_id=str(principal.user_id), email=principal.email_address)
            if principal is not None
            else None
        ),
    )


@router.get("", response_model=SessionResponse)
async def current_session(storefront: Storefront = Depends(get_storefront)) -> SessionResponse:
    return _session_response(storefront.session)


@router.post("/login", response_model=SessionResponse)
async def login(body: CredentialsRequest, storefront: Storefront = Depends(get_storefront)) -> SessionResponse:
    await storefront.session.login(body.email, body.password)
    return _session_response(storefront.session)


@router.post("/signup", status_code=201, response_model=SessionResponse)
async def signup(body: CredentialsRequest, storefront: Storefront = Depends(get_storefront)) -> SessionResponse:
    await storefront.session.signup(body.email, body.password)
    return _session_response(storefront.session)


@router.post("/logout", response_model=LogoutResponse)
async def logout(storefront: Storefront = Depends(get_storefront)) -> LogoutResponse:
    redirect = await storefront.session.logout()
    return LogoutResponse(status=SessionStatus.ANONYMOUS.value, redirect=redirect)
