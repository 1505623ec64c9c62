"""Storefront FastAPI application.

Single-shopper web backend for the storefront views. Each request is wrapped
in the Protean domain context that matches its URL prefix.

Usage:
    uvicorn app:app --app-dir src --host 0.0.0.0 --port 8000 --reload
"""

from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from protean.exceptions import ObjectNotFoundError, ValidationError

from catalogue.domain import catalogue
from identity.domain import identity
from ordering.domain import ordering
from shared.config import Settings
from shared.errors import AuthenticationFailed, CollaboratorError, SessionRequired
from shared.utils.logging import bind_request, unbind_request
from storefront import Storefront, build_storefront, init_domains

# Domains are initialized at import so uvicorn workers share them
init_domains()

logger = structlog.get_logger(__name__)

# ---------------------------------------------------------------------------
# Route-to-domain mapping
# ---------------------------------------------------------------------------
_ROUTE_DOMAIN_MAP = {
    "/session": identity,
    "/products": catalogue,
    "/seller": catalogue,
    "/cart": ordering,
    "/checkout": ordering,
    "/orders": ordering,
}


def _resolve_domain(path: str):
    for prefix, domain in _ROUTE_DOMAIN_MAP.items():
        if path == prefix or path.startswith(prefix + "/"):
            return domain
    return None


# ---------------------------------------------------------------------------
# Exception handlers
# ---------------------------------------------------------------------------
async def _validation_error(request: Request, exc: ValidationError) -> JSONResponse:
    return JSONResponse(status_code=400, content={"detail": exc.messages})


async def _not_found(request: Request, exc: ObjectNotFoundError) -> JSONResponse:
    # The {"_entity": message} payload it was raised with
    detail = exc.args[0] if exc.args else str(exc)
    return JSONResponse(status_code=404, content={"detail": detail})


async def _session_required(request: Request, exc: SessionRequired) -> JSONResponse:
    return JSONResponse(
        status_code=401,
        content={"detail": {"message": str(exc), "redirect": f"/login?redirect={request.url.path}"}},
    )


async def _authentication_failed(request: Request, exc: AuthenticationFailed) -> JSONResponse:
    logger.warning("Sign-in rejected", path=request.url.path)
    return JSONResponse(status_code=401, content={"detail": exc.user_message})


async def _collaborator_error(request: Request, exc: CollaboratorError) -> JSONResponse:
    logger.error(
        "Collaborator failed",
        path=request.url.path,
        error_type=type(exc).__name__,
        error=str(exc),
    )
    return JSONResponse(status_code=502, content={"detail": exc.user_message})


# ---------------------------------------------------------------------------
# App factory
# ---------------------------------------------------------------------------
def create_app(storefront: Storefront | None = None, settings: Settings | None = None) -> FastAPI:
    """Build the application.

    When `storefront` is given it is used as-is (and still started and closed
    by the lifespan); otherwise one is built from `settings`.
    """
    settings = settings or Settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        app.state.storefront = storefront or build_storefront(settings)
        await app.state.storefront.start()
        try:
            yield
        finally:
            app.state.storefront.close()

    app = FastAPI(
        title="Storefront API",
        description="Catalogue, session, cart, checkout and orders for a cash-on-delivery storefront",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.get_allowed_origins(),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def domain_context_middleware(request: Request, call_next):
        """Push the correct Protean domain context for each request."""
        domain = _resolve_domain(request.url.path)
        bind_request(method=request.method, path=request.url.path)
        try:
            if domain is None:
                # Health check and docs
                return await call_next(request)
            with domain.domain_context():
                return await call_next(request)
        finally:
            unbind_request()

    app.add_exception_handler(ValidationError, _validation_error)
    app.add_exception_handler(ObjectNotFoundError, _not_found)
    app.add_exception_handler(SessionRequired, _session_required)
    app.add_exception_handler(CollaboratorError, _collaborator_error)
    app.add_exception_handler(AuthenticationFailed, _authentication_failed)

    from catalogue.api import product_router, seller_router
    from identity.api import router as session_router
    from ordering.api import cart_router, checkout_router, order_router

    app.include_router(session_router)
    app.include_router(product_router)
    app.include_router(seller_router)
    app.include_router(cart_router)
    app.include_router(checkout_router)
    app.include_router(order_router)

    @app.get("/health")
    async def health(request: Request):
        state = request.app.state.storefront
        return JSONResponse(
            content={
                "status": "ok",
                "session": state.session.status.value,
                "domains": {
                    "identity": {"name": identity.name},
                    "catalogue": {"name": catalogue.name, "products": len(state.catalogue.all())},
                    "ordering": {"name": ordering.name, "orders": len(state.orders.list_orders())},
                },
            }
        )

    return app


app = create_app()
