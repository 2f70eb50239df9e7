"""DesiBasket mock API.

A local stand-in for the backend the storefront talks to: phone-OTP login,
catalogue browsing and weekly requests. The fake identity provider and order
service behind it keep everything in memory.

Usage:
    uvicorn storefront.app:app --host 0.0.0.0 --port 8000 --reload
"""

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from catalogue.api import combo_router, farmer_router, product_router
from catalogue.domain import catalogue as catalogue_domain
from catalogue.source import create_catalogue
from identity.api.routes import router as identity_router
from identity.domain import identity
from identity.provider import FakeIdentityProvider
from ordering.api.routes import router as requests_router
from ordering.domain import ordering
from ordering.service import FakeOrderService
from storefront.bootstrap import init_domains

# ---------------------------------------------------------------------------
# Route-to-domain mapping
# ---------------------------------------------------------------------------
_ROUTE_DOMAIN_MAP = {
    "/auth": identity,
    "/products": catalogue_domain,
    "/farmers": catalogue_domain,
    "/combos": catalogue_domain,
    "/requests": ordering,
}


def _resolve_domain(path: str):
    """Return the domain for the given request path, or None."""
    for prefix, domain in _ROUTE_DOMAIN_MAP.items():
        if path.startswith(prefix):
            return domain
    return None


def create_app(catalogue=None, identity_provider=None, order_service=None) -> FastAPI:
    """Build the mock API around the given collaborators (fakes by default)."""
    init_domains()

    app = FastAPI(
        title="DesiBasket API",
        description="Mock storefront backend: OTP login, catalogue and weekly requests",
    )
    app.state.catalogue = catalogue or create_catalogue()
    app.state.identity_provider = identity_provider or FakeIdentityProvider()
    app.state.order_service = order_service or FakeOrderService()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def domain_context_middleware(request: Request, call_next):
        """Push the correct Protean domain context for each request."""
        domain = _resolve_domain(request.url.path)
        if domain is not None:
            with domain.domain_context():
                response = await call_next(request)
            return response
        # No domain match, pass through (health check, docs, etc.)
        return await call_next(request)

    app.include_router(identity_router)
    app.include_router(product_router)
    app.include_router(farmer_router)
    app.include_router(combo_router)
    app.include_router(requests_router)

    @app.get("/health")
    async def health():
        return JSONResponse(
            content={
                "status": "ok",
                "domains": {
                    "catalogue": {"name": catalogue_domain.name},
                    "identity": {"name": identity.name},
                    "ordering": {"name": ordering.name},
                },
            }
        )

    return app


app = create_app()
