"""Storefront HTTP API."""

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from protean.domain import Domain

from storefront.api.errors import register_exception_handlers
from storefront.api.routes import (
    cart_router,
    order_router,
    product_router,
    query_router,
    review_router,
    user_router,
)
from storefront.utils.logging import add_context, clear_context

__all__ = ["create_app"]


def create_app(domain: Domain) -> FastAPI:
    app = FastAPI(
        title="Storefront API",
        description="Cart, inventory and order lifecycle for a single storefront",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def domain_context_middleware(request: Request, call_next):
        """Push the domain context for each request."""
        clear_context()
        add_context(method=request.method, path=request.url.path)
        with domain.domain_context():
            response = await call_next(request)
        return response

    register_exception_handlers(app)

    app.include_router(user_router)
    app.include_router(product_router)
    app.include_router(cart_router)
    app.include_router(order_router)
    app.include_router(review_router)
    app.include_router(query_router)

    @app.get("/health")
    async def health():
        return JSONResponse(content={"status": "ok", "domain": domain.name})

    return app
