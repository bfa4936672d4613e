"""
FastAPI application exposing the oracle over HTTP.

Endpoints:
  - ``GET /api/price?token=<id>[&trustedClientKey=<key>]``: signed price.
  - ``GET /health``: liveness plus the Ed25519 public key consumers pin.
"""
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from src.priceoracle.oracle.handler import OracleHandler


def create_app(handler: OracleHandler) -> FastAPI:
    """Wire *handler* into a new FastAPI application."""
    app = FastAPI(
        title="Price Oracle",
        description="Ed25519-signed USD spot prices for on-chain verification",
    )

    @app.get("/api/price")
    def oracle_price(request: Request):
        result = handler.handle(request.query_params)
        return JSONResponse(
            status_code=result.status_code,
            content=result.body,
            media_type=result.media_type,
        )

    @app.get("/health")
    def health():
        return {
            "status": "ok",
            "public_key": handler.public_key_hex,
        }

    return app
