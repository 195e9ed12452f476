"""FastAPI application entry point."""

import argparse
import logging
import sys
from contextlib import asynccontextmanager
from typing import Any

import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse

from github_webhooks import __version__
from github_webhooks.config import get_settings
from github_webhooks.webhook import WebhookError
from github_webhooks.webhook import router as webhook_router

logger = logging.getLogger(__name__)


def setup_logging(level: str) -> None:
    """Configure structured logging."""
    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )


@asynccontextmanager
async def lifespan(_app: FastAPI):
    """Application lifespan handler."""
    settings = get_settings()
    setup_logging(settings.log_level)
    logger.info("GitHub webhook receiver starting up")
    yield
    logger.info("GitHub webhook receiver shutting down")


async def webhook_error_handler(_request: Request, exc: WebhookError) -> PlainTextResponse:
    """Render any webhook failure as the same plain-text body."""
    logger.info(f"Webhook request failed with {exc.status_code}: {exc}")
    return PlainTextResponse(exc.body, status_code=exc.status_code)


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Settings are loaded here rather than on first request so a missing
    webhook secret stops the process before it accepts any traffic.
    """
    settings = get_settings()

    app = FastAPI(
        title="GitHub Webhooks",
        description="Signature-verified GitHub webhook receiver",
        version=__version__,
        lifespan=lifespan,
    )

    app.add_exception_handler(WebhookError, webhook_error_handler)  # type: ignore[arg-type]

    # Include routers
    app.include_router(webhook_router, prefix=settings.webhook_prefix, tags=["webhook"])

    @app.get("/health")
    async def health_check() -> dict[str, Any]:
        """Health check endpoint."""
        return {"status": "healthy", "version": __version__}

    return app


def cli() -> None:
    """CLI entry point."""
    parser = argparse.ArgumentParser(description="GitHub Webhooks - signature-verified receiver")
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Serve command
    serve_parser = subparsers.add_parser("serve", help="Start the webhook server")
    serve_parser.add_argument("--host", default=None, help="Host to bind to")
    serve_parser.add_argument("--port", type=int, default=None, help="Port to bind to")
    serve_parser.add_argument("--reload", action="store_true", help="Enable auto-reload")

    args = parser.parse_args()

    if args.command == "serve":
        settings = get_settings()
        setup_logging(settings.log_level)
        uvicorn.run(
            "github_webhooks.main:create_app",
            factory=True,
            host=args.host or settings.host,
            port=args.port or settings.port,
            reload=args.reload,
        )
    else:
        parser.print_help()


if __name__ == "__main__":
    cli()
