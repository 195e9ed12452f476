"""Decode-then-verify pipeline that runs ahead of the webhook routes."""

import logging
from dataclasses import dataclass
from typing import Any

from fastapi import Request

from github_webhooks.config import get_settings
from github_webhooks.webhook.body import BodyCapturingDecoder, BodyStream
from github_webhooks.webhook.context import StarletteContext
from github_webhooks.webhook.errors import NotAcceptable, WebhookRejected
from github_webhooks.webhook.validator import Rejected, SignatureVerifier

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class WebhookDelivery:
    """An authenticated webhook delivery as seen by route handlers."""

    payload: dict[str, Any] | None
    raw_body: bytes
    event: str | None = None
    delivery_id: str | None = None


# Media ranges in an Accept header that allow a JSON response
JSON_MEDIA_RANGES = {"*/*", "application/*", "application/json"}


def accepts_json(accept: str | None) -> bool:
    """
    Check whether an Accept header allows a JSON response.

    A missing or blank header accepts anything. Ranges with ``q=0`` are
    refusals and do not count.
    """
    if not accept or not accept.strip():
        return True

    for entry in accept.split(","):
        media_range, *params = (part.strip() for part in entry.split(";"))
        if media_range.lower() not in JSON_MEDIA_RANGES:
            continue
        quality = 1.0
        for param in params:
            key, _, value = param.partition("=")
            if key.strip().lower() == "q":
                try:
                    quality = float(value)
                except ValueError:
                    quality = 1.0
        if quality > 0:
            return True
    return False


async def verify_github_webhook(request: Request) -> WebhookDelivery:
    """
    FastAPI dependency that authenticates a GitHub webhook delivery.

    Reading the body stream is the first thing that happens, so nothing
    upstream can consume it before the raw bytes are captured. A rejected
    signature raises WebhookRejected and the route never runs.

    Raises:
        ParseError: If a JSON body is malformed
        TooLarge: If the body exceeds the configured size limit
        NotAcceptable: If the Accept header rules out JSON
        WebhookRejected: If the signature does not match
    """
    settings = get_settings()
    context = StarletteContext(request)

    decoder = BodyCapturingDecoder(max_body_size=settings.max_body_size)
    result = await decoder.decode(
        request.headers.get("content-type"),
        BodyStream(request.stream()),
        context,
    )

    if not accepts_json(request.headers.get("accept")):
        logger.warning(f"Unacceptable Accept header: {request.headers.get('accept')}")
        raise NotAcceptable("Client does not accept JSON responses")

    verifier = SignatureVerifier(settings.github_webhook_secret)
    outcome = verifier.verify_request(context)
    if isinstance(outcome, Rejected):
        logger.warning(f"Rejected webhook delivery to {request.url.path}")
        raise WebhookRejected(outcome)

    return WebhookDelivery(
        payload=result.payload,
        raw_body=result.raw_body,
        event=request.headers.get("x-github-event"),
        delivery_id=request.headers.get("x-github-delivery"),
    )
