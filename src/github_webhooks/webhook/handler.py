"""GitHub webhook handler."""

import logging

from fastapi import APIRouter, Depends

from github_webhooks.webhook.pipeline import WebhookDelivery, verify_github_webhook

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/github")
async def github_webhook(
    delivery: WebhookDelivery = Depends(verify_github_webhook),
) -> dict[str, str]:
    """
    Handle incoming GitHub webhooks.

    Only reached once the delivery's signature has been verified. The
    dependency sits on the route rather than the router because the handler
    needs the WebhookDelivery it returns.
    """
    event = delivery.event or "unknown"
    logger.info(f"Received {event} event (delivery {delivery.delivery_id})")

    return {"status": "received", "event": event}
