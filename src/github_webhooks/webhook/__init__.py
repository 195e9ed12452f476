"""Webhook handling for GitHub events."""

from github_webhooks.webhook.body import BodyCapturingDecoder, BodyStream, DecodeResult
from github_webhooks.webhook.errors import (
    NotAcceptable,
    ParseError,
    TooLarge,
    WebhookError,
    WebhookRejected,
)
from github_webhooks.webhook.handler import router
from github_webhooks.webhook.pipeline import WebhookDelivery, verify_github_webhook
from github_webhooks.webhook.validator import (
    Authorized,
    Rejected,
    SignatureVerifier,
    validate_github_signature,
)

__all__ = [
    "Authorized",
    "BodyCapturingDecoder",
    "BodyStream",
    "DecodeResult",
    "NotAcceptable",
    "ParseError",
    "Rejected",
    "SignatureVerifier",
    "TooLarge",
    "WebhookDelivery",
    "WebhookError",
    "WebhookRejected",
    "router",
    "validate_github_signature",
    "verify_github_webhook",
]
