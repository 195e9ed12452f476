"""Errors raised while processing a webhook delivery."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from github_webhooks.webhook.validator import Rejected

# Every failure is reported with the same body so a caller probing the
# endpoint cannot tell which check tripped.
NOT_AUTHORIZED = "Not Authorized"


class WebhookError(Exception):
    """Base class for request-level webhook failures."""

    status_code = 400
    body = NOT_AUTHORIZED


class ParseError(WebhookError):
    """The body was declared as JSON but could not be decoded."""

    status_code = 400

    def __init__(self, message: str, raw_body: bytes = b""):
        super().__init__(message)
        self.raw_body = raw_body


class TooLarge(WebhookError):
    """The body exceeded the configured size limit."""

    status_code = 413

    def __init__(self, limit: int):
        super().__init__(f"Request body exceeds {limit} bytes")
        self.limit = limit


class NotAcceptable(WebhookError):
    """The Accept header rules out a JSON response."""

    status_code = 406


class WebhookRejected(WebhookError):
    """Signature verification produced a Rejected outcome."""

    def __init__(self, outcome: Rejected):
        super().__init__("Webhook signature rejected")
        self.outcome = outcome
        self.status_code = outcome.status_code
        self.body = outcome.body
