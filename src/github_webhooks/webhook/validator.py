"""GitHub webhook signature validation."""

import hashlib
import hmac
import logging
from dataclasses import dataclass

from github_webhooks.webhook.context import RAW_BODY_KEY, RequestContext
from github_webhooks.webhook.errors import NOT_AUTHORIZED

logger = logging.getLogger(__name__)

SIGNATURE_HEADER = "X-Hub-Signature"
SIGNATURE_PREFIX = "sha1="
NO_SIGNATURE = "no signature"


@dataclass(frozen=True)
class Authorized:
    """The request carries a valid signature and may proceed unchanged."""


@dataclass(frozen=True)
class Rejected:
    """The request must be answered with this response and go no further."""

    status_code: int = 401
    body: str = NOT_AUTHORIZED


VerificationOutcome = Authorized | Rejected


def get_signature(header_value: str | None) -> str:
    """
    Extract the hex digest from an X-Hub-Signature header value.

    Returns the ``no signature`` sentinel when the header is missing or does
    not start with ``sha1=``. The sentinel is never a valid hex digest.
    """
    if header_value is None:
        logger.warning("Missing webhook signature")
        return NO_SIGNATURE

    if not header_value.startswith(SIGNATURE_PREFIX):
        logger.warning("Invalid signature format - expected sha1= prefix")
        return NO_SIGNATURE

    return header_value[len(SIGNATURE_PREFIX) :]


def compute_signature(payload: bytes, secret: str) -> str:
    """HMAC-SHA1 of the payload keyed with the secret, as lowercase hex."""
    return hmac.new(
        secret.encode("utf-8"),
        payload,
        hashlib.sha1,
    ).hexdigest()


def validate_github_signature(payload: bytes, signature: str | None, secret: str) -> bool:
    """
    Validate GitHub webhook signature using HMAC SHA-1.

    Args:
        payload: The raw request body bytes
        signature: The X-Hub-Signature header value
        secret: The webhook secret configured in GitHub

    Returns:
        True if the signature is valid, False otherwise
    """
    expected = compute_signature(payload, secret)
    claimed = get_signature(signature)

    # compare_digest rejects non-ASCII str, so compare as bytes
    is_valid = hmac.compare_digest(
        expected.encode("utf-8"),
        claimed.encode("utf-8"),
    )

    if not is_valid:
        logger.warning("Webhook signature validation failed")

    return is_valid


class SignatureVerifier:
    """Decide whether a decoded request was signed with the shared secret."""

    def __init__(self, secret: str):
        if not secret:
            raise ValueError("Webhook secret must not be empty")
        self._secret = secret

    def verify(self, payload: bytes, signature: str | None) -> VerificationOutcome:
        if validate_github_signature(payload, signature, self._secret):
            logger.debug("Webhook signature verified")
            return Authorized()
        return Rejected()

    def verify_request(self, context: RequestContext) -> VerificationOutcome:
        """Verify using the raw body captured on the context by the decoder."""
        raw_body = context.get_internal(RAW_BODY_KEY, b"")
        values = context.get_header(SIGNATURE_HEADER)
        if len(values) > 1:
            logger.warning(f"Got {len(values)} {SIGNATURE_HEADER} headers, expected one")
        signature = values[0] if len(values) == 1 else None
        return self.verify(raw_body, signature)
