#!/usr/bin/env python3
"""
Simulate a GitHub webhook for local testing.

Usage:
    python scripts/simulate_webhook.py --event push --repo owner/repo
"""

import argparse
import hashlib
import hmac
import json
import os
import uuid

import httpx


def main():
    parser = argparse.ArgumentParser(description="Simulate GitHub webhook")
    parser.add_argument("--url", default="http://localhost:8000/api/github")
    parser.add_argument("--event", default="push", help="X-GitHub-Event header value")
    parser.add_argument("--repo", required=True, help="Repository (owner/repo)")
    parser.add_argument("--ref", default="refs/heads/main", help="Pushed ref")
    parser.add_argument(
        "--secret", default=None, help="Webhook secret (or use GITHUB_WEBHOOK_SECRET env)"
    )
    parser.add_argument(
        "--tamper", action="store_true", help="Send a signature that does not match the body"
    )

    args = parser.parse_args()

    secret = args.secret or os.environ.get("GITHUB_WEBHOOK_SECRET")
    if not secret:
        print("Error: Webhook secret required (--secret or GITHUB_WEBHOOK_SECRET)")
        return 1

    payload = {
        "ref": args.ref,
        "repository": {
            "full_name": args.repo,
        },
    }

    payload_bytes = json.dumps(payload).encode()
    digest = hmac.new(
        secret.encode("utf-8"),
        payload_bytes,
        hashlib.sha1,
    ).hexdigest()
    signature = "sha1=" + ("0" * len(digest) if args.tamper else digest)

    print(f"Sending webhook to {args.url}")
    print(f"Payload: {json.dumps(payload, indent=2)}")

    response = httpx.post(
        args.url,
        content=payload_bytes,
        headers={
            "Content-Type": "application/json",
            "X-Hub-Signature": signature,
            "X-GitHub-Event": args.event,
            "X-GitHub-Delivery": str(uuid.uuid4()),
        },
    )

    print(f"\nResponse status: {response.status_code}")
    print(f"Response body: {response.text}")

    return 0 if response.status_code == 200 else 1


if __name__ == "__main__":
    exit(main())
