"""Verification and decoding of GitHub webhooks, and command extraction."""

from __future__ import annotations

import hashlib
import hmac
import json
import logging
from collections.abc import Iterator

from crater.github import EventIssueComment
from crater.hex import HexError, from_hex

_log = logging.getLogger(__name__)


class WebhookError(Exception):
    """A webhook delivery was rejected."""


def verify_signature(secret: str, payload: bytes, raw_signature: str) -> bool:
    """Check an ``X-Hub-Signature`` value of the form ``sha1=<hex>``."""
    if "=" not in raw_signature:
        return False
    algorithm, _, hex_signature = raw_signature.partition("=")
    try:
        signature = from_hex(hex_signature)
    except HexError:
        return False
    if algorithm != "sha1":
        return False
    expected = hmac.new(secret.encode("utf-8"), payload, hashlib.sha1).digest()
    return hmac.compare_digest(expected, signature)


def extract_commands(body: str, bot_username: str) -> Iterator[str]:
    """Yield the commands addressed to the bot in a comment, in order.

    The bot acts on the first one only.
    """
    start = f"@{bot_username} "
    for line in body.split("\n"):
        line = line.removesuffix("\r")
        if not line.startswith(start):
            continue
        command = line[line.index(" "):].strip()
        if command:
            yield command


def check_webhook(
    secret: str, payload: bytes, signature: str, event: str
) -> EventIssueComment | None:
    """Verify a webhook and return the comment event it carries, if any to act on.

    Only newly created comments are returned; pings and other comment actions
    give None. Bad signatures and unknown events raise WebhookError.
    """
    if not verify_signature(secret, payload, signature):
        raise WebhookError("invalid signature for the webhook!")

    if event == "ping":
        _log.info("the webhook is configured correctly!")
        return None
    if event == "issue_comment":
        comment = EventIssueComment.from_dict(json.loads(payload))
        return comment if comment.action == "created" else None
    raise WebhookError(f"invalid event received: {event}")