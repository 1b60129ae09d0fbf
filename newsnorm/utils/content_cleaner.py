"""Boilerplate and paywall noise removal for extracted article bodies.

The cleaner runs a fixed, ordered pipeline:

1. remove boilerplate phrases (``BOILERPLATE_PATTERNS``)
2. drop whole sentences that mention paywall keywords
3. normalize whitespace into blank-line separated paragraphs

``sanitize`` repeats the pipeline until the text stops changing, so applying
it twice gives the same result as applying it once. ``clean_body`` adds the
length-gated recovery step and the lead prefix on top of ``sanitize``.
"""

from __future__ import annotations

import logging
import re

logger = logging.getLogger(__name__)

# Bump when the pattern list changes so stored outputs can be traced back.
BOILERPLATE_PATTERNS_VERSION = "2024.06"

# (pattern, replacement) pairs, applied in order, case-insensitive.
BOILERPLATE_PATTERNS: tuple[tuple[str, str], ...] = (
    # Paywall messages
    (r"Thank you for your patience while we verify access\.", ""),
    (
        r"If you are in Reader mode please exit and log into your Times "
        r"account, or subscribe for all of The Times\.",
        "",
    ),
    (r"Already a subscriber\?\s*Log in\.", ""),
    (r"Want all of The Times\?\s*Subscribe\.", ""),
    (r"Subscribe for full access to The Times\.", ""),
    (r"Log in to continue reading\.", ""),
    (r"This article is for subscribers only\.", ""),
    (r"You have reached your limit of free articles\.", ""),
    (r"Create a free account or log in to continue reading\.", ""),
    (r"Sign up to continue reading\.", ""),
    # Navigation and UI text
    (r"Continue reading the main story", ""),
    (r"Advertisement", ""),
    (r"^Supported by$", ""),
    (r"Continue reading$", ""),
    (r"Read more$", ""),
    (r"Show more$", ""),
    (r"Hide$", ""),
    # Social and sharing
    (r"Share this article", ""),
    (r"Follow us on", ""),
    (r"Subscribe to our newsletter", ""),
    (r"Download the app", ""),
    # Comments and interaction
    (r"^\d+\s*comments?$", ""),
    (r"Share your thoughts", ""),
    (r"What do you think\?", ""),
    # Footers
    (r"Times subscribers can gift articles", ""),
    (r"Give this article as a gift", ""),
    (r"A version of this article appears in print", ""),
)

PAYWALL_KEYWORDS: tuple[str, ...] = (
    "subscriber",
    "subscription",
    "log in",
    "sign up",
    "paywall",
    "free articles",
    "Reader mode",
    "Times account",
    "full access",
    "Create a free account",
    "Sign up to continue",
)

# Cleaned bodies shorter than this are suspect ...
MIN_CLEAN_LENGTH = 200
# ... when the raw input was longer than this.
MIN_RAW_LENGTH_FOR_RECOVERY = 500

_MAX_PASSES = 10

_COMPILED_BOILERPLATE = tuple(
    (re.compile(pattern, re.IGNORECASE), replacement)
    for pattern, replacement in BOILERPLATE_PATTERNS
)

# A sentence runs up to its terminal punctuation; a trailing sentence
# without punctuation runs to the end of the text.
_PAYWALL_SENTENCE_RE = re.compile(
    r"[^.!?]*(?:"
    + "|".join(re.escape(k) for k in PAYWALL_KEYWORDS)
    + r")[^.!?]*(?:[.!?]|\Z)",
    re.IGNORECASE,
)

_EXCESS_NEWLINES_RE = re.compile(r"\n{3,}")


def remove_boilerplate(text: str) -> str:
    for pattern, replacement in _COMPILED_BOILERPLATE:
        text = pattern.sub(replacement, text)
    return text


def remove_paywall_sentences(text: str) -> str:
    """Drop every sentence that contains a paywall keyword."""
    return _PAYWALL_SENTENCE_RE.sub("", text)


def normalize_whitespace(text: str) -> str:
    """Trim lines, drop empty ones and separate paragraphs with a blank line."""
    text = _EXCESS_NEWLINES_RE.sub("\n\n", text).strip()
    lines = [line.strip() for line in text.split("\n")]
    return "\n\n".join(line for line in lines if line)


def _single_pass(text: str) -> str:
    text = remove_boilerplate(text)
    text = remove_paywall_sentences(text)
    return normalize_whitespace(text)


def sanitize(text: str | None) -> str:
    """Run the cleaning pipeline until the text is stable."""
    current = text or ""
    for _ in range(_MAX_PASSES):
        cleaned = _single_pass(current)
        if cleaned == current:
            return cleaned
        current = cleaned
    logger.warning("Content cleaning did not settle after %d passes", _MAX_PASSES)
    return current


def should_recover(raw: str, cleaned: str) -> bool:
    """True when cleaning removed nearly everything from a long input."""
    return (
        len(cleaned) < MIN_CLEAN_LENGTH and len(raw) > MIN_RAW_LENGTH_FOR_RECOVERY
    )


def clean_body(
    raw: str | None,
    fallback_body: str | None = None,
    lead: str | None = None,
) -> str:
    """Clean a markup-derived body.

    When cleaning leaves less than ``MIN_CLEAN_LENGTH`` characters of an input
    longer than ``MIN_RAW_LENGTH_FOR_RECOVERY``, the page was mostly paywall
    text; ``fallback_body`` (the structured-data article body) is used
    instead if it is longer. A non-empty ``lead`` is prefixed with a blank
    line.
    """
    raw = raw or ""
    cleaned = sanitize(raw)

    if should_recover(raw, cleaned) and fallback_body:
        if len(fallback_body) > len(cleaned):
            logger.info(
                "Cleaned body too short (%d of %d chars); using structured "
                "article body (%d chars)",
                len(cleaned),
                len(raw),
                len(fallback_body),
            )
            cleaned = fallback_body

    lead = (lead or "").strip()
    if lead:
        return f"{lead}\n\n{cleaned}" if cleaned else lead
    return cleaned
