"""Shared text helpers for the extractors."""

import re

from bs4 import Tag

# Byte sequences that render as non-breaking spaces in the bulletin export.
# "Â\xa0" is a UTF-8 NBSP decoded as Latin-1 and must be replaced before "\xa0".
STRAY_SPACES: tuple[str, ...] = ("\u00c2\xa0", "\xa0", "\u202f", "\u2007")

_WHITESPACE = re.compile(r"\s+")


def normalize(text: str | None) -> str:
    """Trim, collapse whitespace runs and drop stray NBSP artifacts.

    Idempotent: normalize(normalize(x)) == normalize(x).
    """
    if not text:
        return ""
    for stray in STRAY_SPACES:
        text = text.replace(stray, " ")
    return _WHITESPACE.sub(" ", text).strip()


def node_text(node: Tag | None) -> str:
    """Normalized text of a node, "" for a missing node."""
    return normalize(node.get_text()) if node is not None else ""
