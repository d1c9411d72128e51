"""Extraction of ``@username`` mentions from reply text."""
from __future__ import annotations

import re

# "@" followed by ASCII letters, digits or underscores.
MENTION_PATTERN = re.compile(r"@(\w+)", re.ASCII)


def extract_mentions(text: str) -> set[str]:
    """Return the distinct usernames tagged in ``text``.

    Matching is case-sensitive; ``@Alice`` and ``@alice`` are different tags.
    """
    return set(MENTION_PATTERN.findall(text or ""))
