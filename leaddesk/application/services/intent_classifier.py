"""Query intent detection.

Looks at the shape of the raw query (email, phone, UUID, URL) so each data
source can pick its most selective filter. Rules are independent; a query
may match several. Intents steer filters only, they never exclude a source.
"""

import re

from leaddesk.domain.enums import SearchIntent

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
PHONE_PATTERN = re.compile(r"^[+]?[\d\s()-]{7,}$")
UUID_PATTERN = re.compile(
    r"^[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}$",
    re.IGNORECASE,
)
# Prefix match (the original rule is unanchored at the end): scheme optional.
URL_PATTERN = re.compile(r"^(https?://)?([\w.-]+)\.([a-z]{2,})", re.IGNORECASE)

_WHITESPACE = re.compile(r"\s")


def classify_intent(query: str) -> list[SearchIntent]:
    """Return the intents matched by query, in a fixed order.

    Never empty: falls back to [TEXT] when no rule matches.

    Args:
        query: Raw query string as typed by the caller.

    Returns:
        Ordered list of intents (email, phone, id, url) or [TEXT].
    """
    trimmed = query.strip()
    intents: list[SearchIntent] = []
    if EMAIL_PATTERN.match(trimmed):
        intents.append(SearchIntent.EMAIL)
    if PHONE_PATTERN.match(_WHITESPACE.sub("", query)):
        intents.append(SearchIntent.PHONE)
    if UUID_PATTERN.match(trimmed):
        intents.append(SearchIntent.ID)
    if URL_PATTERN.match(trimmed):
        intents.append(SearchIntent.URL)
    if not intents:
        intents.append(SearchIntent.TEXT)
    return intents
