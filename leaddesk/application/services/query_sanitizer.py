"""Query sanitization and match-pattern builders.

sanitize_query removes characters that carry meaning in PostgreSQL tsquery
syntax. build_prefix_expression turns the sanitized text into a prefix-match
tsquery ('foo:* & bar:*'). build_like_pattern produces the unanchored,
case-insensitive ILIKE pattern used by the substring sources.
"""

import re

# Boolean operators, grouping, quoting, wildcard and backslash.
_TSQUERY_SPECIAL = re.compile(r"[&|!():<>*\\\"']")
_LIKE_SPECIAL = re.compile(r"([\\%_])")


def sanitize_query(query: str) -> str:
    """Replace tsquery-significant characters with spaces, then trim."""
    return _TSQUERY_SPECIAL.sub(" ", query).strip()


def build_prefix_expression(query: str) -> str:
    """Return a tsquery that prefix-matches every token (AND-joined).

    Empty string when the sanitized query has no tokens.
    """
    tokens = [t for t in sanitize_query(query).split() if t]
    return " & ".join(f"{t}:*" for t in tokens)


def build_like_pattern(query: str) -> str:
    """Return '%<sanitized, lowercased>%' with LIKE wildcards escaped.

    Use with ILIKE ... ESCAPE '\\' so the query is matched literally.
    """
    escaped = _LIKE_SPECIAL.sub(r"\\\1", sanitize_query(query).lower())
    return f"%{escaped}%"
