"""Reading and building the page URLs that select a globe."""

from __future__ import annotations

GLOBE_PARAM = "globe"


def get_query_param(query_string: str, param_name: str) -> str | None:
    """The value of the first ``param_name=value`` pair in a query string, or None."""
    for pair in query_string.lstrip("?").split("&"):
        parts = pair.split("=")
        if len(parts) >= 2 and parts[0] == param_name:
            return parts[1]
    return None


def extract_until_question_mark(url: str) -> str:
    """The part of ``url`` before the first '?', or the whole of it."""
    return url.split("?", 1)[0]


def globe_url(current_url: str, globe_id: str) -> str:
    """The page URL that opens ``globe_id``, replacing any query of ``current_url``."""
    return f"{extract_until_question_mark(current_url)}?{GLOBE_PARAM}={globe_id}"