"""
Session naming rules.

Session ids are derived from the human-chosen meetup name so that everyone
typing the same name lands in the same session.

Dependencies: re, urllib.parse
System role: Deterministic session id derivation
"""

import re
from urllib.parse import quote

from meetup.core.exceptions import ValidationError

_WHITESPACE_RUN = re.compile(r"\s+")

# Characters encodeURIComponent leaves untouched besides alphanumerics.
_URI_COMPONENT_SAFE = "-_.!~*'()"


def slugify_session_name(name: str | None) -> str:
    """
    Convert a meetup name into its session id.

    Trims the name, lowercases it, replaces each whitespace run with a
    single hyphen and percent-encodes the result as a URI component.

    Args:
        name: Human-chosen meetup name

    Returns:
        str: Session id, e.g. "Friday Drinks" -> "friday-drinks"

    Raises:
        ValidationError: If the name is missing or blank
    """
    if name is None or not name.strip():
        raise ValidationError("Meetup name is required", field="name")

    slug = _WHITESPACE_RUN.sub("-", name.strip().lower())
    return quote(slug, safe=_URI_COMPONENT_SAFE)
