"""Sanitization — HTML escaping and e-mail syntax for inbound free text.

Invariants:
    - escape_html replaces exactly & < > " ' with entities; & is replaced first
    - EMAIL_RE: printable local part, dot-separated domain labels of 1-63 chars,
      alphanumeric with internal hyphens only
"""

import re

_HTML_ENTITIES = {
    "&": "&amp;",
    "<": "&lt;",
    ">": "&gt;",
    '"': "&quot;",
    "'": "&#039;",
}
_HTML_SPECIALS = re.compile(r"[&<>\"']")

_LABEL = r"[a-zA-Z0-9](?:[a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?"
EMAIL_RE = re.compile(
    r"^[a-zA-Z0-9.!#$%&'*+/=?^_`{|}~-]+"
    rf"@{_LABEL}(?:\.{_LABEL})*$"
)


def escape_html(text: str) -> str:
    """Replace markup-significant characters with their entities."""
    return _HTML_SPECIALS.sub(lambda m: _HTML_ENTITIES[m.group(0)], text)


def is_valid_email(value: str) -> bool:
    # fullmatch: "$" alone would accept a trailing newline
    return EMAIL_RE.fullmatch(value) is not None
