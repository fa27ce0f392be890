"""
HTML sanitization for free-text bookmark fields.

Disallowed tags are escaped rather than removed, so `<script>` is stored and
returned as `&lt;script&gt;` with its text intact. Disallowed attributes (event
handlers such as `onerror`, inline styles) are dropped from allowed tags.
Already-escaped text passes through unchanged, which makes sanitizing
idempotent and safe to apply on both the write and the read path.
"""
from bleach.sanitizer import Cleaner

ALLOWED_TAGS = frozenset({
    "a",
    "abbr",
    "b",
    "blockquote",
    "br",
    "code",
    "del",
    "em",
    "h1",
    "h2",
    "h3",
    "h4",
    "h5",
    "h6",
    "hr",
    "i",
    "img",
    "li",
    "ol",
    "p",
    "pre",
    "s",
    "small",
    "span",
    "strong",
    "sub",
    "sup",
    "u",
    "ul",
})

ALLOWED_ATTRIBUTES = {
    "a": ["href", "title", "target"],
    "abbr": ["title"],
    "img": ["src", "alt", "title", "width", "height"],
}

ALLOWED_PROTOCOLS = frozenset({"http", "https", "mailto"})

_CLEANER = Cleaner(
    tags=ALLOWED_TAGS,
    attributes=ALLOWED_ATTRIBUTES,
    protocols=ALLOWED_PROTOCOLS,
    strip=False,
    strip_comments=True,
)


def sanitize_text(value: str | None) -> str:
    """Neutralize executable markup in `value`. `None` becomes an empty string."""
    if not value:
        return ""
    return _CLEANER.clean(value)
