"""Search result highlighting."""

import html
import re

DEFAULT_HIGHLIGHT_TAG = "mark"
DEFAULT_HIGHLIGHT_CLASS = "search-highlight"


def highlight_matches(
    text: str | None,
    query: str | None,
    *,
    highlight_tag: str = DEFAULT_HIGHLIGHT_TAG,
    highlight_class: str = DEFAULT_HIGHLIGHT_CLASS,
    case_sensitive: bool = False,
) -> str | None:
    """Wrap every literal occurrence of the query in a markup tag.

    The query is matched as plain text, never as a pattern.

    Args:
        text: Text to highlight
        query: Text to look for
        highlight_tag: Tag name used for wrapping
        highlight_class: Value of the tag's class attribute
        case_sensitive: Match case exactly

    Returns:
        Highlighted text, or ``text`` unchanged when text or query is empty
    """
    if not text or not query:
        return text

    flags = 0 if case_sensitive else re.IGNORECASE
    pattern = re.compile(re.escape(query), flags)
    opening = f'<{highlight_tag} class="{html.escape(highlight_class)}">'
    closing = f"</{highlight_tag}>"

    return pattern.sub(lambda m: f"{opening}{m.group(0)}{closing}", text)
