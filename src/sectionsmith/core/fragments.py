"""Turn filled-in template text into document nodes.

The template output is rendered as Markdown after a synthetic preamble is
prepended, so that output starting in the middle of a block still forms a
complete document. The preamble and surrounding blank nodes are then stripped
again, leaving only the nodes that came from the template.
"""

from __future__ import annotations

from collections.abc import Sequence

from bs4 import BeautifulSoup
from bs4.element import Comment, NavigableString, PageElement

from sectionsmith.adapters.markdown import MarkdownConversionError, render_markdown

from .exceptions import FragmentParseError


PREAMBLE_MARKER = "sectionsmith"
PREAMBLE = f"<!-- {PREAMBLE_MARKER} -->\n\n"


def wrap_fragment(text: str) -> str:
    """Wrap template output so it parses as a standalone document."""
    return f"{PREAMBLE}{text}\n"


def is_blank_node(node: PageElement) -> bool:
    """Return whether ``node`` is whitespace-only text."""
    return (
        isinstance(node, NavigableString)
        and not isinstance(node, Comment)
        and not node.strip()
    )


def is_preamble_marker(node: PageElement) -> bool:
    """Return whether ``node`` is the comment injected by :func:`wrap_fragment`."""
    return isinstance(node, Comment) and node.strip() == PREAMBLE_MARKER


def normalize_fragment(nodes: Sequence[PageElement]) -> list[PageElement]:
    """Strip the wrapper nodes around a parsed fragment.

    Leading blank and preamble nodes are removed. Trailing blank nodes are
    removed as well, but when there was at least one, the last of them is put
    back so the fragment keeps a single trailing separator.
    """
    children = list(nodes)
    while children and (is_blank_node(children[0]) or is_preamble_marker(children[0])):
        children.pop(0)

    blank: PageElement | None = None
    while children and is_blank_node(children[-1]):
        blank = children.pop()
    if blank is not None:
        children.append(blank)
    return children


def parse_fragment(
    text: str,
    extensions: Sequence[str] | None = None,
) -> list[PageElement]:
    """Parse filled-in template text into normalized document nodes."""
    try:
        html = render_markdown(wrap_fragment(text), extensions)
    except MarkdownConversionError as exc:
        raise FragmentParseError(f"Template output is not valid Markdown: {exc}") from exc

    try:
        soup = BeautifulSoup(f"{html}\n", "html.parser")
    except Exception as exc:
        raise FragmentParseError(f"Unable to parse rendered template HTML: {exc}") from exc

    return [node.extract() for node in normalize_fragment(soup.contents)]


__all__ = [
    "PREAMBLE",
    "PREAMBLE_MARKER",
    "is_blank_node",
    "is_preamble_marker",
    "normalize_fragment",
    "parse_fragment",
    "wrap_fragment",
]
