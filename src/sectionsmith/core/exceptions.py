"""Custom exception hierarchy for the section weaving pipeline."""

from __future__ import annotations


class SectionTemplateError(RuntimeError):
    """Base exception for section template failures."""


class MissingTemplateError(SectionTemplateError):
    """Raised when the template file cannot be read."""


class TemplateRenderError(SectionTemplateError):
    """Raised when the templating engine fails to fill in the template."""


class FragmentParseError(SectionTemplateError):
    """Raised when the filled-in template is not valid document markup."""


class SectionConfigError(SectionTemplateError):
    """Raised when the plugin configuration does not validate."""


def exception_messages(exc: BaseException) -> list[str]:
    """Return the collected message chain for an exception and its causes."""
    messages: list[str] = []
    visited: set[int] = set()
    current: BaseException | None = exc
    while current is not None and id(current) not in visited:
        visited.add(id(current))
        text = str(current).strip()
        if text:
            first_line = text.splitlines()[0].strip()
            if first_line:
                messages.append(first_line)
        current = current.__cause__ or current.__context__
    return messages


def exception_hint(exc: BaseException) -> str | None:
    """Return the most specific message available for an exception chain."""
    messages = exception_messages(exc)
    return messages[-1] if messages else None


__all__ = [
    "FragmentParseError",
    "MissingTemplateError",
    "SectionConfigError",
    "SectionTemplateError",
    "TemplateRenderError",
    "exception_hint",
    "exception_messages",
]
