"""Exception hierarchy re-exported at the package root."""

from __future__ import annotations

from sectionsmith.core.exceptions import (
    FragmentParseError,
    MissingTemplateError,
    SectionConfigError,
    SectionTemplateError,
    TemplateRenderError,
    exception_hint,
    exception_messages,
)


__all__ = [
    "FragmentParseError",
    "MissingTemplateError",
    "SectionConfigError",
    "SectionTemplateError",
    "TemplateRenderError",
    "exception_hint",
    "exception_messages",
]
