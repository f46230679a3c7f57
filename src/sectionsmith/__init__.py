"""Primary public API for sectionsmith."""

from __future__ import annotations

from sectionsmith.core import (
    DEFAULT_DELIMITERS,
    BuildContext,
    DeferredReference,
    FragmentParseError,
    MissingTemplateError,
    SectionConfigError,
    SectionTemplate,
    SectionTemplateConfig,
    SectionTemplateError,
    SourceFile,
    TemplateRenderError,
    WeaveInput,
    collect_variables,
    main_module_name,
)
from sectionsmith.version import get_version


__version__ = get_version()

__all__ = [
    "DEFAULT_DELIMITERS",
    "BuildContext",
    "DeferredReference",
    "FragmentParseError",
    "MissingTemplateError",
    "SectionConfigError",
    "SectionTemplate",
    "SectionTemplateConfig",
    "SectionTemplateError",
    "SourceFile",
    "TemplateRenderError",
    "WeaveInput",
    "__version__",
    "collect_variables",
    "get_version",
    "main_module_name",
]
