"""Core building blocks of the section weaving pipeline."""

from __future__ import annotations

from .config import DEFAULT_DELIMITERS, SectionTemplateConfig, load_section_config
from .context import (
    BuildContext,
    DeferredReference,
    SourceFile,
    collect_variables,
    main_module_name,
    resolve_deferred,
)
from .diagnostics import DiagnosticEmitter, LoggingEmitter, NullEmitter
from .exceptions import (
    FragmentParseError,
    MissingTemplateError,
    SectionConfigError,
    SectionTemplateError,
    TemplateRenderError,
)
from .fragments import normalize_fragment, parse_fragment, wrap_fragment
from .section import DEFAULT_PLUGIN_NAME, SectionTemplate, WeaveInput
from .templates import fill_in_template


__all__ = [
    "DEFAULT_DELIMITERS",
    "DEFAULT_PLUGIN_NAME",
    "BuildContext",
    "DeferredReference",
    "DiagnosticEmitter",
    "FragmentParseError",
    "LoggingEmitter",
    "MissingTemplateError",
    "NullEmitter",
    "SectionConfigError",
    "SectionTemplate",
    "SectionTemplateConfig",
    "SectionTemplateError",
    "SourceFile",
    "TemplateRenderError",
    "WeaveInput",
    "collect_variables",
    "fill_in_template",
    "load_section_config",
    "main_module_name",
    "normalize_fragment",
    "parse_fragment",
    "resolve_deferred",
    "wrap_fragment",
]
