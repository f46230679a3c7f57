"""Configuration model for the section template generator.

SectionTemplateConfig

`template` (`Path`)
: Template file run through Jinja2 and interpreted as Markdown. A leading
  ``~`` is expanded to the invoking user's home directory. Required.

`header` (`str | None`)
: Title of the emitted section. Falls back to the plugin name when omitted.

`main_module_only` (`bool`)
: When the generator runs inside a build, only weave the section into the
  build's main file. Defaults to `False`.

`delim` (`tuple[str, str]`)
: Opening and closing markers of template expressions. Defaults to
  ``("{{", "}}")``.

`level` (`int`)
: Heading level used for the section title (1-6). Defaults to 1.

`markdown_extensions` (`list[str]`)
: Python-Markdown extensions active while parsing the filled-in template.

Any other key is kept verbatim and exposed to the template as a variable.
"""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from sectionsmith.adapters.markdown import DEFAULT_MARKDOWN_EXTENSIONS

from .exceptions import SectionConfigError


DEFAULT_DELIMITERS: tuple[str, str] = ("{{", "}}")


class SectionTemplateConfig(BaseModel):
    """Options recognised by the section template generator."""

    model_config = ConfigDict(extra="allow", frozen=True)

    template: Path
    header: str | None = None
    main_module_only: bool = False
    delim: tuple[str, str] = DEFAULT_DELIMITERS
    level: int = Field(default=1, ge=1, le=6)
    markdown_extensions: list[str] = Field(
        default_factory=lambda: list(DEFAULT_MARKDOWN_EXTENSIONS)
    )

    @field_validator("template", mode="after")
    @classmethod
    def expand_home(cls, value: Path) -> Path:
        """Expand a leading home-directory shorthand."""
        return value.expanduser()

    @field_validator("delim", mode="after")
    @classmethod
    def check_delimiters(cls, value: tuple[str, str]) -> tuple[str, str]:
        """Reject empty or identical delimiter markers."""
        start, end = value
        if not start or not end:
            raise ValueError("template delimiters must be non-empty strings")
        if start == end:
            raise ValueError("template delimiters must differ")
        return value

    @property
    def extra_args(self) -> dict[str, Any]:
        """Return configuration keys that are not generator options."""
        return dict(self.model_extra or {})


def load_section_config(
    data: Mapping[str, Any] | SectionTemplateConfig,
) -> SectionTemplateConfig:
    """Validate raw plugin options into a :class:`SectionTemplateConfig`."""
    if isinstance(data, SectionTemplateConfig):
        return data
    try:
        return SectionTemplateConfig.model_validate(dict(data))
    except ValidationError as exc:
        raise SectionConfigError(f"Invalid section template configuration: {exc}") from exc


__all__ = [
    "DEFAULT_DELIMITERS",
    "SectionTemplateConfig",
    "load_section_config",
]
