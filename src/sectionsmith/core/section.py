"""Weave a templated section into a document."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
import logging
from pathlib import Path
from typing import Any

from bs4 import BeautifulSoup
from bs4.element import PageElement, Tag
from slugify import slugify

from .config import SectionTemplateConfig, load_section_config
from .context import BuildContext, collect_variables
from .diagnostics import DiagnosticEmitter, NullEmitter
from .fragments import parse_fragment
from .templates import ensure_readable, fill_in_template


logger = logging.getLogger(__name__)

DEFAULT_PLUGIN_NAME = "Template"


@dataclass(slots=True, frozen=True)
class WeaveInput:
    """Per-file input handed over by the host pipeline."""

    build: BuildContext | None = None
    filename: str | None = None


class SectionTemplate:
    """Generate a document section from a template file."""

    def __init__(
        self,
        config: SectionTemplateConfig | Mapping[str, Any],
        *,
        name: str = DEFAULT_PLUGIN_NAME,
        emitter: DiagnosticEmitter | None = None,
    ) -> None:
        self.config = load_section_config(config)
        self.name = name
        self.emitter = emitter or NullEmitter()
        self.template: Path = ensure_readable(self.config.template)
        self.header: str = self.config.header if self.config.header is not None else name
        self.main_module_only: bool = self.config.main_module_only
        self.delim: tuple[str, str] = self.config.delim
        self.extra_args: dict[str, Any] = self.config.extra_args

    @classmethod
    def from_mapping(
        cls,
        name: str,
        options: Mapping[str, Any],
        *,
        emitter: DiagnosticEmitter | None = None,
    ) -> SectionTemplate:
        """Build a generator from raw plugin options."""
        return cls(options, name=name, emitter=emitter)

    def should_weave(self, weave_input: WeaveInput) -> bool:
        """Return whether the section belongs in the file being processed."""
        if not self.main_module_only:
            return True
        build = weave_input.build
        if build is None:
            return True
        return build.main_module.name == weave_input.filename

    def variables(self, weave_input: WeaveInput) -> dict[str, Any]:
        """Return the variables exposed to the template for this input."""
        return collect_variables(weave_input.build, self.extra_args)

    def render(self, weave_input: WeaveInput) -> list[PageElement]:
        """Fill in the template and return the parsed section body."""
        text = fill_in_template(self.template, self.delim, self.variables(weave_input))
        return parse_fragment(text, self.config.markdown_extensions)

    def build_section(self, children: list[PageElement]) -> Tag:
        """Wrap ``children`` into a titled ``<section>`` element."""
        factory = BeautifulSoup("", "html.parser")
        section = factory.new_tag("section")
        slug = slugify(self.header)
        if slug:
            section["id"] = slug
        heading = factory.new_tag(f"h{self.config.level}")
        heading.string = self.header
        section.append(heading)
        for child in children:
            section.append(child)
        return section

    def weave_section(self, document: Tag, weave_input: WeaveInput | None = None) -> Tag | None:
        """Append the generated section to ``document``.

        Returns the appended section, or ``None`` when the file is skipped.
        """
        weave_input = weave_input or WeaveInput()
        if not self.should_weave(weave_input):
            logger.debug("Skipping section %r for %s", self.header, weave_input.filename)
            self.emitter.event(
                "section_skipped",
                {"header": self.header, "filename": weave_input.filename},
            )
            return None

        children = self.render(weave_input)
        if not children:
            self.emitter.warning(
                f"Template {self.template} produced no content for section '{self.header}'."
            )
        section = self.build_section(children)
        document.append(section)
        self.emitter.event(
            "section_woven",
            {
                "header": self.header,
                "filename": weave_input.filename,
                "nodes": len(section.contents) - 1,
            },
        )
        return section


__all__ = ["DEFAULT_PLUGIN_NAME", "SectionTemplate", "WeaveInput"]
