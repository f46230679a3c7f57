"""MkDocs plugin appending a templated section to rendered pages."""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import Any

from bs4 import BeautifulSoup
from mkdocs.config import config_options
from mkdocs.config.defaults import MkDocsConfig
from mkdocs.exceptions import PluginError
from mkdocs.plugins import BasePlugin
from mkdocs.structure.files import Files
from mkdocs.structure.pages import Page
from mkdocs.utils import log

from sectionsmith.core.context import BuildContext, SourceFile
from sectionsmith.core.diagnostics import LoggingEmitter
from sectionsmith.core.exceptions import SectionTemplateError
from sectionsmith.core.section import DEFAULT_PLUGIN_NAME, SectionTemplate, WeaveInput


class SectionTemplatePlugin(BasePlugin):
    """Weave a section generated from a template into every page."""

    supports_multiple_instances = True

    config_scheme = (
        ("name", config_options.Type(str, default=DEFAULT_PLUGIN_NAME)),
        ("template", config_options.Type((str, type(None)), default=None)),
        ("header", config_options.Type((str, type(None)), default=None)),
        ("main_module_only", config_options.Type(bool, default=False)),
        ("delim", config_options.Type(list, default=["{{", "}}"])),
        ("level", config_options.Type(int, default=1)),
        ("markdown_extensions", config_options.Type(list, default=[])),
        ("main_page", config_options.Type(str, default="index.md")),
        ("variables", config_options.Type(dict, default={})),
    )

    def __init__(self) -> None:
        self._generator: SectionTemplate | None = None
        self._build: BuildContext | None = None

    # -- MkDocs lifecycle -------------------------------------------------

    def on_config(self, config: MkDocsConfig) -> MkDocsConfig:
        name = str(self.config.get("name") or DEFAULT_PLUGIN_NAME)
        project_dir = self._project_dir(config)
        try:
            self._generator = SectionTemplate.from_mapping(
                name,
                self._generator_options(project_dir),
                emitter=LoggingEmitter(logger_obj=log),
            )
        except SectionTemplateError as exc:
            raise PluginError(f"section-template '{name}': {exc}") from exc
        self._build = self._build_context(config, project_dir)
        return config

    def on_page_content(
        self,
        html: str,
        page: Page,
        config: MkDocsConfig,
        files: Files,
    ) -> str:
        del config, files
        if self._generator is None:
            return html

        document = BeautifulSoup(html, "html.parser")
        weave_input = WeaveInput(build=self._build, filename=page.file.src_uri)
        try:
            section = self._generator.weave_section(document, weave_input)
        except SectionTemplateError as exc:
            raise PluginError(
                f"section-template '{self._generator.name}' failed on "
                f"'{page.file.src_uri}': {exc}"
            ) from exc
        if section is None:
            return html
        return str(document)

    # -- Helpers ----------------------------------------------------------

    @staticmethod
    def _project_dir(config: MkDocsConfig) -> Path:
        config_path = config.get("config_file_path")
        return Path(config_path).parent.resolve() if config_path else Path.cwd()

    def _generator_options(self, project_dir: Path) -> dict[str, Any]:
        raw_template = self.config.get("template")
        if not raw_template:
            raise PluginError("section-template: the 'template' option is required.")
        # Relative paths are read from the directory holding mkdocs.yml.
        template = Path(raw_template).expanduser()
        if not template.is_absolute():
            template = project_dir / template

        options: dict[str, Any] = {
            "template": template,
            "header": self.config.get("header"),
            "main_module_only": bool(self.config.get("main_module_only", False)),
            "delim": tuple(self.config.get("delim") or ("{{", "}}")),
            "level": self.config.get("level", 1),
        }
        extensions = self.config.get("markdown_extensions")
        if extensions:
            options["markdown_extensions"] = list(extensions)

        variables: Mapping[str, Any] = self.config.get("variables") or {}
        reserved = sorted(set(variables) & {*options, "markdown_extensions"})
        if reserved:
            raise PluginError(
                "section-template: variables shadow plugin options: " + ", ".join(reserved)
            )
        options.update(variables)
        return options

    def _build_context(self, config: MkDocsConfig, project_dir: Path) -> BuildContext:
        extra = dict(config.get("extra") or {})
        author = config.get("site_author")
        version = extra.get("version")
        return BuildContext(
            name=str(config.get("site_name") or ""),
            root=project_dir,
            main_module=SourceFile(str(self.config.get("main_page") or "index.md")),
            version=str(version) if version is not None else None,
            abstract=config.get("site_description"),
            authors=[author] if author else [],
            copyright_holder=config.get("copyright"),
            stash=extra,
        )


__all__ = ["SectionTemplatePlugin"]
