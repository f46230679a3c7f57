"""Implementation of the ``sectionsmith`` CLI command."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Annotated, Any

from bs4 import BeautifulSoup
import click
import typer
import yaml

from sectionsmith.adapters.markdown import (
    DEFAULT_MARKDOWN_EXTENSIONS,
    deduplicate_markdown_extensions,
    normalize_markdown_extensions,
)
from sectionsmith.core.config import SectionTemplateConfig
from sectionsmith.core.exceptions import SectionTemplateError, exception_hint
from sectionsmith.core.section import DEFAULT_PLUGIN_NAME, SectionTemplate, WeaveInput
from sectionsmith.version import get_version

from .._options import (
    DIAGNOSTICS_PANEL,
    DebugOption,
    DelimOption,
    DocumentOption,
    HeaderOption,
    LevelOption,
    MarkdownExtensionsOption,
    NameOption,
    OutputOption,
    TemplateArgument,
    VariableOption,
    VariablesFileOption,
    VerboseOption,
)
from ..diagnostics import CliEmitter
from ..state import emit_error, render_message, set_cli_state


RESERVED_OPTIONS = frozenset(SectionTemplateConfig.model_fields)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(get_version())
        raise typer.Exit()


def _coerce_variable_value(raw: str) -> Any:
    """Infer the type of a template variable from its string representation."""
    candidate = raw.strip()
    lowered = candidate.lower()
    if lowered in {"true", "false"}:
        return lowered == "true"
    try:
        return int(candidate)
    except ValueError:
        pass
    try:
        return float(candidate)
    except ValueError:
        pass
    return candidate


def _assign_nested_value(target: dict[str, Any], path: list[str], value: Any) -> None:
    """Set a value in a nested dictionary structure using a list of keys."""
    cursor = target
    for key in path[:-1]:
        if key not in cursor:
            cursor[key] = {}
        elif not isinstance(cursor[key], dict):
            raise typer.BadParameter(
                f"Invalid variable '{'.'.join(path)}', "
                f"'{key}' is already assigned to a non-mapping value."
            )
        cursor = cursor[key]
    cursor[path[-1]] = value


def _parse_variables(values: Iterable[str] | None) -> dict[str, Any]:
    """Parse ``key=value`` strings into a (possibly nested) mapping."""
    variables: dict[str, Any] = {}
    if not values:
        return variables
    for raw in values:
        if not raw.strip():
            continue
        if "=" not in raw:
            raise typer.BadParameter(f"Invalid variable '{raw}', expected key=value.")
        key, value = raw.split("=", 1)
        parts = [chunk for chunk in key.strip().split(".") if chunk]
        if not parts:
            raise typer.BadParameter(f"Invalid variable '{raw}', empty key.")
        _assign_nested_value(variables, parts, _coerce_variable_value(value))
    return variables


def _load_variables_file(path: Path) -> dict[str, Any]:
    """Read template variables from a YAML mapping."""
    try:
        payload = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:
        raise typer.BadParameter(f"Unable to parse variables file '{path}': {exc}") from exc
    if not isinstance(payload, Mapping):
        raise typer.BadParameter(f"Variables file '{path}' must contain a mapping.")
    return dict(payload)


def _describe_failure(exc: SectionTemplateError) -> str:
    """Return the error message, followed by its root cause when it adds detail."""
    message = str(exc).strip()
    hint = exception_hint(exc)
    if hint and hint not in message:
        return f"{message} (cause: {hint})"
    return message


def _parse_delimiters(raw: str) -> tuple[str, str]:
    parts = raw.split()
    if len(parts) != 2:
        raise typer.BadParameter(
            f"Invalid delimiters '{raw}', expected an opening and a closing marker."
        )
    return parts[0], parts[1]


def render(
    template: TemplateArgument,
    header: HeaderOption = None,
    name: NameOption = DEFAULT_PLUGIN_NAME,
    delim: DelimOption = None,
    level: LevelOption = 1,
    variables: VariableOption = None,
    vars_file: VariablesFileOption = None,
    extensions: MarkdownExtensionsOption = None,
    document: DocumentOption = None,
    output: OutputOption = None,
    verbose: VerboseOption = 0,
    debug: DebugOption = False,
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            callback=_version_callback,
            is_eager=True,
            help="Show the sectionsmith version and exit.",
            rich_help_panel=DIAGNOSTICS_PANEL,
        ),
    ] = False,
) -> None:
    """Fill in TEMPLATE and append it as a section to an HTML document."""
    del version
    ctx = click.get_current_context(silent=True)
    typer_ctx = ctx if isinstance(ctx, typer.Context) else None
    state = set_cli_state(ctx=typer_ctx, verbosity=verbose, debug=debug)

    extra: dict[str, Any] = {}
    if vars_file is not None:
        extra.update(_load_variables_file(vars_file))
    extra.update(_parse_variables(variables))
    shadowed = sorted(RESERVED_OPTIONS & set(extra))
    if shadowed:
        raise typer.BadParameter(
            "Template variables cannot reuse option names: " + ", ".join(shadowed)
        )

    options: dict[str, Any] = {**extra, "template": template, "header": header, "level": level}
    if delim is not None:
        options["delim"] = _parse_delimiters(delim)
    requested = normalize_markdown_extensions(extensions)
    if requested:
        options["markdown_extensions"] = deduplicate_markdown_extensions(
            [*DEFAULT_MARKDOWN_EXTENSIONS, *requested]
        )

    try:
        generator = SectionTemplate.from_mapping(name, options, emitter=CliEmitter(state))
        source = document.read_text(encoding="utf-8") if document is not None else ""
        soup = BeautifulSoup(source, "html.parser")
        generator.weave_section(
            soup,
            WeaveInput(filename=str(document) if document is not None else None),
        )
    except SectionTemplateError as exc:
        emit_error(_describe_failure(exc), exception=exc)
        raise typer.Exit(code=1) from exc

    html = str(soup)
    if output is None:
        typer.echo(html)
        return
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(html, encoding="utf-8")
    render_message("info", f"Wrote {output}")


__all__ = ["render"]
