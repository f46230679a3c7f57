"""Shared Typer option definitions for CLI commands."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer


TEMPLATE_PANEL = "Template"
OUTPUT_PANEL = "Output"
DIAGNOSTICS_PANEL = "Diagnostics"

TemplateArgument = Annotated[
    Path,
    typer.Argument(
        metavar="TEMPLATE",
        help="Template file filled in with Jinja2 and interpreted as Markdown.",
        dir_okay=False,
    ),
]

HeaderOption = Annotated[
    str | None,
    typer.Option(
        "--header",
        "-H",
        help="Title of the generated section. Defaults to the plugin name.",
        rich_help_panel=TEMPLATE_PANEL,
    ),
]

NameOption = Annotated[
    str,
    typer.Option(
        "--name",
        help="Plugin name, used as the section title when no header is given.",
        rich_help_panel=TEMPLATE_PANEL,
    ),
]

DelimOption = Annotated[
    str | None,
    typer.Option(
        "--delim",
        help="Expression delimiters separated by whitespace (e.g. '<< >>').",
        show_default=False,
        rich_help_panel=TEMPLATE_PANEL,
    ),
]

LevelOption = Annotated[
    int,
    typer.Option(
        "--level",
        min=1,
        max=6,
        help="Heading level of the section title.",
        rich_help_panel=TEMPLATE_PANEL,
    ),
]

VariableOption = Annotated[
    list[str] | None,
    typer.Option(
        "--var",
        "-D",
        help="Template variables as key=value pairs (e.g. -D support.email=me@example.org).",
        show_default=False,
        rich_help_panel=TEMPLATE_PANEL,
    ),
]

VariablesFileOption = Annotated[
    Path | None,
    typer.Option(
        "--vars-file",
        help="YAML file providing template variables; --var values take precedence.",
        exists=True,
        dir_okay=False,
        readable=True,
        rich_help_panel=TEMPLATE_PANEL,
    ),
]

MarkdownExtensionsOption = Annotated[
    list[str] | None,
    typer.Option(
        "--extension",
        "-x",
        help="Markdown extension to enable while parsing the template (can be repeated).",
        show_default=False,
        rich_help_panel=TEMPLATE_PANEL,
    ),
]

DocumentOption = Annotated[
    Path | None,
    typer.Option(
        "--document",
        "-d",
        help="HTML document receiving the section. Defaults to an empty document.",
        exists=True,
        dir_okay=False,
        readable=True,
        rich_help_panel=OUTPUT_PANEL,
    ),
]

OutputOption = Annotated[
    Path | None,
    typer.Option(
        "--output",
        "-o",
        help="Write the resulting HTML to this file instead of stdout.",
        dir_okay=False,
        rich_help_panel=OUTPUT_PANEL,
    ),
]

VerboseOption = Annotated[
    int,
    typer.Option(
        "--verbose",
        "-v",
        count=True,
        help="Increase CLI verbosity. Combine multiple times for additional diagnostics.",
        rich_help_panel=DIAGNOSTICS_PANEL,
    ),
]

DebugOption = Annotated[
    bool,
    typer.Option(
        "--debug",
        help="Show full tracebacks when an unexpected error occurs.",
        rich_help_panel=DIAGNOSTICS_PANEL,
    ),
]
