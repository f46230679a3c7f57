"""Fill in section templates with Jinja2."""

from __future__ import annotations

from collections.abc import Mapping
import logging
import os
from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, TemplateError, TemplateNotFound

from .exceptions import MissingTemplateError, TemplateRenderError


logger = logging.getLogger(__name__)


def resolve_template_path(path: str | Path) -> Path:
    """Return the absolute template path with ``~`` expanded."""
    return Path(path).expanduser().absolute()


def is_readable(path: Path) -> bool:
    """Return whether ``path`` is a regular file the current user can read."""
    return path.is_file() and os.access(path, os.R_OK)


def ensure_readable(path: str | Path) -> Path:
    """Return the resolved template path, failing when it cannot be read."""
    resolved = resolve_template_path(path)
    if not is_readable(resolved):
        raise MissingTemplateError(f"Couldn't find file {path}")
    return resolved


def build_environment(directory: Path, delimiters: tuple[str, str]) -> Environment:
    """Create the Jinja environment used to fill in templates under ``directory``."""
    start, end = delimiters
    return Environment(
        loader=FileSystemLoader(str(directory)),
        autoescape=False,
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
        variable_start_string=start,
        variable_end_string=end,
    )


def fill_in_template(
    path: str | Path,
    delimiters: tuple[str, str],
    variables: Mapping[str, Any],
) -> str:
    """Render the template at ``path`` with ``variables`` exposed by name."""
    resolved = ensure_readable(path)
    environment = build_environment(resolved.parent, delimiters)
    try:
        template = environment.get_template(resolved.name)
    except TemplateNotFound as exc:
        raise MissingTemplateError(f"Couldn't find file {path}") from exc
    except TemplateError as exc:
        raise TemplateRenderError(f"Failed to parse template {path}: {exc}") from exc
    except UnicodeDecodeError as exc:
        raise TemplateRenderError(f"Template {path} is not valid UTF-8: {exc}") from exc

    try:
        text = template.render(dict(variables))
    except Exception as exc:
        raise TemplateRenderError(f"Failed to render template {path}: {exc}") from exc

    logger.debug("Filled in template %s (%d characters)", resolved, len(text))
    return text


__all__ = [
    "build_environment",
    "ensure_readable",
    "fill_in_template",
    "is_readable",
    "resolve_template_path",
]
