"""Build context model and template variable assembly.

The build context describes the distribution being documented. Only the fields
listed in :attr:`BuildContext.PUBLIC_FIELDS` are exposed to templates; they are
read explicitly rather than discovered through introspection.

Object-valued fields are handed to templates as :class:`DeferredReference`
instances so that their string form is only computed when a template prints
them.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
import os
from pathlib import Path
from typing import Any, ClassVar


LIBRARY_PREFIXES: tuple[str, ...] = ("src/", "lib/")
MODULE_SUFFIXES: tuple[str, ...] = (".py", ".pyi")
PACKAGE_MARKER = ".__init__"

_PLAIN_TYPES: tuple[type, ...] = (
    str,
    bytes,
    bool,
    int,
    float,
    type(None),
    Mapping,
    list,
    tuple,
    set,
    frozenset,
)


@dataclass(slots=True)
class SourceFile:
    """Descriptor of a single file taking part in the build."""

    name: str

    def __str__(self) -> str:
        return self.name


@dataclass(slots=True)
class BuildContext:
    """Per-build metadata made available to section templates."""

    name: str
    root: Path
    main_module: SourceFile
    version: str | None = None
    abstract: str | None = None
    authors: list[str] = field(default_factory=list)
    license: str | None = None
    copyright_holder: str | None = None
    copyright_year: int | None = None
    files: list[SourceFile] = field(default_factory=list)
    is_trial: bool = False
    # Opaque values, forwarded to templates without interpretation.
    distmeta: Mapping[str, Any] = field(default_factory=dict)
    stash: Any = None

    PUBLIC_FIELDS: ClassVar[tuple[str, ...]] = (
        "name",
        "root",
        "main_module",
        "version",
        "abstract",
        "authors",
        "license",
        "copyright_holder",
        "copyright_year",
        "files",
        "is_trial",
        "distmeta",
        "stash",
    )

    def public_values(self) -> dict[str, Any]:
        """Return the public fields keyed by name."""
        return {
            name: getattr(self, name)
            for name in self.PUBLIC_FIELDS
            if not name.startswith("_")
        }


class DeferredReference:
    """Wrap an object so templates can address it without stringifying it."""

    __slots__ = ("__wrapped__",)

    def __init__(self, value: Any) -> None:
        self.__wrapped__ = value

    def __str__(self) -> str:
        return str(self.__wrapped__)

    def __repr__(self) -> str:
        return f"DeferredReference({self.__wrapped__!r})"

    def __getattr__(self, name: str) -> Any:
        if name.startswith("__"):
            raise AttributeError(name)
        return getattr(self.__wrapped__, name)

    def __getitem__(self, key: Any) -> Any:
        return self.__wrapped__[key]

    def __bool__(self) -> bool:
        return bool(self.__wrapped__)

    def __iter__(self) -> Iterator[Any]:
        return iter(self.__wrapped__)

    def __len__(self) -> int:
        return len(self.__wrapped__)

    def __contains__(self, item: object) -> bool:
        return item in self.__wrapped__

    def __eq__(self, other: object) -> bool:
        if isinstance(other, DeferredReference):
            other = other.__wrapped__
        return bool(self.__wrapped__ == other)

    def __hash__(self) -> int:
        return hash(self.__wrapped__)


def resolve_deferred(value: Any) -> Any:
    """Return the object behind ``value`` when it is a deferred reference."""
    if isinstance(value, DeferredReference):
        return value.__wrapped__
    return value


def _wrap_value(value: Any) -> Any:
    if isinstance(value, _PLAIN_TYPES):
        return value
    return DeferredReference(value)


def main_module_name(build: BuildContext | None) -> str | None:
    """Derive the dotted module name of the build's main file."""
    if build is None:
        return None

    name = build.main_module.name.replace(os.sep, "/")
    root = str(build.root).replace(os.sep, "/")
    if root and name.startswith(root):
        name = name[len(root) :]
    name = name.lstrip("/")

    for prefix in LIBRARY_PREFIXES:
        if name.startswith(prefix):
            name = name[len(prefix) :]
            break

    name = name.replace("/", ".")
    for suffix in MODULE_SUFFIXES:
        if name.endswith(suffix):
            name = name[: -len(suffix)]
            break
    if name.endswith(PACKAGE_MARKER):
        name = name[: -len(PACKAGE_MARKER)]
    return name


def collect_variables(
    build: BuildContext | None,
    extra: Mapping[str, Any] | None = None,
) -> dict[str, Any]:
    """Assemble the template variables from the build context and extra values.

    Extra values win over build fields sharing the same name.
    """
    variables: dict[str, Any] = {}
    if build is not None:
        for key, value in build.public_values().items():
            variables[key] = _wrap_value(value)
        variables["main_module_name"] = main_module_name(build)
    if extra:
        variables.update(extra)
    return variables


__all__ = [
    "LIBRARY_PREFIXES",
    "MODULE_SUFFIXES",
    "BuildContext",
    "DeferredReference",
    "SourceFile",
    "collect_variables",
    "main_module_name",
    "resolve_deferred",
]
