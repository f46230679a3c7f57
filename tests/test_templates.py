from pathlib import Path

import pytest

from sectionsmith.core.exceptions import MissingTemplateError, TemplateRenderError
from sectionsmith.core.templates import ensure_readable, fill_in_template


def _write(tmp_path: Path, content: str, name: str = "section.md") -> Path:
    path = tmp_path / name
    path.write_text(content, encoding="utf-8")
    return path


def test_fill_in_with_default_delimiters(tmp_path: Path) -> None:
    template = _write(tmp_path, "Hello {{ name }}!\n")

    assert fill_in_template(template, ("{{", "}}"), {"name": "World"}) == "Hello World!\n"


def test_fill_in_with_custom_delimiters(tmp_path: Path) -> None:
    template = _write(tmp_path, "Hello << name >>, {{ untouched }}\n")

    text = fill_in_template(template, ("<<", ">>"), {"name": "World"})

    assert text == "Hello World, {{ untouched }}\n"


def test_nested_values_are_addressable(tmp_path: Path) -> None:
    template = _write(
        tmp_path,
        "{% for author in authors %}\n* {{ author }} ({{ support.email }})\n{% endfor %}\n",
    )

    text = fill_in_template(
        template,
        ("{{", "}}"),
        {"authors": ["Ann", "Bob"], "support": {"email": "help@example.org"}},
    )

    assert text == "* Ann (help@example.org)\n* Bob (help@example.org)\n"


def test_undefined_variables_render_empty(tmp_path: Path) -> None:
    template = _write(tmp_path, "[{{ missing }}]")

    assert fill_in_template(template, ("{{", "}}"), {}) == "[]"


def test_missing_template_raises(tmp_path: Path) -> None:
    with pytest.raises(MissingTemplateError, match="Couldn't find file"):
        fill_in_template(tmp_path / "absent.md", ("{{", "}}"), {})


def test_directory_is_not_a_template(tmp_path: Path) -> None:
    with pytest.raises(MissingTemplateError):
        ensure_readable(tmp_path)


def test_syntax_error_raises_render_error(tmp_path: Path) -> None:
    template = _write(tmp_path, "Hello {{ name \n")

    with pytest.raises(TemplateRenderError):
        fill_in_template(template, ("{{", "}}"), {"name": "World"})


def test_expression_failure_raises_render_error(tmp_path: Path) -> None:
    template = _write(tmp_path, "{{ value // 0 }}")

    with pytest.raises(TemplateRenderError) as excinfo:
        fill_in_template(template, ("{{", "}}"), {"value": 1})

    assert isinstance(excinfo.value.__cause__, ZeroDivisionError)
