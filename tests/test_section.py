from collections.abc import Mapping
from pathlib import Path
from typing import Any

from bs4 import BeautifulSoup
import pytest

from sectionsmith.adapters.markdown import DEFAULT_MARKDOWN_EXTENSIONS
from sectionsmith.core.context import BuildContext, SourceFile
from sectionsmith.core.exceptions import (
    FragmentParseError,
    MissingTemplateError,
    TemplateRenderError,
)
from sectionsmith.core.fragments import parse_fragment
from sectionsmith.core.section import SectionTemplate, WeaveInput


class _RecordingEmitter:
    debug_enabled = False

    def __init__(self) -> None:
        self.events: list[tuple[str, dict[str, Any]]] = []
        self.warnings: list[str] = []

    def warning(self, message: str, exc: BaseException | None = None) -> None:
        self.warnings.append(message)

    def event(self, name: str, payload: Mapping[str, Any]) -> None:
        self.events.append((name, dict(payload)))


def _template(tmp_path: Path, content: str) -> Path:
    path = tmp_path / "support.section"
    path.write_text(content, encoding="utf-8")
    return path


def _build(tmp_path: Path) -> BuildContext:
    return BuildContext(
        name="Demo-Dist",
        root=tmp_path,
        main_module=SourceFile("src/demo/__init__.py"),
        authors=["Ann"],
    )


def test_weave_appends_titled_section(tmp_path: Path) -> None:
    template = _template(tmp_path, "\n\nHello {{ name }}\n\n")
    generator = SectionTemplate({"template": template, "header": "SUPPORT", "name": "World"})
    document = BeautifulSoup("<p>Intro</p>", "html.parser")

    section = generator.weave_section(document)

    assert section is not None
    assert document.contents[-1] is section
    assert section["id"] == "support"
    assert str(section.contents[0]) == "<h1>SUPPORT</h1>"
    body = section.contents[1:]
    assert [str(node) for node in body] == ["<p>Hello World</p>", "\n"]


def test_literal_template_matches_parsed_markdown(tmp_path: Path) -> None:
    text = "Report bugs on the *tracker*.\n\n> Be nice.\n"
    generator = SectionTemplate({"template": _template(tmp_path, text), "header": "BUGS"})
    document = BeautifulSoup("", "html.parser")

    section = generator.weave_section(document)

    expected = parse_fragment(text, DEFAULT_MARKDOWN_EXTENSIONS)
    assert [str(node) for node in section.contents[1:]] == [str(node) for node in expected]


def test_header_defaults_to_plugin_name(tmp_path: Path) -> None:
    generator = SectionTemplate({"template": _template(tmp_path, "text")}, name="SUPPORT")

    assert generator.header == "SUPPORT"


def test_level_controls_heading(tmp_path: Path) -> None:
    generator = SectionTemplate(
        {"template": _template(tmp_path, "text"), "header": "See also", "level": 2}
    )
    document = BeautifulSoup("", "html.parser")

    section = generator.weave_section(document)

    assert section.h2 is not None
    assert section.h2.string == "See also"
    assert section["id"] == "see-also"


def test_extra_args_override_build_fields(tmp_path: Path) -> None:
    template = _template(tmp_path, "{{ name }} by {{ authors | join(', ') }}")
    generator = SectionTemplate.from_mapping("AUTHORS", {"template": template, "name": "Override"})
    document = BeautifulSoup("", "html.parser")

    section = generator.weave_section(document, WeaveInput(build=_build(tmp_path)))

    assert section.p.get_text() == "Override by Ann"


def test_build_variables_reach_template(tmp_path: Path) -> None:
    template = _template(tmp_path, "Module {{ main_module_name }} from {{ root }}")
    generator = SectionTemplate({"template": template})
    document = BeautifulSoup("", "html.parser")
    build = BuildContext(
        name="Demo-Dist",
        root=Path("/srv/demo"),
        main_module=SourceFile("/srv/demo/src/demo/cli.py"),
    )

    generator.weave_section(document, WeaveInput(build=build))

    assert document.p.get_text() == "Module demo.cli from /srv/demo"


def test_main_module_only_skips_other_files(tmp_path: Path) -> None:
    emitter = _RecordingEmitter()
    generator = SectionTemplate(
        {"template": _template(tmp_path, "text"), "main_module_only": True},
        emitter=emitter,
    )
    document = BeautifulSoup("<p>Body</p>", "html.parser")

    result = generator.weave_section(
        document, WeaveInput(build=_build(tmp_path), filename="src/demo/other.py")
    )

    assert result is None
    assert [str(node) for node in document.contents] == ["<p>Body</p>"]
    assert emitter.events == [
        ("section_skipped", {"header": "Template", "filename": "src/demo/other.py"})
    ]


def test_main_module_only_weaves_main_file(tmp_path: Path) -> None:
    emitter = _RecordingEmitter()
    generator = SectionTemplate(
        {"template": _template(tmp_path, "text"), "main_module_only": True},
        emitter=emitter,
    )
    document = BeautifulSoup("", "html.parser")

    result = generator.weave_section(
        document, WeaveInput(build=_build(tmp_path), filename="src/demo/__init__.py")
    )

    assert result is not None
    assert emitter.events[0][0] == "section_woven"
    assert emitter.events[0][1]["filename"] == "src/demo/__init__.py"


def test_main_module_only_without_build_still_weaves(tmp_path: Path) -> None:
    generator = SectionTemplate({"template": _template(tmp_path, "text"), "main_module_only": True})
    document = BeautifulSoup("", "html.parser")

    assert generator.weave_section(document, WeaveInput(filename="anything.py")) is not None
    assert len(document.contents) == 1


def test_missing_template_at_construction(tmp_path: Path) -> None:
    with pytest.raises(MissingTemplateError):
        SectionTemplate({"template": tmp_path / "absent.section"})


def test_template_removed_before_weaving(tmp_path: Path) -> None:
    template = _template(tmp_path, "text")
    generator = SectionTemplate({"template": template})
    template.unlink()
    document = BeautifulSoup("<p>Body</p>", "html.parser")

    with pytest.raises(MissingTemplateError):
        generator.weave_section(document)

    assert [str(node) for node in document.contents] == ["<p>Body</p>"]


def test_render_error_leaves_document_untouched(tmp_path: Path) -> None:
    generator = SectionTemplate({"template": _template(tmp_path, "{% if %}")})
    document = BeautifulSoup("", "html.parser")

    with pytest.raises(TemplateRenderError):
        generator.weave_section(document)

    assert document.contents == []


def test_fragment_error_propagates(tmp_path: Path) -> None:
    generator = SectionTemplate(
        {
            "template": _template(tmp_path, "text"),
            "markdown_extensions": ["sectionsmith_no_such_extension"],
        }
    )
    document = BeautifulSoup("", "html.parser")

    with pytest.raises(FragmentParseError):
        generator.weave_section(document)

    assert document.contents == []


def test_generator_is_reusable_across_documents(tmp_path: Path) -> None:
    generator = SectionTemplate({"template": _template(tmp_path, "Shared"), "header": "S"})
    first = BeautifulSoup("", "html.parser")
    second = BeautifulSoup("", "html.parser")

    generator.weave_section(first)
    generator.weave_section(second)

    assert str(first) == str(second)
    assert first.section is not second.section


class _Falsy:
    def __bool__(self) -> bool:
        return False


class _Channels:
    def __init__(self, *names: str) -> None:
        self._names = list(names)

    def __iter__(self):
        return iter(self._names)


def _build_with_stash(tmp_path: Path, stash: object) -> BuildContext:
    return BuildContext(
        name="Demo-Dist",
        root=tmp_path,
        main_module=SourceFile("src/demo/__init__.py"),
        stash=stash,
    )


def test_falsy_build_object_is_falsy_in_template(tmp_path: Path) -> None:
    template = _template(tmp_path, "{% if stash %}truthy{% else %}falsy{% endif %}\n")
    generator = SectionTemplate({"template": template})
    document = BeautifulSoup("", "html.parser")

    generator.weave_section(document, WeaveInput(build=_build_with_stash(tmp_path, _Falsy())))

    assert document.p.get_text() == "falsy"


def test_iterable_build_object_can_be_looped(tmp_path: Path) -> None:
    template = _template(tmp_path, "{% for channel in stash %}{{ channel }};{% endfor %}\n")
    generator = SectionTemplate({"template": template})
    document = BeautifulSoup("", "html.parser")
    build = _build_with_stash(tmp_path, _Channels("irc", "matrix"))

    generator.weave_section(document, WeaveInput(build=build))

    assert document.p.get_text() == "irc;matrix;"


def test_empty_template_output_warns(tmp_path: Path) -> None:
    emitter = _RecordingEmitter()
    template = _template(tmp_path, "{% if missing %}never{% endif %}\n")
    generator = SectionTemplate({"template": template, "header": "EMPTY"}, emitter=emitter)
    document = BeautifulSoup("", "html.parser")

    section = generator.weave_section(document)

    assert [str(node) for node in section.contents] == ["<h1>EMPTY</h1>"]
    assert len(emitter.warnings) == 1
    assert "produced no content for section 'EMPTY'" in emitter.warnings[0]
