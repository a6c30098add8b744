"""Tests for DifyGenerator (YAML emission)."""

import pytest
import yaml

from dify_dsl.core.app import App
from dify_dsl.generator.dify_generator import DifyGenerator, DumpOptions, dump_app
from dify_dsl.nodes.code import CodeNode
from dify_dsl.nodes.start import StartNode
from dify_dsl.parser.dify_parser import DifyParser

CODE = "def main(x: int) -> dict:\n    return {\"y\": x + 1}\n"


def _sample_app():
    app = App.create("Sample")
    graph = app.workflow.graph
    graph.add_node(StartNode.create())
    code = CodeNode.create("code")
    code.code = CODE
    graph.add_node(code)
    graph.connect_nodes("start", "code")
    app.add_dependency("openai", {"type": "marketplace", "current_identifier": None})
    return app


def _top_level_keys(text):
    return [line.split(":")[0] for line in text.splitlines()
            if line and not line[0].isspace() and not line.startswith("-")]


def test_generate_loads_back_to_tree():
    """The emitted YAML is exactly the App's tree."""
    app = _sample_app()

    text = DifyGenerator().generate(app)

    assert yaml.safe_load(text) == app.to_tree()


def test_generate_keeps_document_key_order():
    """Keys follow to_tree() insertion order, not alphabetical order."""
    text = DifyGenerator().generate(App.create("Ordered"))

    assert _top_level_keys(text) == ["app", "kind", "version", "workflow"]
    assert text.index("name: Ordered") < text.index("description:")


def test_generate_is_deterministic():
    """Emitting the same App twice gives identical text."""
    app = _sample_app()
    generator = DifyGenerator()

    assert generator.generate(app) == generator.generate(app)


def test_generate_uses_literal_blocks_for_multiline_text():
    """Multi-line strings are written as | blocks."""
    text = DifyGenerator().generate(_sample_app())

    assert "code: |" in text


def test_generate_keeps_unicode():
    """Non-ASCII titles are written as-is, not escaped."""
    text = DifyGenerator().generate(_sample_app())

    assert "title: 开始" in text


def test_generate_compact_writes_null():
    """Compact output spells out null."""
    text = DifyGenerator().generate(_sample_app())

    assert "current_identifier: null" in text


def test_generate_pretty_uses_tilde_for_null():
    """Pretty output uses ~ for nulls and still loads to the same tree."""
    app = _sample_app()

    text = DifyGenerator().generate_pretty(app)

    assert "current_identifier: ~" in text
    assert "code: |" in text
    assert yaml.safe_load(text) == app.to_tree()


def test_set_options_disables_literal_blocks():
    """Without literal blocks the multi-line code is emitted as a quoted scalar."""
    app = _sample_app()
    generator = DifyGenerator()
    generator.set_options(DumpOptions(multiline_literal=False))

    text = generator.generate(app)

    assert "code: |" not in text
    assert yaml.safe_load(text)["workflow"]["graph"]["nodes"][1]["data"]["code"] == CODE


def test_set_indent_size():
    """The indent size applies to nested mappings."""
    generator = DifyGenerator()
    generator.set_indent_size(4)

    text = generator.generate(App.create("Indented"))

    assert "\n    name: Indented" in text
    assert yaml.safe_load(text) == App.create("Indented").to_tree()


def test_generate_to_file_creates_parent_directories(tmp_path):
    """Missing parent directories are created before writing."""
    app = _sample_app()
    path = tmp_path / "nested" / "dir" / "sample.yml"

    written = DifyGenerator().generate_to_file(app, path)

    assert written == path
    assert path.exists()
    assert DifyParser().parse_file(path) == app


def test_generate_to_file_pretty(tmp_path):
    """pretty=True writes the pretty rendering."""
    path = tmp_path / "sample.yml"

    DifyGenerator().generate_to_file(_sample_app(), str(path), pretty=True)

    assert "current_identifier: ~" in path.read_text(encoding="utf-8")


def test_emission_is_idempotent_through_parser(full_yaml):
    """emit(parse(emit(app))) is byte-identical to emit(app)."""
    app = DifyParser().parse(full_yaml)
    generator = DifyGenerator()

    first = generator.generate(app)
    second = generator.generate(DifyParser().parse(first))

    assert first == second


def test_dump_app_helper():
    """dump_app() is shorthand for a default generator."""
    app = _sample_app()

    assert dump_app(app) == DifyGenerator().generate(app)
    assert dump_app(app, pretty=True) == DifyGenerator().generate_pretty(app)


@pytest.mark.parametrize("pretty", [False, True])
@pytest.mark.parametrize("text", ["a\x85b", "line\u2028sep", "para\u2029sep", "two\nlines\x85here\n"])
def test_unicode_line_breaks_survive(text, pretty):
    """NEL and the Unicode line/paragraph separators are escaped, not written raw."""
    app = App.create("Breaks")
    app.description = text
    generator = DifyGenerator()

    output = generator.generate_pretty(app) if pretty else generator.generate(app)

    assert yaml.safe_load(output)["app"]["description"] == text
    assert DifyParser().parse(output).description == text
