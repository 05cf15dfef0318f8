import io

import pytest

from upspring.cfgparser import (
    CfgList,
    CfgLiteral,
    CfgNumeric,
    CfgWriter,
    ConfigError,
    InputBuffer,
    add_value_class,
    dumps,
    load_file,
    loads,
    parse_value,
    save_file,
)


def test_parse_basic_values():
    cfg = loads('a = 1\nb = "hi"\nc = { d = 2.5 }')
    assert cfg.get_numeric("a") == 1
    assert cfg.get_literal("b") == "hi"
    inner = cfg.get_value("c")
    assert isinstance(inner, CfgList)
    assert inner.get_numeric("d") == 2.5


def test_lookup_is_case_insensitive():
    cfg = loads("Width = 640")
    assert cfg.get_int("WIDTH", 0) == 640


def test_defaults_for_missing_or_wrong_type():
    cfg = loads('n = 3\ns = "text"')
    assert cfg.get_numeric("missing", 7.0) == 7.0
    assert cfg.get_literal("n", "dflt") == "dflt"
    assert cfg.get_numeric("s", 9.0) == 9.0
    assert cfg.get_literal("missing") is None


def test_identifier_literal():
    cfg = loads("name = foo_bar")
    value = cfg.get_value("name")
    assert value == CfgLiteral("foo_bar", True)


def test_escaped_quote_in_string():
    cfg = loads('x = "a\\"b"')
    assert cfg.get_literal("x") == 'a"b'


@pytest.mark.parametrize("text,expected", [("-3", -3), (".5", 0.5), ("12", 12), ("1.25", 1.25)])
def test_numbers(text, expected):
    assert loads("x = " + text).get_numeric("x") == expected


def test_name_without_value():
    cfg = loads("flag\nx = 1")
    assert [c.name for c in cfg.children] == ["flag", "x"]
    assert cfg.get_value("flag") is None


def test_get_bool():
    cfg = loads("on = 1\noff = 0")
    assert cfg.get_bool("on") is True
    assert cfg.get_bool("off") is False
    assert cfg.get_bool("missing", True) is True


def test_dumps_flat():
    cfg = CfgList()
    cfg.add_numeric("x", 3)
    cfg.add_literal("s", "v")
    assert dumps(cfg) == 'x = 3\ns = "v"\n'


def test_dumps_nested_indentation():
    cfg = CfgList()
    inner = CfgList()
    inner.add_numeric("b", 1)
    cfg.add_value("a", inner)
    assert dumps(cfg) == "a = {\n  b = 1\n  }\n"


def test_round_trip():
    cfg = CfgList()
    cfg.add_numeric("x", 0.5)
    cfg.add_literal("name", "model file")
    sub = CfgList()
    sub.add_numeric("count", 4)
    sub.add_literal("label", "sub")
    cfg.add_value("View0", sub)
    again = loads(dumps(cfg))
    assert again == cfg


def test_file_round_trip(tmp_path):
    cfg = CfgList()
    cfg.add_numeric("height", 480)
    cfg.add_literal("dir", "textures")
    path = tmp_path / "out.cfg"
    save_file(cfg, path)
    loaded = load_file(path)
    assert loaded.get_int("height", 0) == 480
    assert loaded.get_literal("dir") == "textures"


def test_nested_file(tmp_path):
    (tmp_path / "inner.cfg").write_text("k = 4")
    outer = tmp_path / "outer.cfg"
    outer.write_text('inc = file "inner.cfg"')
    cfg = load_file(outer)
    assert cfg.get_value("inc").get_numeric("k") == 4


def test_missing_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_file(tmp_path / "nope.cfg")


def test_empty_file_raises(tmp_path):
    path = tmp_path / "empty.cfg"
    path.write_text("")
    with pytest.raises(ConfigError):
        load_file(path)


@pytest.mark.parametrize("text", ["a = {", "a = ", "a = }", "a = { b = 1", "= 3"])
def test_parse_errors(text):
    with pytest.raises(ConfigError):
        loads(text)


def test_list_requires_brace():
    with pytest.raises(ConfigError):
        CfgList.parse(InputBuffer("x = 1"), False)


def test_root_stops_at_closing_brace():
    cfg = loads("a = 1 } b = 2")
    assert [c.name for c in cfg.children] == ["a"]


def test_writer_indents_after_newline():
    out = io.StringIO()
    writer = CfgWriter(out)
    writer.inc_indent()
    writer.write("a\n")
    writer.write("b")
    writer.dec_indent()
    writer.write("\n")
    assert out.getvalue() == "a\n  b\n"


def test_input_buffer_helpers():
    buf = InputBuffer("  file_x file", "f.cfg")
    assert buf.skip_whitespace() is False
    assert buf.compare_ident("file") is False
    assert buf.parse_ident() == "file_x"
    buf.skip_whitespace()
    assert buf.compare_ident("file") is True
    buf.parse_ident()
    assert buf.skip_whitespace() is True
    assert buf.at_end() is True


def test_parse_value_numeric():
    assert parse_value(InputBuffer("  42")) == CfgNumeric(42.0)


class _AngleClass:
    def identify(self, buf):
        return buf.current == "<"

    def parse(self, buf):
        buf.advance()
        text = buf.parse_ident()
        buf.advance()
        return CfgLiteral(text.upper())


def test_custom_value_class():
    add_value_class(_AngleClass())
    cfg = loads("x = <abc>\ny = 2")
    assert cfg.get_literal("x") == "ABC"
    assert cfg.get_numeric("y") == 2