import pytest

from upspring.launcher import (
    LaunchError,
    parse_command_line,
    resolve_script,
    script_arguments,
)


def test_resolve_script_existing_path(tmp_path):
    script = tmp_path / "a.lua"
    script.write_text("print(1)")
    assert resolve_script(str(script), "/nonexistent") == str(script)


def test_resolve_script_relative_to_app_path(tmp_path):
    (tmp_path / "scripts").mkdir()
    script = tmp_path / "scripts" / "b.lua"
    script.write_text("")
    result = resolve_script("scripts/b.lua", tmp_path)
    assert result == str(tmp_path / "scripts" / "b.lua")


def test_resolve_script_missing(tmp_path):
    with pytest.raises(LaunchError) as exc:
        resolve_script("missing.lua", tmp_path)
    assert "Haven't found script 'missing.lua'" in str(exc.value)


def test_script_arguments_without_extra():
    assert script_arguments("run.lua", []) == ["run.lua"]


def test_script_arguments_with_delimiter():
    assert script_arguments("run.lua", ["--", "x", "y"]) == ["run.lua", "x", "y"]


def test_script_arguments_without_delimiter():
    with pytest.raises(LaunchError, match="no -- delimiter"):
        script_arguments("run.lua", ["x"])


def test_parse_model_file():
    opts = parse_command_line(["upspring", "model.s3o"])
    assert opts.model_file == "model.s3o"
    assert opts.script is None
    assert not opts.runs_script


def test_parse_no_arguments():
    opts = parse_command_line(["upspring"])
    assert opts.model_file is None
    assert opts.remaining == []


def test_parse_run_script_with_arguments():
    opts = parse_command_line(["upspring", "-r", "s.lua", "--", "a", "b"])
    assert opts.script == "s.lua"
    assert opts.remaining == ["--", "a", "b"]
    assert script_arguments(opts.script, opts.remaining) == ["s.lua", "a", "b"]


def test_parse_run_long_forms():
    assert parse_command_line(["upspring", "--run", "x.lua"]).script == "x.lua"
    assert parse_command_line(["upspring", "--run=y.lua"]).script == "y.lua"


def test_parse_run_missing_value():
    with pytest.raises(LaunchError):
        parse_command_line(["upspring", "--run"])


def test_parse_version_flag():
    assert parse_command_line(["upspring", "--version"]).show_version is True


def test_parse_app_path():
    opts = parse_command_line(["/opt/upspring/upspring", "m.3do"])
    assert opts.app_path == "/opt/upspring"


def test_parse_unexpected_extra_arguments():
    with pytest.raises(LaunchError, match="not expected"):
        parse_command_line(["upspring", "a.s3o", "b.s3o"])


def test_parse_model_after_delimiter():
    assert parse_command_line(["upspring", "--", "m.s3o"]).model_file == "m.s3o"