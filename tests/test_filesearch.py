from upspring.filesearch import find_files


def _is_lua(path):
    return path.suffix == ".lua"


def _tree(tmp_path):
    (tmp_path / "a.lua").write_text("")
    (tmp_path / "b.txt").write_text("")
    sub = tmp_path / "sub"
    sub.mkdir()
    (sub / "c.lua").write_text("")
    return tmp_path


def test_not_a_directory(tmp_path):
    f = tmp_path / "file.lua"
    f.write_text("")
    assert find_files(f, _is_lua) == []
    assert find_files(tmp_path / "missing", _is_lua) == []


def test_non_recursive(tmp_path):
    root = _tree(tmp_path)
    assert find_files(root, _is_lua) == [root / "a.lua"]


def test_recursive(tmp_path):
    root = _tree(tmp_path)
    result = find_files(root, _is_lua, recursive=True)
    assert set(result) == {root / "a.lua", root / "sub" / "c.lua"}


def test_predicate_accepts_all(tmp_path):
    root = _tree(tmp_path)
    names = {p.name for p in find_files(root, lambda p: True, True)}
    assert names == {"a.lua", "b.txt", "c.lua"}