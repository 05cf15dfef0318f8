import pytest

from upspring.ptrvec import PtrVec


class Item:
    def __init__(self, name=""):
        self.name = name
        self.index = -1


def test_add_sets_index():
    vec = PtrVec()
    items = [vec.add(Item(n)) for n in "abc"]
    assert [i.index for i in items] == [0, 1, 2]
    assert len(vec) == 3
    assert list(vec) == items


def test_erase_moves_last_into_place():
    vec = PtrVec()
    a, b, c = (vec.add(Item(n)) for n in "abc")
    vec.erase(a)
    assert list(vec) == [c, b]
    assert c.index == 0
    assert vec[0] is c


def test_erase_last():
    vec = PtrVec()
    a, b = vec.add(Item("a")), vec.add(Item("b"))
    vec.erase(b)
    assert list(vec) == [a]
    assert a.index == 0


def test_indices_stay_consistent():
    vec = PtrVec(Item)
    items = [vec.add() for _ in range(6)]
    for item in items[::2]:
        vec.erase(item)
    assert len(vec) == 3
    for pos, item in enumerate(vec):
        assert item.index == pos


def test_erase_foreign_element_raises():
    vec = PtrVec()
    vec.add(Item("a"))
    other = PtrVec()
    stranger = other.add(Item("x"))
    stranger.index = 0
    with pytest.raises(ValueError):
        vec.erase(stranger)


def test_factory_and_missing_factory():
    vec = PtrVec(lambda: Item("made"))
    made = vec.add()
    assert made.name == "made"
    assert made.index == 0
    with pytest.raises(TypeError):
        PtrVec().add()


def test_clear():
    vec = PtrVec(Item)
    vec.add()
    vec.add()
    vec.clear()
    assert len(vec) == 0
    assert list(vec) == []