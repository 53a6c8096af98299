import copy

import pytest

from forsp.errors import ForspTypeError
from forsp.types.intern import InternTable
from forsp.types.nil import Nil, NilType
from forsp.types.objects import (
    Atom, Closure, Pair, Primitive, Tag,
    car, cdr, from_iterable, iter_list, make_number, obj_equal, tag_of, to_int64, wrap_int64,
)


def test_nil_is_a_singleton():
    assert NilType() is Nil
    assert copy.deepcopy(Nil) is Nil
    assert not Nil


@pytest.mark.parametrize(
    "value,tag",
    [
        (Nil, Tag.NIL),
        (Atom("a"), Tag.ATOM),
        (42, Tag.NUMBER),
        (Pair(1, Nil), Tag.PAIR),
        (Closure(Nil, Nil), Tag.CLOSURE),
        (Primitive(lambda interp, env: env, "noop"), Tag.PRIMITIVE),
    ],
)
def test_tag_of(value, tag):
    assert tag_of(value) == tag


def test_tag_ids_are_stable():
    assert [int(t) for t in Tag] == [0, 1, 2, 3, 4, 5]


def test_obj_equal_numbers_by_value():
    assert obj_equal(make_number(7), make_number(7))
    assert not obj_equal(7, 8)


def test_obj_equal_everything_else_by_identity():
    p = Pair(1, Nil)
    assert obj_equal(p, p)
    assert not obj_equal(p, Pair(1, Nil))
    assert not obj_equal(Atom("a"), Atom("a"))
    assert obj_equal(Nil, Nil)
    assert not obj_equal(Nil, 0)


def test_to_int64_defaults_to_zero():
    assert to_int64(-5) == -5
    assert to_int64(Atom("x")) == 0
    assert to_int64(Nil) == 0
    assert to_int64(Pair(3, Nil)) == 0


@pytest.mark.parametrize(
    "n,expected",
    [
        (0, 0),
        (2**63 - 1, 2**63 - 1),
        (2**63, -(2**63)),
        (-(2**63) - 1, 2**63 - 1),
        (2**64 + 5, 5),
    ],
)
def test_wrap_int64(n, expected):
    assert wrap_int64(n) == expected


def test_car_cdr():
    p = Pair(1, 2)
    assert car(p) == 1
    assert cdr(p) == 2
    with pytest.raises(ForspTypeError):
        car(Nil)
    with pytest.raises(ForspTypeError, match="cdr"):
        cdr(5)


def test_from_iterable_and_iter_list():
    lst = from_iterable([1, 2, 3])
    assert list(iter_list(lst)) == [1, 2, 3]
    assert from_iterable([]) is Nil
    dotted = from_iterable([1], tail=2)
    assert dotted.car == 1 and dotted.cdr == 2


# -------------------------------
# Interning
# -------------------------------
def test_intern_returns_identical_atom():
    table = InternTable()
    a = table.intern("foo")
    assert table.intern("foo") is a
    assert obj_equal(a, table.intern("foo"))
    assert table.intern("bar") is not a


def test_intern_is_case_sensitive():
    table = InternTable()
    assert table.intern("Foo") is not table.intern("foo")


def test_intern_table_newest_first():
    table = InternTable()
    for name in ("a", "b", "c"):
        table.intern(name)
    table.intern("a")
    assert [a.name for a in table.atoms()] == ["c", "b", "a"]
    assert len(table) == 3
    assert "b" in table


def test_corrupted_intern_table_is_an_assertion_failure():
    from forsp.errors import ForspAssertionError
    table = InternTable()
    table.entries = Pair(5, Nil)
    with pytest.raises(ForspAssertionError, match="must be an Atom"):
        table.intern("x")
    table.entries = Atom("loose")
    with pytest.raises(ForspAssertionError, match="must be Pairs"):
        table.intern("x")
