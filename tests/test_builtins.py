import pytest

from forsp import errors
from forsp.builtin.env_builtin import PRIMITIVES, PRIMITIVE_SIGNATURES
from forsp.types.nil import Nil
from forsp.types.objects import Closure, Pair, Primitive, Tag
from forsp.types.environment import env_find


def test_every_primitive_is_installed(interp):
    for name in PRIMITIVES:
        prim = env_find(interp.env, interp.intern(name))
        assert isinstance(prim, Primitive)
        assert prim.name == name
    assert set(PRIMITIVE_SIGNATURES) == set(PRIMITIVES)


@pytest.mark.parametrize(
    "source,expected",
    [
        ("(3 4 -)", -1),
        ("(10 3 -)", 7),
        ("(-6 7 *)", -42),
        ("(12 10 nand)", -9),
        ("(0 0 nand)", -1),
        ("(1 4 <<)", 16),
        ("(1 63 <<)", -(2**63)),
        ("(1 64 <<)", 0),
        ("(1 -1 <<)", 0),
        ("(256 4 >>)", 16),
        ("(-16 2 >>)", -4),
        ("(-16 64 >>)", -1),
        ("(16 99 >>)", 0),
        ("(9223372036854775807 1 -)", 2**63 - 2),
        ("(-9223372036854775808 1 -)", 2**63 - 1),
        ("(4611686018427387904 2 *)", -(2**63)),
        ("('a 5 -)", -5),
        ("(5 '() *)", 0),
    ],
)
def test_arithmetic(run, source, expected):
    assert run(source) == [expected]


def test_cons_takes_car_from_top(run, py):
    (pair,) = run("('() 1 cons)")
    assert py(pair) == [1]
    (pair,) = run("(1 2 cons)")
    assert pair.car == 2 and pair.cdr == 1


def test_car_cdr(run, py):
    assert py(run("('(1 2 3) car)")[0]) == 1
    assert py(run("('(1 2 3) cdr)")[0]) == [2, 3]


def test_car_of_non_pair(run):
    with pytest.raises(errors.ForspTypeError, match="car"):
        run("(5 car)")


@pytest.mark.parametrize(
    "source,truth",
    [
        ("(1 1 eq)", True),
        ("(1 2 eq)", False),
        ("('a 'a eq)", True),
        ("('a 'b eq)", False),
        ("('() '() eq)", True),
        ("('(1) '(1) eq)", False),
        ("('x 0 eq)", False),
    ],
)
def test_eq(interp, run, source, truth):
    (result,) = run(source)
    assert result is (interp.atom_true if truth else Nil)


def test_eq_same_pair(run, interp):
    (result,) = run("('(1) $p ^p ^p eq)")
    assert result is interp.atom_true


def test_cswap_on_t(run):
    assert run("(1 2 't cswap)") == [1, 2]


@pytest.mark.parametrize("cond", ["'()", "1", "'true", "(t)"])
def test_cswap_ignores_anything_but_t(run, cond):
    assert run(f"(1 2 {cond} cswap)") == [2, 1]


def test_cswap_with_eq_result(run):
    assert run("(1 2 3 3 eq cswap)") == [1, 2]


@pytest.mark.parametrize(
    "source,tag",
    [
        ("('() tag)", Tag.NIL),
        ("('a tag)", Tag.ATOM),
        ("(5 tag)", Tag.NUMBER),
        ("('(1) tag)", Tag.PAIR),
        ("(() tag)", Tag.CLOSURE),
        ("(^cons tag)", Tag.PRIMITIVE),
    ],
)
def test_tag(run, source, tag):
    assert run(source) == [int(tag)]


def test_read_pulls_from_shared_input(run, py):
    assert py(run("(read read) hello (1 2)")[0]) == [1, 2]


def test_read_past_end(run):
    with pytest.raises(errors.ForspEndOfInput):
        run("(read)")


def test_print(run, capsys):
    run("('(1 (2 3) x) print 42 print '() print ('a 'b cons print))")
    # the inner list is a closure: it is only pushed, never run
    assert capsys.readouterr().out == "(1 (2 3) x)\n42\n()\n"


def test_print_dotted(run, capsys):
    run("(1 2 cons print)")
    assert capsys.readouterr().out == "(2 . 1)\n"


def test_stack_introspection(run, capsys):
    run("(1 2 stack print)")
    assert capsys.readouterr().out == "(2 1)\n"


def test_stack_value_is_a_snapshot(run, py):
    stack = run("(1 stack 2)")
    assert stack[0] == 2
    assert py(stack[1]) == [1]


def test_env_introspection(run, py):
    (key,) = run("(5 $x env car car)")
    assert py(key) == "x"


def test_env_of_fresh_interpreter_lists_primitives(run, py):
    (env,) = run("(env)")
    names = [py(binding.car) for binding in _iter(env)]
    assert names == list(reversed(list(PRIMITIVES)))


def test_push_and_pop_primitives(run):
    assert run("(5 'x pop 'x push)") == [5]


def test_pop_underflow(run):
    with pytest.raises(errors.ForspStackUnderflow):
        run("('x pop)")


def _iter(lst):
    while isinstance(lst, Pair):
        yield lst.car
        lst = lst.cdr


def test_closure_printing(run, capsys):
    (closure,) = run("((1 2))")
    assert isinstance(closure, Closure)
    run("((1 2) print)")
    out = capsys.readouterr().out
    assert out.startswith("CLOSURE<(1 2), 0x")
    assert out.endswith(">\n")
