"""Primitive operations for the Forsp runtime environment.

Each primitive takes the interpreter and the current environment and returns
the environment in effect afterwards. Only `pop` returns a different one.

Binary operators pop their second operand first: `3 4 -` computes 3 - 4.
"""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from forsp import ForspValue
from forsp.types.environment import env_define, env_define_prim, env_find
from forsp.types.nil import Nil
from forsp.types.objects import Pair, car, cdr, make_number, obj_equal, tag_of, to_int64

if TYPE_CHECKING:
    from forsp.interpreter import Interpreter

log = logging.getLogger(__name__)


# -------------------------------
# Core primitives
# -------------------------------
def prim_push(interp: Interpreter, env: ForspValue) -> ForspValue:
    interp.push(env_find(env, interp.pop()))
    return env


def prim_pop(interp: Interpreter, env: ForspValue) -> ForspValue:
    k = interp.pop()
    v = interp.pop()
    return env_define(env, k, v)


def prim_cons(interp: Interpreter, env: ForspValue) -> ForspValue:
    a = interp.pop()
    b = interp.pop()
    interp.push(Pair(a, b))
    return env


def prim_car(interp: Interpreter, env: ForspValue) -> ForspValue:
    interp.push(car(interp.pop()))
    return env


def prim_cdr(interp: Interpreter, env: ForspValue) -> ForspValue:
    interp.push(cdr(interp.pop()))
    return env


def prim_eq(interp: Interpreter, env: ForspValue) -> ForspValue:
    b = interp.pop()
    a = interp.pop()
    interp.push(interp.atom_true if obj_equal(a, b) else Nil)
    return env


def prim_cswap(interp: Interpreter, env: ForspValue) -> ForspValue:
    """Swap the next two values when the condition is the `t` atom."""
    if interp.pop() is interp.atom_true:
        a = interp.pop()
        b = interp.pop()
        interp.push(a)
        interp.push(b)
    return env


def prim_tag(interp: Interpreter, env: ForspValue) -> ForspValue:
    interp.push(int(tag_of(interp.pop())))
    return env


def prim_read(interp: Interpreter, env: ForspValue) -> ForspValue:
    interp.push(interp.read())
    return env


def prim_print(interp: Interpreter, env: ForspValue) -> ForspValue:
    interp.print(interp.pop())
    return env


# -------------------------------
# Extra primitives
# -------------------------------
def prim_stack(interp: Interpreter, env: ForspValue) -> ForspValue:
    interp.push(interp.stack)
    return env


def prim_env(interp: Interpreter, env: ForspValue) -> ForspValue:
    interp.push(env)
    return env


def _binary(interp: Interpreter) -> tuple[int, int]:
    b = interp.pop()
    a = interp.pop()
    return to_int64(a), to_int64(b)


def prim_sub(interp: Interpreter, env: ForspValue) -> ForspValue:
    a, b = _binary(interp)
    interp.push(make_number(a - b))
    return env


def prim_mul(interp: Interpreter, env: ForspValue) -> ForspValue:
    a, b = _binary(interp)
    interp.push(make_number(a * b))
    return env


def prim_nand(interp: Interpreter, env: ForspValue) -> ForspValue:
    a, b = _binary(interp)
    interp.push(make_number(~(a & b)))
    return env


def prim_lsh(interp: Interpreter, env: ForspValue) -> ForspValue:
    a, b = _binary(interp)
    # the shift count is unsigned: negative counts are huge and clear every bit
    interp.push(make_number(a << b) if 0 <= b < 64 else 0)
    return env


def prim_rsh(interp: Interpreter, env: ForspValue) -> ForspValue:
    a, b = _binary(interp)
    interp.push(a >> b if 0 <= b < 64 else (-1 if a < 0 else 0))
    return env


PRIMITIVES = {
    "push": prim_push,
    "pop": prim_pop,
    "cons": prim_cons,
    "car": prim_car,
    "cdr": prim_cdr,
    "eq": prim_eq,
    "cswap": prim_cswap,
    "tag": prim_tag,
    "read": prim_read,
    "print": prim_print,
    "stack": prim_stack,
    "env": prim_env,
    "-": prim_sub,
    "*": prim_mul,
    "nand": prim_nand,
    "<<": prim_lsh,
    ">>": prim_rsh,
}

# Stack effects, top of stack rightmost. Shown by the language server.
PRIMITIVE_SIGNATURES = {
    "push": "push ( atom -- value ) push the value bound to atom",
    "pop": "pop ( value atom -- ) bind atom to value in the current scope",
    "cons": "cons ( cdr car -- pair ) the top of stack becomes the car",
    "car": "car ( pair -- x ) first slot of a pair",
    "cdr": "cdr ( pair -- x ) second slot of a pair",
    "eq": "eq ( a b -- t|() ) identity, or equal numbers",
    "cswap": "cswap ( a b cond -- b a | a b ) swap when cond is t",
    "tag": "tag ( x -- n ) 0 nil, 1 atom, 2 number, 3 pair, 4 closure, 5 primitive",
    "read": "read ( -- obj ) read the next object from the input",
    "print": "print ( x -- ) print x followed by a newline",
    "stack": "stack ( -- list ) the value stack as a list",
    "env": "env ( -- list ) the current environment as a list of bindings",
    "-": "- ( a b -- a-b )",
    "*": "* ( a b -- a*b )",
    "nand": "nand ( a b -- ~(a&b) )",
    "<<": "<< ( a b -- a<<b )",
    ">>": ">> ( a b -- a>>b ) arithmetic shift",
}


def register(interp: Interpreter, env: ForspValue) -> ForspValue:
    """Bind every primitive in `env` and return the extended environment."""
    for name, fn in PRIMITIVES.items():
        env = env_define_prim(env, interp.table, name, fn)
    log.debug("registered %d primitives", len(PRIMITIVES))
    return env
