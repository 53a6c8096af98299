"""Core evaluator for the Forsp interpreter.

`compute` runs a list as a sequence of commands; `evaluate` handles a single
command. The environment is threaded through explicitly: both return the
environment in effect afterwards, which is how the `pop` primitive extends
the scope of the computation that called it.

A closure invoked as the last command of a computation replaces the current
frame instead of nesting, so loops written as tail recursion run in constant
Python stack.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from forsp import ForspValue, SExpression
from forsp.errors import ForspSyntaxError
from forsp.types.environment import env_find
from forsp.types.nil import Nil
from forsp.types.objects import Atom, Closure, Pair, Primitive, car, cdr

if TYPE_CHECKING:
    from forsp.interpreter import Interpreter


def compute(interp: Interpreter, comp: SExpression, env: ForspValue) -> ForspValue:
    """Run every command of the list `comp` against `env`."""
    frame_env = None  # caller's env once a tail call has replaced its frame

    while True:
        tail: Closure | None = None
        while comp is not Nil:
            cmd = car(comp)
            comp = cdr(comp)

            if cmd is interp.atom_quote:
                if comp is Nil:
                    raise ForspSyntaxError("Expected data following a quote form")
                interp.push(car(comp))
                comp = cdr(comp)
                continue

            if isinstance(cmd, Atom):
                val = env_find(env, cmd)
                if comp is Nil and isinstance(val, Closure):
                    tail = val
                    break
                env = apply_value(interp, val, env)
            else:
                env = evaluate(interp, cmd, env)

        if tail is None:
            return env if frame_env is None else frame_env
        if frame_env is None:
            frame_env = env
        comp, env = tail.body, tail.env


def evaluate(interp: Interpreter, expr: SExpression, env: ForspValue) -> ForspValue:
    """Evaluate a single command and return the resulting environment."""
    if isinstance(expr, Atom):
        return apply_value(interp, env_find(env, expr), env)
    if expr is Nil or isinstance(expr, Pair):
        # lists are data until named: capture them with the current env
        interp.push(Closure(expr, env))
        return env
    interp.push(expr)
    return env


def apply_value(interp: Interpreter, val: ForspValue, env: ForspValue) -> ForspValue:
    """Act on the value an atom is bound to."""
    if isinstance(val, Closure):
        compute(interp, val.body, val.env)
        return env
    if isinstance(val, Primitive):
        return val.fn(interp, env)
    interp.push(val)
    return env
