from timeit import timeit

from forsp.config import DEFAULT_PRELUDE
from forsp.interpreter import Interpreter
from forsp.types.environment import env_define, env_find
from forsp.types.intern import InternTable
from forsp.types.nil import Nil


def _parse_one(itp: Interpreter, code: str):
    itp.set_source(code)
    return itp.read()


def make_runner(code: str):
    """Parse once; the returned callable computes the list from a fresh top-level env."""
    itp = Interpreter(prelude=DEFAULT_PRELUDE)
    expr = _parse_one(itp, code)
    env = itp.env

    def once():
        itp.compute(expr)
        itp.env = env
        itp.stack = Nil

    return itp, once


def time_interpreter(code: str, rounds: int) -> float:
    """Time compute only: repeatedly runs the same parsed list."""
    _, once = make_runner(code)
    # Warmup
    once()
    # Timed
    return timeit(once, number=rounds)


# Environment benchmark: the binding sits at the far end of the list

def bench_lookup_chain(n_bindings: int = 1000, n_lookups: int = 10000) -> float:
    table = InternTable()
    key = table.intern("answer")
    env = env_define(Nil, key, 42)
    for i in range(n_bindings):
        env = env_define(env, table.intern(f"v{i}"), i)
    # Warmup
    for _ in range(1000):
        env_find(env, key)
    # Timed
    return timeit(lambda: env_find(env, key), number=n_lookups)


def bench_intern(n_atoms: int = 500, n_lookups: int = 10000) -> float:
    table = InternTable()
    for i in range(n_atoms):
        table.intern(f"a{i}")
    return timeit(lambda: table.intern("a0"), number=n_lookups)


# Forsp-level workloads (prelude loaded)

CLOSURE_CALL_CODE = "(($a $b ^a ^b -) $sub 1 2 sub)"

TAIL_RECURSION_CODE = r"""
(
  ($self $n $acc
    (^acc n * n 1 - ^self self)
    (^acc)
    n 1 eq if) $fact
  1 20 ^fact fact
)
"""

# Sum 1..N, counting down
ARITH_SUM_CODE = r"""
(
  ($self $n $acc
    (^acc n + n 1 - ^self self)
    (^acc)
    n 0 eq if) $sum
  0 500 ^sum sum
)
"""


def _print_one(name: str, code: str, rounds: int) -> None:
    t = time_interpreter(code, rounds)
    print(f"Benchmark: {name}")
    print(f"  interpreter: {t:.6f}s  [rounds={rounds}]")


if __name__ == "__main__":
    print("Benchmark: environment lookup chain (1000 bindings deep)")
    print(f"  time: {bench_lookup_chain():.6f}s")
    print("Benchmark: intern table hit on the oldest atom")
    print(f"  time: {bench_intern():.6f}s")

    _print_one("closure call", CLOSURE_CALL_CODE, rounds=20000)
    _print_one("tail recursion (factorial 20)", TAIL_RECURSION_CODE, rounds=500)
    _print_one("arithmetic sum 1..500 (tail-rec)", ARITH_SUM_CODE, rounds=100)
