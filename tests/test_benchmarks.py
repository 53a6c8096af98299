import importlib.util
from pathlib import Path

import pytest

from forsp.types.objects import iter_list

BENCH_PATH = Path(__file__).resolve().parent.parent / "benchmarks" / "simple_benchmarks.py"


@pytest.fixture(scope="module")
def bench():
    spec = importlib.util.spec_from_file_location("simple_benchmarks", BENCH_PATH)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def test_runner_does_not_grow_the_environment(bench):
    itp, once = bench.make_runner(bench.TAIL_RECURSION_CODE)
    depth = len(list(iter_list(itp.env)))
    for _ in range(3):
        once()
    assert len(list(iter_list(itp.env))) == depth
    assert itp.stack_items() == []


def test_lookup_chain_benchmark_runs(bench):
    assert bench.bench_lookup_chain(n_bindings=10, n_lookups=10) >= 0
