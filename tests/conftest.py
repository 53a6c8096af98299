import pytest

from forsp.interpreter import Interpreter
from forsp.types.nil import Nil
from forsp.types.objects import Atom, Pair, iter_list


def to_python(obj):
    """Nested Python lists for Pair chains; atoms become their text."""
    if obj is Nil:
        return []
    if isinstance(obj, Pair):
        return [to_python(x) for x in iter_list(obj)]
    if isinstance(obj, Atom):
        return obj.name
    return obj


# Every test gets a fresh machine: primitives only, empty stack, no prelude.
@pytest.fixture
def interp():
    return Interpreter()


@pytest.fixture
def run(interp):
    """Compute one program on an empty stack and return the stack as a
    Python list, top first. Bindings carry over between calls."""
    def _run(source: str):
        interp.stack = Nil
        interp.run(source)
        return interp.stack_items()
    return _run


@pytest.fixture
def py():
    return to_python
