# Core type aliases for the Forsp data model.
# Values are a closed set: Nil, Atom, Number (plain int), Pair, Closure and
# Primitive. Code and data share that representation; a list read from source
# is the same Pair chain the evaluator later walks as a computation.
#
# Naming guidance:
# - SExpression: Use in reader/printer code to denote syntactic forms.
# - ForspValue:  Use in evaluator/runtime code to denote runtime values.
# Both aliases resolve to `Any` and are interchangeable.

from typing import Any, Callable

# Runtime value alias
ForspValue = Any
SExpression = ForspValue

# Primitive signature: receives the interpreter and the current environment,
# returns the environment in effect afterwards.
PrimitiveFn = Callable[..., ForspValue]
