from forsp.types.nil import Nil, NilType
from forsp.types.objects import (
    Atom,
    Closure,
    Pair,
    Primitive,
    Tag,
    car,
    cdr,
    from_iterable,
    iter_list,
    make_number,
    obj_equal,
    tag_of,
    to_int64,
    wrap_int64,
)
from forsp.types.intern import InternTable
from forsp.types.environment import env_define, env_define_prim, env_find

__all__ = [
    "Atom",
    "Closure",
    "InternTable",
    "Nil",
    "NilType",
    "Pair",
    "Primitive",
    "Tag",
    "car",
    "cdr",
    "env_define",
    "env_define_prim",
    "env_find",
    "from_iterable",
    "iter_list",
    "make_number",
    "obj_equal",
    "tag_of",
    "to_int64",
    "wrap_int64",
]
