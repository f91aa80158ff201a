"""Built-in functions available to every Monkey program.

Built-ins report misuse by returning an `Error` value, exactly like the
evaluator does, so a bad call propagates as an ordinary Monkey error.
Argument counts are checked by the evaluator against `Builtin.arity`
before the native function runs.
"""

from typing import Dict, List

from .types import NULL, Array, Builtin, Error, Integer, Object, ObjectType, String


def _argument_error(name: str, arg: Object, expected: str) -> Error:
    return Error(f"argument to `{name}` must be {expected}, got {arg.type()}")


def builtin_len(args: List[Object]) -> Object:
    arg = args[0]
    if isinstance(arg, String):
        return Integer(len(arg.value.encode('utf-8')))
    if isinstance(arg, Array):
        return Integer(len(arg.elements))
    return Error(f"argument to `len` not supported, got {arg.type()}")


def builtin_first(args: List[Object]) -> Object:
    arr = args[0]
    if not isinstance(arr, Array):
        return _argument_error('first', arr, ObjectType.ARRAY)
    return arr.elements[0] if arr.elements else NULL


def builtin_last(args: List[Object]) -> Object:
    arr = args[0]
    if not isinstance(arr, Array):
        return _argument_error('last', arr, ObjectType.ARRAY)
    return arr.elements[-1] if arr.elements else NULL


def builtin_rest(args: List[Object]) -> Object:
    arr = args[0]
    if not isinstance(arr, Array):
        return _argument_error('rest', arr, ObjectType.ARRAY)
    if not arr.elements:
        return NULL
    return Array(list(arr.elements[1:]))


def builtin_puts(args: List[Object]) -> Object:
    for arg in args:
        print(arg.inspect())
    return NULL


BUILTINS: Dict[str, Builtin] = {
    'len': Builtin('len', 1, builtin_len),
    'first': Builtin('first', 1, builtin_first),
    'last': Builtin('last', 1, builtin_last),
    'rest': Builtin('rest', 1, builtin_rest),
    'puts': Builtin('puts', None, builtin_puts),
}
