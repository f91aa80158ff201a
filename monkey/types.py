"""Runtime value definitions for Monkey.

Every value the evaluator produces is an `Object`. Objects report a
fixed `ObjectType` tag, used in error messages and by the built-in
functions, and an `inspect()` rendering used for output. `Return` and
`Error` are control-flow values: they travel through the same channel as
ordinary results but never reach user code as operands.

Integers, booleans and strings can be used as hash keys. They produce a
`HashKey` tagged with their type, so equal values always share a key and
values of different types never collide.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Callable, Dict, List, Optional

if TYPE_CHECKING:
    from .ast import BlockStatement, Identifier
    from .environment import Environment


class ObjectType(str, Enum):
    INTEGER = 'INTEGER'
    BOOLEAN = 'BOOLEAN'
    STRING = 'STRING'
    NULL = 'NULL'
    ARRAY = 'ARRAY'
    HASH = 'HASH'
    FUNCTION = 'FUNCTION'
    BUILTIN = 'BUILTIN'
    RETURN_VALUE = 'RETURN_VALUE'
    ERROR = 'ERROR'

    def __str__(self) -> str:
        return self.value


INT64_MIN = -2 ** 63
UINT64_MASK = 2 ** 64 - 1

FNV64_OFFSET_BASIS = 0xcbf29ce484222325
FNV64_PRIME = 0x100000001b3


def wrap_int64(value: int) -> int:
    """Wrap an arbitrary Python int into the signed 64-bit range."""
    return (value - INT64_MIN) % 2 ** 64 + INT64_MIN


def fnv1a_64(data: bytes) -> int:
    h = FNV64_OFFSET_BASIS
    for byte in data:
        h ^= byte
        h = (h * FNV64_PRIME) & UINT64_MASK
    return h


@dataclass(frozen=True)
class HashKey:
    type: ObjectType
    key: int


class Object(ABC):
    """Base class for all Monkey runtime values."""

    @abstractmethod
    def type(self) -> ObjectType:
        ...

    @abstractmethod
    def inspect(self) -> str:
        ...

    def __str__(self) -> str:
        return self.inspect()


class Hashable(ABC):
    """Values that can be used as hash keys."""

    @abstractmethod
    def hash_key(self) -> HashKey:
        ...


@dataclass
class Integer(Object, Hashable):
    value: int

    def type(self) -> ObjectType:
        return ObjectType.INTEGER

    def inspect(self) -> str:
        return str(self.value)

    def hash_key(self) -> HashKey:
        return HashKey(ObjectType.INTEGER, self.value & UINT64_MASK)


@dataclass(eq=False)
class Boolean(Object, Hashable):
    """Only the two module-level instances TRUE and FALSE exist."""
    value: bool

    def type(self) -> ObjectType:
        return ObjectType.BOOLEAN

    def inspect(self) -> str:
        return 'true' if self.value else 'false'

    def hash_key(self) -> HashKey:
        return HashKey(ObjectType.BOOLEAN, 1 if self.value else 0)


@dataclass
class String(Object, Hashable):
    value: str

    def type(self) -> ObjectType:
        return ObjectType.STRING

    def inspect(self) -> str:
        return f'"{self.value}"'

    def hash_key(self) -> HashKey:
        return HashKey(ObjectType.STRING, fnv1a_64(self.value.encode('utf-8')))


class Null(Object):
    def type(self) -> ObjectType:
        return ObjectType.NULL

    def inspect(self) -> str:
        return 'null'

    def __repr__(self) -> str:
        return 'NULL'


@dataclass
class Array(Object):
    elements: List[Object]

    def type(self) -> ObjectType:
        return ObjectType.ARRAY

    def inspect(self) -> str:
        return '[' + ', '.join(el.inspect() for el in self.elements) + ']'


@dataclass
class HashPair:
    """Keeps the original key object next to the value, for rendering."""
    key: Object
    value: Object


@dataclass
class Hash(Object):
    pairs: Dict[HashKey, HashPair] = field(default_factory=dict)

    def type(self) -> ObjectType:
        return ObjectType.HASH

    def inspect(self) -> str:
        entries = ', '.join(f"{p.key.inspect()}: {p.value.inspect()}" for p in self.pairs.values())
        return '{' + entries + '}'


@dataclass(eq=False)
class Function(Object):
    """A user-defined function closed over the environment it was created in."""
    parameters: List['Identifier']
    body: 'BlockStatement'
    env: 'Environment' = field(repr=False)

    def type(self) -> ObjectType:
        return ObjectType.FUNCTION

    def inspect(self) -> str:
        params = ', '.join(str(p) for p in self.parameters)
        return f"fn({params}) {self.body}"


BuiltinFn = Callable[[List[Object]], Object]


@dataclass(eq=False)
class Builtin(Object):
    """A native function. `arity` of None accepts any number of arguments."""
    name: str
    arity: Optional[int]
    fn: BuiltinFn = field(repr=False)

    def type(self) -> ObjectType:
        return ObjectType.BUILTIN

    def inspect(self) -> str:
        return f"<builtin {self.name}>"


@dataclass
class ReturnValue(Object):
    value: Object

    def type(self) -> ObjectType:
        return ObjectType.RETURN_VALUE

    def inspect(self) -> str:
        return self.value.inspect()


@dataclass
class Error(Object):
    message: str

    def type(self) -> ObjectType:
        return ObjectType.ERROR

    def inspect(self) -> str:
        return f"ERROR: {self.message}"


NULL = Null()
TRUE = Boolean(True)
FALSE = Boolean(False)


def native_bool_to_boolean(value: bool) -> Boolean:
    return TRUE if value else FALSE


def is_signal(obj: Optional[Object]) -> bool:
    """True for values that must stop evaluation and travel upward: Error and ReturnValue."""
    return isinstance(obj, (Error, ReturnValue))


def is_truthy(obj: Object) -> bool:
    """NULL and FALSE are the only falsy values; 0 and "" are truthy."""
    return not (obj is NULL or obj is FALSE)
