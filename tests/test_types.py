from monkey.types import (
    FALSE, NULL, TRUE, Array, Error, Function, Hash, HashKey, HashPair, Integer,
    ObjectType, ReturnValue, String, fnv1a_64, is_truthy, native_bool_to_boolean, wrap_int64,
)
from monkey.environment import Environment
from monkey.parser import parse_program


def test_wrap_int64():
    assert wrap_int64(5) == 5
    assert wrap_int64(-5) == -5
    assert wrap_int64(2 ** 63) == -2 ** 63
    assert wrap_int64(-2 ** 63 - 1) == 2 ** 63 - 1
    assert wrap_int64(2 ** 64 + 3) == 3


def test_fnv1a_64_reference_values():
    assert fnv1a_64(b'') == 0xcbf29ce484222325
    assert fnv1a_64(b'a') == 0xaf63dc4c8601ec8c
    assert fnv1a_64(b'foobar') == 0x85944171f73967e8


def test_string_hash_keys():
    hello1 = String('Hello World')
    hello2 = String('Hello World')
    diff = String('My name is johnny')
    assert hello1 is not hello2
    assert hello1.hash_key() == hello2.hash_key()
    assert hello1.hash_key() != diff.hash_key()


def test_hash_keys_are_tagged_by_type():
    assert Integer(1).hash_key() == HashKey(ObjectType.INTEGER, 1)
    assert TRUE.hash_key() == HashKey(ObjectType.BOOLEAN, 1)
    assert Integer(1).hash_key() != TRUE.hash_key()
    assert Integer(0).hash_key() != FALSE.hash_key()


def test_negative_integer_hash_key_is_unsigned():
    assert Integer(-1).hash_key().key == 2 ** 64 - 1


def test_inspect():
    assert Integer(-3).inspect() == '-3'
    assert TRUE.inspect() == 'true'
    assert FALSE.inspect() == 'false'
    assert NULL.inspect() == 'null'
    assert String('hi').inspect() == '"hi"'
    assert Array([Integer(1), String('a'), Array([])]).inspect() == '[1, "a", []]'
    assert Error('boom').inspect() == 'ERROR: boom'
    assert ReturnValue(Integer(7)).inspect() == '7'
    assert str(Integer(9)) == '9'


def test_hash_inspect_keeps_insertion_order():
    h = Hash({
        String('b').hash_key(): HashPair(String('b'), Integer(2)),
        Integer(1).hash_key(): HashPair(Integer(1), TRUE),
    })
    assert h.inspect() == '{"b": 2, 1: true}'
    assert Hash().inspect() == '{}'


def test_function_inspect():
    literal = parse_program('fn(a, b) { a * b }').statements[0].expression
    fn = Function(literal.parameters, literal.body, Environment())
    assert fn.type() == ObjectType.FUNCTION
    assert fn.inspect() == 'fn(a, b) { (a * b); }'


def test_truthiness():
    assert not is_truthy(NULL)
    assert not is_truthy(FALSE)
    assert is_truthy(TRUE)
    assert is_truthy(Integer(0))
    assert is_truthy(String(''))
    assert is_truthy(Array([]))


def test_boolean_singletons():
    assert native_bool_to_boolean(True) is TRUE
    assert native_bool_to_boolean(False) is FALSE
    assert str(ObjectType.INTEGER) == 'INTEGER'
