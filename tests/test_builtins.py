## typescala — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

import math
from typing import Any

import pytest

from typescala import operators
from typescala.types import Function, NativeFunction, PixelBuffer, null
from typescala.registry import MethodRegistry, make_native, get_native_name, get_signature
from typescala.builtins import load_builtins_registry, create_fresh_runtime_environment
from typescala.errors import NativeArgumentError


def test_native_names_are_camel_case():
    assert get_native_name('op_print') == 'print'
    assert get_native_name('op_set_pixel') == 'setPixel'
    assert get_native_name('op_fill_canvas') == 'fillCanvas'


def test_fresh_environment_has_globals():
    env = create_fresh_runtime_environment()
    for name in ('print', 'while', 'canvas', 'canvasWidth', 'canvasHeight', 'fillCanvas', 'setPixel'):
        assert isinstance(env.get(name), NativeFunction), name
    assert env.get('true') is True
    assert env.get('false') is False
    assert env.get('null') is null


def test_fresh_environments_are_independent():
    a, b = create_fresh_runtime_environment(), create_fresh_runtime_environment()
    a.define('x', 1.0)
    assert 'x' not in b
    a.registry.register_method('string', 'shout', lambda s: s.upper())
    assert b.registry.lookup_method("hi", 'shout') is None


def test_registry_tables():
    registry = load_builtins_registry()
    assert registry.method_names('string') == ['plus']
    assert registry.method_names('boolean') == ['and', 'equals', 'or']
    assert 'rangeInclusive' in registry.method_names('number')
    assert registry.method_names('null') == []
    assert registry.lookup_method(1.0, 'plus') is not None
    assert registry.lookup_method(null, 'plus') is None


def test_register_method_rejects_unknown_kind():
    with pytest.raises(ValueError, match="Unknown value kind"):
        MethodRegistry().register_method('list', 'length', lambda xs: 0)


def test_signature_from_annotations():
    def op_demo(image: PixelBuffer, x: float, label: str | bool, extra: Any, scale: float = 1.0, *rest): pass
    meta = get_signature(op_demo)
    assert meta['arity'] == 5
    assert meta['varargs'] is True
    (_, k0, _), (_, k1, _), (_, k2, _), (_, k3, _), (label, k4, default) = meta['params']
    assert k0 == {'pixelBuffer'} and k1 == {'number'}
    assert k2 == {'string', 'boolean'}
    assert k3 is None
    assert (label, k4, default) == ('scale', {'number'}, 1.0)


def test_unsupported_annotations_fail_early():
    def op_bad(x: list): pass
    with pytest.raises(TypeError):
        make_native(op_bad, 'bad')


def test_make_native_checks_argument_kinds():
    fn = make_native(lambda x: x, 'identity')
    assert fn.call(["anything"]) == "anything"

    def op_half(x: float) -> float: return x / 2
    half = make_native(op_half, 'half')
    assert half.call([3.0]) == 1.5
    with pytest.raises(NativeArgumentError, match="`half` expects argument `x` to be number, got string"):
        half.call(["3"])
    with pytest.raises(NativeArgumentError, match="got null"):
        half.call([])


def test_make_native_method_checks_receiver():
    def op_twice(s: str) -> str: return s + s
    twice = make_native(op_twice, 'twice', method=True)
    assert twice.call([], "ab") == "abab"
    with pytest.raises(NativeArgumentError, match="expects receiver to be string, got number"):
        twice.call([], 1.0)


def test_make_native_defaults_and_none_result():
    calls = []
    def op_record(a: float, b: float = 9.0) -> None: calls.append((a, b))
    record = make_native(op_record, 'record')
    assert record.call([1.0]) is null
    assert record.call([1.0, 2.0]) is null
    assert calls == [(1.0, 9.0), (1.0, 2.0)]


def test_function_annotation_accepts_any_callable_value():
    def op_apply(fn: Function) -> Any: return fn.call([])
    apply = make_native(op_apply, 'apply')
    assert apply.call([NativeFunction(lambda args, receiver: 5.0)]) == 5.0


def test_number_operators():
    assert operators.op_sub(5.0, 2.0) == 3.0
    assert operators.op_lte(2.0, 2.0) is True
    assert operators.op_equal(2.0, 3.0) is False
    assert list(operators.op_range_exclusive(1.0, 3.0)) == [1.0, 2.0]


def test_division_by_zero():
    assert operators.op_div(1.0, 0.0) == math.inf
    assert operators.op_div(-1.0, 0.0) == -math.inf
    assert operators.op_div(1.0, -0.0) == -math.inf
    assert math.isnan(operators.op_div(0.0, 0.0))


def test_string_concatenation():
    assert operators.op_concat("a", "b") == "ab"
    assert operators.op_concat("n", 4.0) == "n4"
    assert operators.op_concat("b", False) == "bfalse"
    assert operators.op_concat("f", NativeFunction(lambda args, receiver: null)) == "f"


def test_print_formats_each_value(capsys):
    env = create_fresh_runtime_environment()
    env.get('print').call([1.0, "two", True, null, 2.5])
    assert capsys.readouterr().out == "1 two true null 2.5\n"


def test_while_requires_functions():
    env = create_fresh_runtime_environment()
    with pytest.raises(NativeArgumentError, match="`while` expects argument `condition` to be function"):
        env.get('while').call([True, NativeFunction(lambda args, receiver: null)])
