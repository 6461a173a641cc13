## typescala — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

import pytest

from typescala.runtime import Runtime
from typescala.types import Function, PixelBuffer, null
from typescala.errors import NativeArgumentError, UnresolvedNameError


def test_runtime_keeps_bindings_between_runs():
    rt = Runtime()
    rt.run("let total = 2")
    rt.run("total = total * 21")
    assert rt.get('total') == 42.0


def test_separate_runtimes_are_isolated():
    Runtime().run("let shared = 1")
    with pytest.raises(UnresolvedNameError):
        Runtime().run("shared")


def test_register_function_from_python():
    rt = Runtime()
    def clamp(x: float, low: float, high: float) -> float: return max(low, min(high, x))
    rt.register_function('clamp', clamp)
    assert rt.run("clamp(12, 0, 10)") == 10.0
    with pytest.raises(NativeArgumentError, match="`clamp` expects argument `low`"):
        rt.run('clamp(1, "a", 2)')


def test_register_function_with_varargs():
    rt = Runtime()
    def total(*values) -> float: return float(sum(values))
    rt.register_function('total', total)
    assert rt.run("total(1, 2, 3, 4)") == 10.0
    assert rt.run("total()") == 0.0


def test_register_method_on_a_kind():
    rt = Runtime()
    def length(s: str) -> float: return float(len(s))
    rt.register_method('string', 'length', length)
    assert rt.run('"hello".length()') == 5.0
    assert 'length' in rt.list_methods('string')


def test_register_operator_for_strings():
    rt = Runtime()
    rt.register_method('string', 'times', lambda s, n: s * int(n))
    assert rt.run('"ab" * 3') == "ababab"


def test_script_function_can_be_registered_as_method():
    rt = Runtime()
    rt.run("let describe = () => \"#\" + self")
    rt.register_method('number', 'describe', rt.get('describe'))
    assert rt.run("7.describe()") == "#7"


def test_call_script_function_from_python():
    rt = Runtime()
    add = rt.run("(a, b) => a + b")
    assert isinstance(add, Function)
    assert rt.call(add, 2.0, 3.0) == 5.0
    assert rt.call(rt.get('canvas'), 2.0, 2.0).width == 2


def test_python_functions_receive_language_values():
    rt = Runtime()
    seen = []
    rt.register_function('inspect', lambda value: seen.append(value))
    rt.run('inspect(canvas(1, 1))\ninspect(null)\ninspect("s")')
    assert isinstance(seen[0], PixelBuffer)
    assert seen[1] is null
    assert seen[2] == "s"


def test_stats_accumulate_across_runs():
    rt = Runtime()
    stats = {}
    rt.run("let a = 1", stats=stats)
    rt.run("a = 2\na", stats=stats)
    assert stats['steps'] == 3
