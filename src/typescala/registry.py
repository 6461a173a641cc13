## typescala — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

import inspect
from types import UnionType
from typing import Any, Callable, Union, get_args, get_origin
from dataclasses import dataclass, field

from .types import Kind, KINDS, TYPE_KIND_MAP, Function, NativeFunction, kind_of, null
from .errors import NativeArgumentError


@dataclass
class MethodRegistry:
    """Per-kind table of operator and method implementations, keyed by name."""
    methods: dict[Kind, dict[str, Function]] = field(default_factory=lambda: {k: {} for k in KINDS})

    def register_method(self, kind: Kind, name: str, fn: Function | Callable[..., Any]) -> None:
        if kind not in self.methods:
            raise ValueError(f"Unknown value kind `{kind}`, expected one of {', '.join(KINDS)}.")
        self.methods[kind][name] = fn if isinstance(fn, Function) else make_native(fn, name, method=True)

    def lookup_method(self, value: Any, name: str) -> Function | None:
        return self.methods[kind_of(value)].get(name)

    def method_names(self, kind: Kind) -> list[str]:
        return sorted(self.methods[kind])


def get_native_name(py_name: str) -> str:
    """Map a Python `op_` function name to its camelCase name in the language."""
    head, *rest = py_name.removeprefix('op_').split('_')
    return head + ''.join(part.capitalize() for part in rest)


def _expected_kinds(annotation) -> frozenset[Kind] | None:
    if annotation is inspect.Parameter.empty or annotation is Any:
        return None
    if isinstance(annotation, UnionType) or get_origin(annotation) is Union:
        kinds = [_expected_kinds(a) for a in get_args(annotation)]
        return None if None in kinds else frozenset().union(*kinds)
    if (kind := TYPE_KIND_MAP.get(annotation)) is None:
        raise TypeError(f"Annotation `{annotation!r}` does not name a language value kind.")
    return frozenset({kind})


def get_signature(fn: Callable[..., Any]) -> dict:
    """Read the parameter annotations of a Python function to decide how arguments are checked.

    Each positional parameter becomes `(label, kinds, default)`: `kinds` is None for `Any` or
    unannotated parameters, and `default` is `inspect.Parameter.empty` when the argument is
    required.  A `*args` parameter collects extra arguments unchecked.
    """
    sig = inspect.signature(fn)
    params = [(p.name, _expected_kinds(p.annotation), p.default) for p in sig.parameters.values()
              if p.kind in (inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD)]
    varargs = any(p.kind == inspect.Parameter.VAR_POSITIONAL for p in sig.parameters.values())
    return {'params': params, 'varargs': varargs, 'arity': len(params)}


def make_native(fn: Callable[..., Any], name: str, *, method: bool = False) -> NativeFunction:
    """Wrap a Python function as a native value.  For methods, the receiver comes first."""
    meta = get_signature(fn)
    params, varargs = meta['params'], meta['varargs']

    def describe(i: int, label: str) -> str:
        return 'receiver' if method and i == 0 else f"argument `{label}`"

    def implementation(args: list, receiver: Any = None) -> Any:
        values = [null if receiver is None else receiver, *args] if method else list(args)
        call_args = []
        for i, (label, kinds, default) in enumerate(params):
            if i >= len(values) and default is not inspect.Parameter.empty:
                call_args.append(default)
                continue
            value = values[i] if i < len(values) else null
            if kinds is not None and (actual := kind_of(value)) not in kinds:
                expected = ' or '.join(sorted(kinds))
                raise NativeArgumentError(f"`{name}` expects {describe(i, label)} to be {expected}, got {actual}.")
            call_args.append(value)
        if varargs:
            call_args.extend(values[len(params):])
        result = fn(*call_args)
        return null if result is None else result

    return NativeFunction(implementation, name, meta)
