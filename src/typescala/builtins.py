## typescala — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

from . import natives
from . import operators
from .types import null
from .registry import MethodRegistry, make_native, get_native_name
from .environment import Environment


def load_builtins_registry() -> MethodRegistry:
    registry = MethodRegistry()
    for kind, table in operators.METHODS.items():
        for name, fn in table.items():
            registry.register_method(kind, name, fn)
    return registry


def create_fresh_runtime_environment() -> Environment:
    """Global scope with the constants, native functions and operator registry installed."""
    env = Environment(registry=load_builtins_registry())

    constants = {'true': True, 'false': False, 'null': null}
    for name, value in constants.items():
        env.define(name, value)

    for k in dir(natives):
        if not k.startswith('op_'): continue
        name = get_native_name(k)
        env.define(name, make_native(getattr(natives, k), name))
    return env
