## typescala — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

from typing import Any, Callable

from .types import Kind, Function
from .nodes import Program
from .parser import parse
from .registry import make_native
from .builtins import create_fresh_runtime_environment
from .interpreter import evaluate
from .environment import Environment


class Runtime:
    """Minimal runtime facade focused on embedding and extension.

    A runtime owns one global environment, so successive `run` calls see each other's
    bindings; construct a new `Runtime` (or pass a fresh environment) for isolated runs.
    """

    def __init__(self, environment: Environment | None = None):
        self.environment = environment if environment is not None else create_fresh_runtime_environment()

    # Execution ───────────────────────────────────────────────────────────────────────────────
    def parse(self, source: str, filename: str | None = None) -> Program:
        return parse(source, filename=filename)

    def evaluate(self, program: Program, verbosity: int = 0, stats: dict | None = None,
                 source: str | None = None) -> Any:
        return evaluate(program, self.environment, verbosity=verbosity, stats=stats, source=source)

    def run(self, source: str, filename: str | None = None, verbosity: int = 0, stats: dict | None = None) -> Any:
        program = self.parse(source, filename=filename)
        return self.evaluate(program, verbosity=verbosity, stats=stats, source=source)

    # Registration ────────────────────────────────────────────────────────────────────────────
    def register_function(self, name: str, fn: Function | Callable[..., Any]) -> None:
        self.environment.define(name, fn if isinstance(fn, Function) else make_native(fn, name))

    def register_method(self, kind: Kind, name: str, fn: Function | Callable[..., Any]) -> None:
        self.environment.registry.register_method(kind, name, fn)

    # Introspection ───────────────────────────────────────────────────────────────────────────
    def get(self, name: str) -> Any:
        return self.environment.get(name)

    def list_methods(self, kind: Kind) -> list[str]:
        return self.environment.registry.method_names(kind)

    def call(self, fn: Function, *args) -> Any:
        return fn.call(list(args))
