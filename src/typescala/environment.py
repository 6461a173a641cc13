## typescala — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

from typing import Any

from .errors import UnresolvedNameError


class Environment:
    """One scope of name bindings, chained to the scope it was created in.

    Children hold a live reference to their parent, so closures created in a scope keep it
    alive and observe (and make) later mutations of its bindings.  The method registry is
    set on the global scope and shared by every scope descending from it.
    """

    def __init__(self, parent: "Environment | None" = None, registry=None):
        self.parent = parent
        self.values: dict[str, Any] = {}
        self.registry = registry if registry is not None or parent is None else parent.registry

    def define(self, name: str, value: Any) -> None:
        self.values[name] = value

    def _resolve(self, name: str) -> "Environment":
        env = self
        while env is not None:
            if name in env.values:
                return env
            env = env.parent
        raise UnresolvedNameError(f"Undefined variable `{name}`.")

    def assign(self, name: str, value: Any) -> None:
        self._resolve(name).values[name] = value

    def get(self, name: str) -> Any:
        return self._resolve(name).values[name]

    def __contains__(self, name: str) -> bool:
        try:
            self._resolve(name)
        except UnresolvedNameError:
            return False
        return True

    def child(self) -> "Environment":
        return Environment(self)
