## typescala — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

from typing import Any, Callable, Literal
from dataclasses import dataclass, field


Kind = Literal["number", "string", "boolean", "null", "function", "iterator", "pixelBuffer"]
KINDS: tuple[Kind, ...] = ("number", "string", "boolean", "null", "function", "iterator", "pixelBuffer")


class Null:
    __slots__ = ()
    _singleton = None

    def __new__(cls):
        # Only one instance is ever created, the module-level `null` just below.
        if cls._singleton is None:
            cls._singleton = super().__new__(cls)
            return cls._singleton
        raise ValueError("Use the canonical `null` instance.")

    def __repr__(self):
        return "null"

    def __bool__(self):
        return False

# All null checks must be done by identity with this.
null = Null()


class Function:
    """Callable language value.  `receiver` is the left operand for operator and method calls."""
    name: str | None = None

    def call(self, args: list, receiver: Any = None) -> Any:
        raise NotImplementedError

    def __repr__(self):
        return f"<function {self.name}>" if self.name else "<function>"


class NativeFunction(Function):
    def __init__(self, implementation: Callable[[list, Any], Any], name: str | None = None, meta: dict | None = None):
        self.implementation = implementation
        self.name = name
        self.meta = meta or {}

    def call(self, args: list, receiver: Any = None) -> Any:
        return self.implementation(args, receiver)


class BoundMethod(Function):
    """A method looked up on a value, remembering that value as its receiver."""

    def __init__(self, method: Function, receiver: Any):
        self.method = method
        self.receiver = receiver
        self.name = method.name

    def call(self, args: list, receiver: Any = None) -> Any:
        return self.method.call(args, self.receiver)


@dataclass(frozen=True)
class Step:
    done: bool
    value: Any = null

DONE = Step(True)


class Iterator:
    """Opaque iterator value exposing a single `next()` capability."""

    def __init__(self, produce: Callable[[], Step], name: str = "iterator"):
        self.produce = produce
        self.name = name

    def next(self) -> Step:
        return self.produce()

    def __iter__(self):
        while not (step := self.produce()).done:
            yield step.value

    def __repr__(self):
        return f"<{self.name}>"


def make_range(start: float, end: float, inclusive: bool) -> Iterator:
    """Count from `start` towards `end` by ±1, stopping at `end` (exclusive) or just past it."""
    delta = 1.0 if start <= end else -1.0
    current = start

    def produce() -> Step:
        nonlocal current
        if delta > 0:
            finished = current > end if inclusive else current >= end
        else:
            finished = current < end if inclusive else current <= end
        if finished: return DONE
        value, current = current, current + delta
        return Step(False, value)

    return Iterator(produce, name="range")


@dataclass(eq=False)
class PixelBuffer:
    """Fixed-size RGBA grid, row-major, four bytes per pixel."""
    width: int
    height: int
    pixels: bytearray = field(repr=False)

    @classmethod
    def create(cls, width: int, height: int) -> "PixelBuffer":
        return cls(width, height, bytearray(bytes((0, 0, 0, 255)) * (width * height)))

    def offset(self, x: int, y: int) -> int:
        return (y * self.width + x) * 4

    def pixel(self, x: int, y: int) -> tuple[int, int, int, int]:
        i = self.offset(x, y)
        return tuple(self.pixels[i:i+4])

    def __repr__(self):
        return f"<canvas {self.width}x{self.height}>"


# Python classes standing for each value kind, as used in native function annotations.
TYPE_KIND_MAP: dict[Any, Kind] = {
    float: "number", int: "number",
    str: "string",
    bool: "boolean",
    Null: "null",
    Function: "function",
    Iterator: "iterator",
    PixelBuffer: "pixelBuffer",
}


def kind_of(value: Any) -> Kind:
    match value:
        case bool(): return "boolean"
        case int() | float(): return "number"
        case str(): return "string"
        case Null(): return "null"
        case Function(): return "function"
        case Iterator(): return "iterator"
        case PixelBuffer(): return "pixelBuffer"
    raise TypeError(f"Python value of type `{type(value).__name__}` is not a language value.")


def is_truthy(value: Any) -> bool:
    match kind_of(value):
        case "null": return False
        case "boolean": return value
        case "number": return value != 0
        case "string": return len(value) > 0
    return True
