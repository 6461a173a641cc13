## typescala — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

from typing import Any

from .types import Function, Iterator, PixelBuffer, Step, null, kind_of, is_truthy
from .errors import *
from .nodes import Program
from .parser import parse
from .builtins import create_fresh_runtime_environment
from .interpreter import evaluate
from .environment import Environment
from .runtime import Runtime


def run(source: str, environment: Environment | None = None, filename: str | None = None,
        verbosity: int = 0, stats: dict | None = None) -> Any:
    """Parse and evaluate `source`, in a fresh runtime environment unless one is supplied."""
    program = parse(source, filename=filename)
    env = environment if environment is not None else create_fresh_runtime_environment()
    return evaluate(program, env, verbosity=verbosity, stats=stats, source=source)
