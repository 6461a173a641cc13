## typescala — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘


class TypescalaError(Exception):
    def __init__(self, message: str = "", *, span: tuple[int, int] | None = None):
        """Base class for all errors raised by the tokenizer, parser and evaluator."""
        super().__init__(message)
        self.span: tuple[int, int] | None = span

class TypescalaSyntaxError(TypescalaError):
    def __init__(self, message, *, kind=None, token=None, position=None, end=None, line=None, column=None, filename=None):
        if position is not None and end is None:
            end = position + 1
        super().__init__(message, span=None if position is None else (position, end))
        self.kind = kind
        self.token = token
        self.position = position
        self.line = line
        self.column = column
        self.filename = filename

class TypescalaIncompleteParse(TypescalaSyntaxError):
    """Source ended before the construct being parsed was complete."""
    pass


class TypescalaRuntimeError(TypescalaError, RuntimeError):
    pass

class UnresolvedNameError(TypescalaRuntimeError, NameError):
    pass

class NotCallableError(TypescalaRuntimeError, TypeError):
    pass

class UnknownOperatorError(TypescalaRuntimeError, TypeError):
    pass

class NativeArgumentError(TypescalaRuntimeError, TypeError):
    """A native function or method received an argument of the wrong kind."""
    pass

class CanvasDimensionError(TypescalaRuntimeError, ValueError):
    pass

class OutOfBoundsError(TypescalaRuntimeError, IndexError):
    pass

class ForRequiresIteratorError(TypescalaRuntimeError, TypeError):
    pass

class CallDepthError(TypescalaRuntimeError, RecursionError):
    pass
