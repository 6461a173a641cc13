## typescala — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

import sys
from typing import Any

from . import nodes as N
from .types import Function, BoundMethod, Iterator, kind_of, is_truthy, null
from .errors import (TypescalaError, NotCallableError, UnknownOperatorError,
                     ForRequiresIteratorError, CallDepthError)
from .environment import Environment


# Each call in a script costs several Python frames, so the default limit only allows ~100 levels.
MAX_RECURSION_LIMIT = 20_000
sys.setrecursionlimit(max(sys.getrecursionlimit(), MAX_RECURSION_LIMIT))


class Closure(Function):
    """User-defined function, evaluated in a child of the scope it was created in."""

    def __init__(self, params: tuple[str, ...], body: N.Block, scope: Environment, evaluator: "Evaluator", name: str | None = None):
        self.params = params
        self.body = body
        self.scope = scope
        self.evaluator = evaluator
        self.name = name

    def call(self, args: list, receiver: Any = None) -> Any:
        scope = self.scope.child()
        if receiver is not None:
            scope.define('self', receiver)
        for i, param in enumerate(self.params):
            scope.define(param, args[i] if i < len(args) else null)
        return self.evaluator.evaluate_block(self.body, scope)


class Evaluator:
    def __init__(self, verbosity: int = 0, source: str | None = None):
        self.verbosity = verbosity
        self.source = source
        self.steps = 0
        self.depth = 0

    def _trace(self, statement: N.Statement) -> None:
        if self.source is not None and statement.span is not None:
            text = self.source[slice(*statement.span)].split('\n', 1)[0]
        else:
            text = type(statement).__name__
        print(f"\033[90m{self.steps:>3} :\033[0m  {'  ' * self.depth}{text}", file=sys.stderr)

    # Statements ──────────────────────────────────────────────────────────────────────────────
    def evaluate_program(self, program: N.Program, env: Environment) -> Any:
        result = null
        for statement in program.statements:
            result = self.execute(statement, env)
        return result

    def evaluate_block(self, block: N.Block, env: Environment) -> Any:
        result = null
        for statement in block.statements:
            result = self.execute(statement, env)
        return result

    def execute(self, statement: N.Statement, env: Environment) -> Any:
        self.steps += 1
        if self.verbosity >= 2 or (self.verbosity == 1 and self.depth == 0):
            self._trace(statement)

        self.depth += 1
        try:
            match statement:
                case N.Let(name, N.Function() as function):
                    value = Closure(function.params, function.body, env, self, name=name)
                    env.define(name, value)
                    return value
                case N.Let(name, expression):
                    value = self.evaluate(expression, env)
                    env.define(name, value)
                    return value
                case N.Assignment(name, expression):
                    value = self.evaluate(expression, env)
                    env.assign(name, value)
                    return value
                case N.For():
                    return self._execute_for(statement, env)
                case N.ExpressionStatement(expression):
                    return self.evaluate(expression, env)
            raise TypeError(f"Unknown statement node `{type(statement).__name__}`.")
        except TypescalaError as exc:
            if exc.span is None: exc.span = statement.span
            raise
        finally:
            self.depth -= 1

    def _execute_for(self, statement: N.For, env: Environment) -> Any:
        iterator = self.evaluate(statement.iterable, env)
        if not isinstance(iterator, Iterator):
            raise ForRequiresIteratorError(f"for expects an iterator iterable, got {kind_of(iterator)}.")

        loop_env = env.child()
        loop_env.define(statement.iterator, null)
        result = null
        while not (step := iterator.next()).done:
            loop_env.assign(statement.iterator, step.value)
            result = self.evaluate_block(statement.body, loop_env.child())
        return result

    # Expressions ─────────────────────────────────────────────────────────────────────────────
    def evaluate(self, expression: N.Expression, env: Environment) -> Any:
        match expression:
            case N.NumberLiteral(value) | N.StringLiteral(value) | N.BooleanLiteral(value):
                return value
            case N.NullLiteral():
                return null
            case N.Identifier(name):
                return env.get(name)
            case N.Function(params, body):
                return Closure(params, body, env, self)
            case N.BlockAsFunction(block):
                return Closure((), block, env, self)
            case N.Block():
                return self.evaluate_block(expression, env.child())
            case N.Call(callee, args):
                function = self.evaluate(callee, env)
                if not isinstance(function, Function):
                    raise NotCallableError(f"Attempted to call a non-function value ({kind_of(function)}).")
                return function.call([self.evaluate(arg, env) for arg in args])
            case N.Member(receiver, name):
                value = self.evaluate(receiver, env)
                return BoundMethod(self._lookup_method(value, name, env), value)
            case N.If(condition, then_branch, else_branch):
                if is_truthy(self.evaluate(condition, env)):
                    return self.evaluate_block(then_branch, env.child())
                if else_branch is not None:
                    return self.evaluate_block(else_branch, env.child())
                return null
            case N.Infix(operator, left, right):
                lhs = self.evaluate(left, env)
                rhs = self.evaluate(right, env)
                return self._lookup_method(lhs, operator, env).call([rhs], lhs)
        raise TypeError(f"Unknown expression node `{type(expression).__name__}`.")

    def _lookup_method(self, value: Any, name: str, env: Environment) -> Function:
        method = env.registry.lookup_method(value, name) if env.registry is not None else None
        if method is None:
            raise UnknownOperatorError(f"Unknown operator `{name}` for {kind_of(value)}.")
        return method


def evaluate(program: N.Program, env: Environment, verbosity: int = 0, stats: dict | None = None,
             source: str | None = None) -> Any:
    evaluator = Evaluator(verbosity=verbosity, source=source)
    try:
        return evaluator.evaluate_program(program, env)
    except RecursionError:
        raise CallDepthError("Maximum call depth exceeded.") from None
    finally:
        if stats is not None:
            stats['steps'] = stats.get('steps', 0) + evaluator.steps
