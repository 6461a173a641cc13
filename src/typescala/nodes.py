## typescala — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘
#
# Abstract syntax tree.  Nodes are frozen once the parser builds them; `span` holds the
# (start, end) source offsets and is ignored by equality so that re-parsed slices compare equal.
#

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Node:
    span: tuple[int, int] | None = field(default=None, kw_only=True, compare=False, repr=False)


## EXPRESSIONS
@dataclass(frozen=True)
class Expression(Node): pass

@dataclass(frozen=True)
class NumberLiteral(Expression):
    value: float

@dataclass(frozen=True)
class StringLiteral(Expression):
    value: str

@dataclass(frozen=True)
class BooleanLiteral(Expression):
    value: bool

@dataclass(frozen=True)
class NullLiteral(Expression): pass

@dataclass(frozen=True)
class Identifier(Expression):
    name: str

@dataclass(frozen=True)
class Block(Expression):
    statements: tuple["Statement", ...]
    as_function: bool = False     # True when parsed as a lambda body or a trailing block.

@dataclass(frozen=True)
class Function(Expression):
    params: tuple[str, ...]
    body: Block

@dataclass(frozen=True)
class BlockAsFunction(Expression):
    """Zero-parameter function wrapping a trailing `{ ... }` block appended to a call."""
    block: Block

@dataclass(frozen=True)
class Call(Expression):
    callee: Expression
    args: tuple[Expression, ...]

@dataclass(frozen=True)
class Member(Expression):
    """`receiver.name`, resolving to a method bound to the receiver."""
    receiver: Expression
    name: str

@dataclass(frozen=True)
class If(Expression):
    condition: Expression
    then_branch: Block
    else_branch: Block | None = None

@dataclass(frozen=True)
class Infix(Expression):
    operator: str
    left: Expression
    right: Expression


## STATEMENTS
@dataclass(frozen=True)
class Statement(Node): pass

@dataclass(frozen=True)
class Let(Statement):
    name: str
    value: Expression

@dataclass(frozen=True)
class Assignment(Statement):
    name: str
    value: Expression

@dataclass(frozen=True)
class For(Statement):
    iterator: str
    iterable: Expression
    body: Block

@dataclass(frozen=True)
class ExpressionStatement(Statement):
    expression: Expression


@dataclass(frozen=True)
class Program(Node):
    statements: tuple[Statement, ...]
