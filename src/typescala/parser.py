## typescala — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

from . import nodes as N
from .lexer import Token, tokenize
from .errors import TypescalaSyntaxError, TypescalaIncompleteParse


# Identifier tokens that continue an expression as an infix operator.  All share one precedence
# level and associate to the left, so `1 plus 2 times 3` is `(1 plus 2) times 3`.
OPERATORS = frozenset({
    'plus', 'minus', 'times', 'dividedBy',
    'equals', 'lessThan', 'lessThanOrEqual', 'greaterThan', 'greaterThanOrEqual',
    'and', 'or', 'rangeExclusive', 'rangeInclusive',
})


class Cursor:
    """Position over a token list with non-consuming peeks and rewinding."""

    def __init__(self, tokens: list[Token]):
        self.tokens = tokens
        self.position = 0

    def peek(self, offset: int = 0) -> Token:
        return self.tokens[min(self.position + offset, len(self.tokens) - 1)]

    def check(self, kind: str, offset: int = 0) -> bool:
        return self.peek(offset).kind == kind

    def advance(self) -> Token:
        token = self.peek()
        if token.kind != 'eof':
            self.position += 1
        return token

    def match(self, kind: str) -> Token | None:
        return self.advance() if self.check(kind) else None

    def skip_newlines(self) -> None:
        while self.match('newline'): pass

    def mark(self) -> int:
        return self.position

    def reset(self, mark: int) -> None:
        self.position = mark

    @property
    def last_end(self) -> int:
        return self.tokens[self.position - 1].end if self.position > 0 else 0


class Parser:
    def __init__(self, tokens: list[Token], filename: str | None = None):
        self.cursor = Cursor(tokens)
        self.filename = filename

    def error(self, message: str, token: Token | None = None) -> TypescalaSyntaxError:
        token = token or self.cursor.peek()
        error_class = TypescalaIncompleteParse if token.kind == 'eof' else TypescalaSyntaxError
        return error_class(f"{message}, found {token.describe()} at line {token.line}, column {token.column}.",
                           kind=token.kind, token=token.value, position=token.position, end=max(token.end, token.position + 1),
                           line=token.line, column=token.column, filename=self.filename)

    def expect(self, kind: str, message: str) -> Token:
        if (token := self.cursor.match(kind)) is None:
            raise self.error(message)
        return token

    def span(self, start: int) -> tuple[int, int]:
        return (start, self.cursor.last_end)

    # Statements ──────────────────────────────────────────────────────────────────────────────
    def parse_program(self) -> N.Program:
        statements = self.parse_statements(closing='eof')
        return N.Program(tuple(statements), span=(0, self.cursor.peek().end))

    def parse_statements(self, closing: str) -> list[N.Statement]:
        c = self.cursor
        statements = []
        c.skip_newlines()
        while not c.check(closing):
            statements.append(self.parse_statement())
            if not (c.check('newline') or c.check(closing)):
                raise self.error("Expected a newline after statement")
            c.skip_newlines()
        return statements

    def parse_statement(self) -> N.Statement:
        c = self.cursor
        start = c.peek().position

        if c.match('let'):
            name = self.expect('identifier', "Expected a name after `let`").value
            self.expect('assign', f"Expected `=` after `let {name}`")
            value = self.parse_expression()
            return N.Let(name, value, span=self.span(start))

        if c.check('identifier') and c.check('assign', 1):
            name = c.advance().value
            c.advance()
            value = self.parse_expression()
            return N.Assignment(name, value, span=self.span(start))

        if c.match('for'):
            name = self.expect('identifier', "Expected a loop variable after `for`").value
            self.expect('in', f"Expected `in` after `for {name}`")
            iterable = self.parse_expression(block_args=False)
            body = self.parse_block()
            return N.For(name, iterable, body, span=self.span(start))

        expression = self.parse_expression()
        return N.ExpressionStatement(expression, span=expression.span)

    # Expressions ─────────────────────────────────────────────────────────────────────────────
    def parse_expression(self, block_args: bool = True) -> N.Expression:
        c = self.cursor
        start = c.peek().position
        expression = self.parse_call(block_args)
        while (token := c.peek()).kind == 'identifier' and token.value in OPERATORS:
            c.advance()
            right = self.parse_call(block_args)
            expression = N.Infix(token.value, expression, right, span=self.span(start))
        return expression

    def parse_call(self, block_args: bool = True) -> N.Expression:
        c = self.cursor
        start = c.peek().position
        expression = self.parse_primary()

        while True:
            if c.match('lparen'):
                expression = N.Call(expression, self.parse_arguments(), span=self.span(start))
            elif c.match('dot'):
                name = self.expect('identifier', "Expected a method name after `.`").value
                expression = N.Member(expression, name, span=self.span(start))
            elif block_args and c.check('lbrace') and isinstance(expression, N.Call):
                # Trailing block: `name(args) { ... }` passes the block as one more argument.
                block = self.parse_block(as_function=True)
                trailing = N.BlockAsFunction(block, span=block.span)
                expression = N.Call(expression.callee, expression.args + (trailing,), span=self.span(start))
            else:
                return expression

    def parse_arguments(self) -> tuple[N.Expression, ...]:
        c = self.cursor
        args = []
        c.skip_newlines()
        if c.match('rparen'):
            return ()
        while True:
            args.append(self.parse_expression())
            c.skip_newlines()
            if not c.match('comma'):
                break
            c.skip_newlines()
        self.expect('rparen', "Expected `)` to close the argument list")
        return tuple(args)

    def parse_primary(self) -> N.Expression:
        c = self.cursor
        token = c.peek()
        start = token.position

        match token.kind:
            case 'number':
                c.advance()
                return N.NumberLiteral(float(token.value), span=self.span(start))
            case 'string':
                c.advance()
                return N.StringLiteral(token.value, span=self.span(start))
            case 'true' | 'false':
                c.advance()
                return N.BooleanLiteral(token.kind == 'true', span=self.span(start))
            case 'null':
                c.advance()
                return N.NullLiteral(span=self.span(start))
            case 'identifier':
                c.advance()
                return N.Identifier(token.value, span=self.span(start))
            case 'if':
                c.advance()
                return self.parse_if(start)
            case 'lparen':
                if self.is_lambda_signature():
                    return self.parse_lambda(start)
                c.advance()
                c.skip_newlines()
                expression = self.parse_expression()
                c.skip_newlines()
                self.expect('rparen', "Expected `)` after expression")
                return expression
            case 'lbrace':
                return self.parse_block()

        raise self.error("Unexpected token")

    def is_lambda_signature(self) -> bool:
        """Peek past `(` for `name, name, ...` then `)` and `=>`, without consuming anything."""
        c = self.cursor
        offset = 1
        if c.check('identifier', offset):
            offset += 1
            while c.check('comma', offset) and c.check('identifier', offset + 1):
                offset += 2
        return c.check('rparen', offset) and c.check('arrow', offset + 1)

    def parse_lambda(self, start: int) -> N.Function:
        c = self.cursor
        self.expect('lparen', "Expected `(` to start the parameter list")
        params = []
        if not c.check('rparen'):
            params.append(self.expect('identifier', "Expected a parameter name").value)
            while c.match('comma'):
                params.append(self.expect('identifier', "Expected a parameter name").value)
        self.expect('rparen', "Expected `)` after the parameter list")
        self.expect('arrow', "Expected `=>` after the parameter list")
        c.skip_newlines()
        body = self.parse_block(as_function=True) if c.check('lbrace') else self.as_block(self.parse_expression(), as_function=True)
        return N.Function(tuple(params), body, span=self.span(start))

    def parse_if(self, start: int) -> N.If:
        c = self.cursor
        condition = self.parse_expression(block_args=False)
        then_branch = self.parse_branch()

        else_branch = None
        mark = c.mark()
        c.skip_newlines()
        if c.match('else'):
            if (token := c.match('if')) is not None:
                else_branch = self.as_block(self.parse_if(token.position))
            else:
                else_branch = self.parse_branch()
        else:
            c.reset(mark)
        return N.If(condition, then_branch, else_branch, span=self.span(start))

    def parse_branch(self) -> N.Block:
        if self.cursor.check('lbrace'):
            return self.parse_block()
        return self.as_block(self.parse_expression())

    def parse_block(self, as_function: bool = False) -> N.Block:
        start = self.cursor.peek().position
        self.expect('lbrace', "Expected `{` to start a block")
        statements = self.parse_statements(closing='rbrace')
        self.expect('rbrace', "Expected `}` to close the block")
        return N.Block(tuple(statements), as_function, span=self.span(start))

    @staticmethod
    def as_block(expression: N.Expression, as_function: bool = False) -> N.Block:
        statement = N.ExpressionStatement(expression, span=expression.span)
        return N.Block((statement,), as_function, span=expression.span)


def parse(source: str, filename: str | None = None) -> N.Program:
    return Parser(tokenize(source, filename=filename), filename=filename).parse_program()


def format_source_context(source: str, span: tuple[int, int], filename: str | None = None) -> str:
    """Show the lines around `span` with the spanned text highlighted on its first line."""
    start, end = span
    lines = source.splitlines(keepends=True) or ['']
    line = source.count('\n', 0, start) + 1
    column = start - (source.rfind('\n', 0, start) + 1) + 1
    first, last = max(0, line - 3), min(len(lines), line + 1)
    result = [f"\033[97m  File \"{filename or '<input>'}\", line {line}, column {column}\033[0m"]

    for i in range(first, last):
        content = lines[i].rstrip('\n')
        color = '\033[90m'
        if i + 1 == line:
            color = '\033[97m'
            stop = min(len(content), column - 1 + max(end - start, 1))
            content = (content[:column-1] + f"\033[48;5;30m\033[1;97m{content[column-1:stop]}\033[0m" + content[stop:])
        result.append(f"{color}{i+1:>5} |\033[0m {content}")
    return '\n' + '\n'.join(result) + '\n'
