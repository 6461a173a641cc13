## typescala — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘
#
# typescala — A small expression-oriented scripting language with closures and pixel buffers.
#

import sys
import time
import traceback
from pathlib import Path
from dataclasses import dataclass

import click

from .types import null
from .errors import TypescalaError, TypescalaSyntaxError, TypescalaIncompleteParse, TypescalaRuntimeError
from .parser import format_source_context
from .formatting import write_without_ansi, format_value
from .demos import DEMO_SCRIPTS, find_demo
from .runtime import Runtime


@dataclass(frozen=True)
class RuntimeConfig:
    verbose: int
    ignore: bool
    stats: bool
    plain: bool


@dataclass
class ExecutionItem:
    source: str
    filename: str


class TypescalaRunner:
    def __init__(self, config: RuntimeConfig):
        self.verbose = config.verbose
        self.ignore = config.ignore
        self.stats_enabled = config.stats
        self.plain = config.plain

        if self.plain:
            writer = write_without_ansi(sys.stdout.write)
            sys.stdout.write, sys.stderr.write = writer, writer

        self.runtime = Runtime()
        self.total_stats = {'steps': 0, 'start': time.time()} if self.stats_enabled else None
        self.failure = False
        self.executed_items = 0

    def _maybe_fatal_error(self, message: str, detail: str, exc_type: str = None, context: str = '', is_repl: bool = False) -> None:
        header = detail if not exc_type else f"{detail} (Exception: \033[33m{exc_type}\033[0m)"
        print(f'\033[30;43m {message} \033[0m {header}\n{context}', file=sys.stderr)
        self.failure = True
        if not is_repl and not self.ignore: sys.exit(1)

    def _handle_exception(self, exc, filename: str, source: str, is_repl: bool = False) -> bool:
        """Report an error; returns True only when the REPL should wait for more input instead."""
        context = format_source_context(source, exc.span, filename) if getattr(exc, 'span', None) else ''
        if isinstance(exc, TypescalaSyntaxError):
            if is_repl and isinstance(exc, TypescalaIncompleteParse): return True
            context += f"\n\033[90m{str(exc)}\033[0m\n"
            self._maybe_fatal_error("SYNTAX ERROR.", f"Parsing `\033[97m{filename}\033[0m` caused a problem!", type(exc).__name__, context, is_repl)
        elif isinstance(exc, TypescalaRuntimeError):
            detail = f"{exc} in `\033[97m{filename}\033[0m`."
            self._maybe_fatal_error("RUNTIME ERROR.", detail, type(exc).__name__, context, is_repl)
        else:
            print(f'\033[30;43m INTERNAL ERROR. \033[0m Evaluating `{filename}` raised an unexpected exception! (Exception: \033[33m{type(exc).__name__}\033[0m)', file=sys.stderr)
            traceback.print_exc()
            self.failure = True
            if not is_repl and not self.ignore: sys.exit(1)
        return False

    def execute_items(self, items: list[ExecutionItem], print_result: bool = False) -> None:
        for item in items:
            self._execute_script(item.source, item.filename, print_result=print_result)

    def _execute_script(self, source: str, filename: str, is_repl: bool = False, print_result: bool = False) -> None:
        try:
            result = self.runtime.run(source, filename=filename, verbosity=self.verbose, stats=self.total_stats)
            if print_result and result is not null:
                print(format_value(result))
        except (TypescalaError, Exception) as exc:
            self._handle_exception(exc, filename, source, is_repl=is_repl)
        else:
            self.executed_items += 1

    def repl(self) -> None:
        if sys.platform != "win32": import readline

        print('typescala - Expression language REPL; type Ctrl+C to exit.')
        source = ""

        while True:
            try:
                prompt = "\033[36m<<< \033[0m" if not source.strip() else "\033[36m... \033[0m"
                line = input(prompt)
                if len(line.strip()) == 0 and not source: continue
                if line.strip() in ('quit', 'exit') and not source: break
                source += line + "\n"

                try:
                    result = self.runtime.run(source, filename='<REPL>', verbosity=self.verbose, stats=self.total_stats)
                    if result is not null: print("\033[90m>>>\033[0m", format_value(result, quoted=True))
                    source = ""
                except (TypescalaError, Exception) as exc:
                    if not self._handle_exception(exc, '<REPL>', source, is_repl=True):
                        source = ""

            except (KeyboardInterrupt, EOFError):
                print(""); break

    def finalize(self) -> int:
        if self.total_stats and self.executed_items > 0:
            elapsed_time = time.time() - self.total_stats['start']
            print(f"\n\033[97m\033[48;5;30m STATISTICS. \033[0m")
            print(f"step\t\033[97m{self.total_stats['steps']:,}\033[0m")
            print(f"time\t\033[97m{elapsed_time:.3f}s\033[0m")
        return 1 if self.failure else 0


@click.group(invoke_without_command=True)
@click.option('--verbose', '-v', default=0, count=True, help='Trace statements as they execute (-vv for nested ones).')
@click.option('--ignore', '-i', is_flag=True, help='Ignore errors and continue executing.')
@click.option('--stats', is_flag=True, help='Display execution statistics (e.g., number of steps).')
@click.option('--plain', '-p', is_flag=True, help='Strip ANSI color codes and redirect stderr to stdout.')
@click.pass_context
def cli(ctx: click.Context, verbose: int, ignore: bool, stats: bool, plain: bool) -> None:
    ctx.ensure_object(dict)
    ctx.obj['config'] = RuntimeConfig(verbose=verbose, ignore=ignore, stats=stats, plain=plain)


@cli.command('run-file')
@click.argument('script', type=click.File('r', encoding='utf-8'))
@click.pass_context
def run_file(ctx: click.Context, script) -> None:
    runner = TypescalaRunner(ctx.obj['config'])
    runner.execute_items([ExecutionItem(script.read(), script.name or '<STDIN>')], print_result=True)
    ctx.exit(runner.finalize())


@cli.command('run-command')
@click.argument('commands', nargs=-1, required=True)
@click.pass_context
def run_command(ctx: click.Context, commands: tuple[str, ...]) -> None:
    runner = TypescalaRunner(ctx.obj['config'])
    items = [ExecutionItem(code, f'<INPUT_{i}>') for i, code in enumerate(commands, start=1)]
    runner.execute_items(items, print_result=True)
    ctx.exit(runner.finalize())


@cli.command('run-repl')
@click.pass_context
def run_repl(ctx: click.Context) -> None:
    runner = TypescalaRunner(ctx.obj['config'])
    runner.repl()
    ctx.exit(runner.finalize())


@cli.command('demo')
@click.argument('name', required=False)
@click.pass_context
def run_demo(ctx: click.Context, name: str | None) -> None:
    if name is None:
        for script in DEMO_SCRIPTS:
            click.echo(f"{script.id:<20} {script.description}")
        return
    if (script := find_demo(name)) is None:
        raise click.BadParameter(f"No demo named `{name}`.", param_hint='NAME')
    runner = TypescalaRunner(ctx.obj['config'])
    runner.execute_items([ExecutionItem(script.code, f'<DEMO:{script.id}>')], print_result=True)
    ctx.exit(runner.finalize())


def main(argv: list[str] | None = None) -> None:
    a = list(sys.argv[1:] if argv is None else argv)
    g = [t for t in a if t in ('--ignore', '--stats', '--plain', '-i', '-p') or (t.startswith('-v') and set(t[1:]) == {'v'})
         or t == '--verbose']
    r = [t for t in a if t not in g]

    if len(r) == 0:
        # No args: if stdin has data, treat as file '-', else REPL
        cmd, tail = ('run-file', ['-']) if not sys.stdin.isatty() else ('run-repl', [])
    elif r[0] in ('-c', '--command'):
        if len(r) < 2: raise SystemExit("Expected code after -c/--command.")
        cmd, tail = 'run-command', ['--', *(t for t in r[1:] if t not in ('-c', '--command'))]
    elif r[0] in ('-r', '--repl'):
        cmd, tail = 'run-repl', []
    elif r[0] in ('demo', '--help') or r[0] in cli.commands:
        cmd, tail = r[0], r[1:]
    elif r[0] == '-' or Path(r[0]).exists():
        cmd, tail = 'run-file', r[:1]
    else:
        raise SystemExit(f"File `{r[0]}` not found.")

    cli.main(args=[*g, cmd, *tail], prog_name='typescala')


if __name__ == "__main__":
    main()
