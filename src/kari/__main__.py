## kari — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘
#
# kari — A small concatenative stack language, with type-directed dispatch of its functions.
#

import io
import sys
import time
import traceback
from dataclasses import dataclass

import click

from .errors import KariError, KariIncompleteParse
from .formatting import write_without_ansi, format_item, print_error
from .runtime import Runtime, STDIN


@dataclass(frozen=True)
class RuntimeConfig:
    verbose: int
    stats: bool
    plain: bool
    prelude: bool


class KariRunner:
    def __init__(self, config: RuntimeConfig):
        self.stats_enabled = config.stats
        self.plain = config.plain

        if self.plain:
            writer = write_without_ansi(sys.stdout.write)
            sys.stdout.write, sys.stderr.write = writer, writer

        self.runtime = Runtime(verbosity=config.verbose)
        self.total_stats = {'steps': 0, 'start': time.time()} if self.stats_enabled else None
        self.failure = False

        if config.prelude:
            self._execute(self.runtime.load_prelude)

    def _handle_exception(self, exc: Exception) -> None:
        if isinstance(exc, KariError):
            print_error(exc, self.runtime.streams, file=sys.stderr)
        elif isinstance(exc, RecursionError):
            print('\033[30;43m RUNTIME ERROR. \033[0m Function calls nested too deeply, the host stack is exhausted.', file=sys.stderr)
        else:
            print(f'\033[30;43m RUNTIME ERROR. \033[0m Evaluation failed! (Exception: \033[33m{type(exc).__name__}\033[0m)', file=sys.stderr)
            traceback.print_exc()
        self.failure = True

    def _execute(self, fn, *args) -> bool:
        try:
            fn(*args)
            return True
        except (KariError, Exception) as exc:
            self._handle_exception(exc)
            return False

    def execute(self, stream, name: str) -> bool:
        if self.failure: return False
        return self._execute(self.runtime.run, stream, name, self.total_stats)

    def repl(self) -> None:
        if sys.platform != "win32": import readline

        print('kari - Concatenative stack language REPL; type Ctrl+C to exit.')
        source, index = "", 1

        while True:
            try:
                prompt = "\033[36m<<< \033[0m" if not source.strip() else "\033[36m... \033[0m"
                line = input(prompt)
                if len(line.strip()) == 0: continue
                if line.strip() in ('quit', 'exit'): break
                source += line + "\n"

                try:
                    # Parse the whole input first, so an open list can continue on the next line.
                    program = list(self.runtime.parse(source, filename=f"<REPL_{index}>"))
                except KariIncompleteParse:
                    continue
                except KariError as exc:
                    print_error(exc, self.runtime.streams, file=sys.stderr)
                    source, index = "", index + 1
                    continue

                source, index = "", index + 1
                try:
                    self.runtime.context.evaluate(None, program)
                except KariError as exc:
                    print_error(exc, self.runtime.streams, file=sys.stderr)
                    continue
                if len(self.runtime.stack):
                    print("\033[90m>>>\033[0m", format_item(next(self.runtime.stack.peek())))

            except (KeyboardInterrupt, EOFError):
                print(""); break

    def finalize(self) -> int:
        if self.total_stats:
            elapsed_time = time.time() - self.total_stats['start']
            print(f"\n\033[97m\033[48;5;30m STATISTICS. \033[0m")
            print(f"step\t\033[97m{self.total_stats['steps']:,}\033[0m")
            print(f"time\t\033[97m{elapsed_time:.3f}s\033[0m")
        return 1 if self.failure else 0


@click.command(context_settings={'help_option_names': ['-h', '--help']})
@click.argument('script', type=click.File('r', encoding='utf-8'), required=False)
@click.option('--verbose', '-v', default=0, count=True, help='Trace each evaluation step; twice to include function bodies.')
@click.option('--stats', is_flag=True, help='Display execution statistics (e.g., number of steps).')
@click.option('--plain', '-p', is_flag=True, help='Strip ANSI color codes and redirect stderr to stdout.')
@click.option('--prelude/--no-prelude', default=True, help='Load the prelude before running the program.')
@click.option('--repl', '-r', 'force_repl', is_flag=True, help='Start an interactive session after running the program.')
@click.pass_context
def cli(ctx: click.Context, script, verbose: int, stats: bool, plain: bool, prelude: bool, force_repl: bool) -> None:
    config = RuntimeConfig(verbose=verbose, stats=stats, plain=plain, prelude=prelude)
    runner = KariRunner(config)

    if script is not None:
        # Standard input can't seek, so it's buffered to let diagnostics show the source again.
        name = STDIN if script.name in ('-', STDIN) else script.name
        runner.execute(io.StringIO(script.read()), name)
    elif not sys.stdin.isatty() and not force_repl:
        runner.execute(io.StringIO(sys.stdin.read()), STDIN)

    if force_repl or (script is None and sys.stdin.isatty()):
        runner.repl()
    ctx.exit(runner.finalize())


def main(argv: list[str] | None = None) -> None:
    cli.main(args=argv, prog_name='kari')


if __name__ == "__main__":
    main()
