## kari — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

import re
import sys
from typing import TextIO

from .span import Span
from .types import Expression, List, String


def write_without_ansi(write_fn):
    """Wrapper function that strips ANSI codes before calling the original writer."""
    ansi_re = re.compile(r'\033\[[0-9;]*m')
    return lambda text: write_fn(ansi_re.sub('', text))

def format_item(it: Expression) -> str:
    """Like the textual form used by `print`, but with strings quoted to show where they end."""
    if isinstance(it, List):
        return '[ ' + ''.join(format_item(i) + ' ' for i in it) + ']'
    if isinstance(it, String):
        return '"' + it.value.replace('\\', '\\\\').replace('"', '\\"') + '"'
    return str(it)

def show_stack(stack, width=72, end='\n', file=None):
    stack_str = ' '.join(format_item(s) for s in stack) if len(stack) else '∅'
    if width is not None and len(stack_str) > width:
        stack_str = '… ' + stack_str[-width+2:]
    print(f"{stack_str:>{width}}" if width else stack_str, end=end, file=file)

def show_step(step: int, depth: int, expr: Expression, stack, width=72):
    print(f"\033[90m{step:>3} :\033[0m  ", end='')
    show_stack(stack, width=width, end='')
    print(f" \033[36m <=> \033[0m {'· ' * (depth - 1)}{format_item(expr)}")


def _read_source(span: Span, streams: dict[str, TextIO]) -> list[str] | None:
    if (stream := streams.get(span.stream)) is None or not stream.seekable():
        return None
    stream.seek(0)
    return [line.rstrip('\r') for line in stream.read().split('\n')]

def format_source_lines(span: Span, streams: dict[str, TextIO]) -> str:
    """Show the lines covered by a span, with carets under the characters it points at."""
    header = f"\033[35m  => \033[94m{span.stream}:{span.start.line + 1}:{span.start.column + 1}\033[0m\n"
    if (lines := _read_source(span, streams)) is None:
        return header

    result = [header]
    for number in range(span.start.line, min(span.end.line + 1, len(lines))):
        line = lines[number]
        result.append(f"\033[94m{number + 1:>5} \033[35m|\033[0m \033[1;97m{line}\033[0m\n")
        first = span.start.column if number == span.start.line else 0
        last = span.end.column + 1 if number == span.end.line else len(line)
        if first < last:
            result.append(' ' * (8 + first) + f"\033[1;91m{'^' * (last - first)}\033[0m\n")
    return ''.join(result)

def format_error(exc, streams: dict[str, TextIO]) -> str:
    """Render an error with the source of each span it carries, followed by the call-site
    trace from the outermost call inward, so the last "Called by:" is the nearest caller.
    """
    result = [f"\n\033[1;31mERROR:\033[0m \033[1m{exc}\033[0m\n"]
    for span in exc.spans():
        result.append(format_source_lines(span, streams))
    for span in reversed(exc.stack_trace):
        result.append("\n\033[36mCalled by:\033[0m\n")
        result.append(format_source_lines(span, streams))
    return ''.join(result)

def print_error(exc, streams: dict[str, TextIO], file=None):
    print(format_error(exc, streams), file=file or sys.stderr)
