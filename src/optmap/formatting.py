## Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

import re

from .types import OptionKind, OptionSpec, OptionInfoMap, OptionValue, Flag, Scalar, Repeated
from .grammar import compile_options


def write_without_ansi(write_fn):
    """Wrapper function that strips ANSI codes before calling the original writer."""
    ansi_re = re.compile(r'\033\[[0-9;]*m')
    return lambda text: write_fn(ansi_re.sub('', text))

def _format_text(text: str) -> str:
    return '"' + text.replace('"', '\\"') + '"'

def format_value(value: OptionValue) -> str:
    if isinstance(value, Flag): return 'false'
    if isinstance(value, Scalar): return _format_text(value.value)
    if isinstance(value, Repeated): return '[' + ' '.join(_format_text(v) for v in value.values) + ']'
    raise TypeError(f"Unexpected option value {value!r}.")


def _first_column(spec: OptionSpec) -> str:
    match spec.kind:
        case OptionKind.FLAG:
            visible = spec.long
        case OptionKind.REQUIRED:
            visible = f"{spec.long}=arg"
        case OptionKind.OPTIONAL:
            visible = f"{spec.long}[=arg]" if spec.default is None else f"{spec.long}={spec.default}"
        case OptionKind.REPEATED:
            visible = f"{spec.long}=arg..."
    return f"-{spec.short}  --{visible}" if spec.short else f"    --{visible}"

def format_help(message: str, optmap: OptionInfoMap) -> str:
    """Render the options table.  Optional arguments show their default as `=text`, or `[=arg]`
    when there is none; repeatable options show `=arg...`.
    """
    specs = compile_options(optmap).longs.values()
    first_cols = [(_first_column(spec), spec.description) for spec in specs]
    longest_col = max((len(col) for col, _ in first_cols), default=0)

    lines = [message, "Options:", ""]
    for col, description in first_cols:
        pad = ' ' * (longest_col - len(col) + 5)
        lines.append("    " + col + pad + description)
    return '\n'.join(lines) + '\n\n'

def display_help(message: str, optmap: OptionInfoMap, file=None) -> None:
    print(format_help(message, optmap), end='', file=file)
