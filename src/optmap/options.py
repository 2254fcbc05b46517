## Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘
#
# optmap — Option parsing for small command-line scripts.
#
# Fill out an OptionInfoMap and hand it to `parse_options` along with the
# argument list.  It returns an OptionMap of long names to Flag, Scalar or
# Repeated values, and shifts `argv` in place so only positionals remain.
#
#     optmap = {
#         'long-name':   ('l', 'help message'),
#         'with-arg:':   ('a', 'with required argument'),
#         'with-opt::':  ('',  'with optional argument'),
#         'def-opt::12': ('',  'with defaulted argument'),
#         'include[]':   ('I', 'repeatable, each occurrence is kept'),
#         'help':        ('h', 'display help'),
#     }
#     opts = parse_options(optmap, sys.argv)
#     if 'help' in opts:
#         display_help("String that goes ahead of generic help message", optmap)
#

import sys
from typing import Callable, NoReturn

from .types import OptionSpec, OptionTable, OptionInfoMap, OptionMap, OptionValue, Flag, Scalar, Repeated
from .errors import (OptionError, UnrecognizedOption, UnexpectedArgument, EmptyValueAfterEquals,
                     MissingRequiredArgument, MashedArgRequired)
from .grammar import compile_options
from .formatting import format_value


def error(message: str) -> NoReturn:
    print(f'\033[30;43m OPTION ERROR. \033[0m {message}', file=sys.stderr)
    sys.exit(1)


class OptionParser:
    """Consumes option tokens from the front of `argv`, which is shared with the caller."""

    def __init__(self, table: OptionTable, argv: list[str], verbosity: int = 0):
        self.table = table
        self.argv = argv
        self.verbosity = verbosity
        self.result: OptionMap = {}
        self.step = 0

    def run(self) -> OptionMap:
        while self.argv:
            arg = self.argv[0]
            if arg == '--':
                del self.argv[0]
                break
            if arg.startswith('--'):
                self._parse_long(arg)
            elif arg.startswith('-') and len(arg) > 1:
                self._parse_short(arg)
            else:
                break  # Positional argument, presumably.

        if self.verbosity > 0:
            remaining = ' '.join(format_value(Scalar(a)) for a in self.argv) or '∅'
            print(f"\033[90m{self.step:>3} :\033[0m  \033[36m--\033[0m {remaining}", file=sys.stderr)
        return self.result

    def read_argument(self, spec: OptionSpec, option: str) -> OptionValue:
        """Try to read an argument for `spec` from the token after the option itself."""
        assert spec.supports_argument, "precondition"
        if spec.requires_argument:
            if len(self.argv) < 2:
                raise MissingRequiredArgument(option)
            del self.argv[0]
            return Scalar(self.argv[0])

        if len(self.argv) < 2 or self.argv[1].startswith('-'):
            return spec.default_value()
        del self.argv[0]
        return Scalar(self.argv[0])

    def _resolve_value(self, spec: OptionSpec, option: str, value: str | None) -> OptionValue:
        if value is not None:
            if not spec.supports_argument:
                raise UnexpectedArgument(option, value)
            return Scalar(value)
        if spec.supports_argument:
            return self.read_argument(spec, option)
        return Flag()

    def _parse_long(self, arg: str) -> None:
        name, eq, value = arg[2:].partition('=')
        option = f"--{name}"
        if eq and not value:
            raise EmptyValueAfterEquals(option)
        if name not in self.table:
            raise UnrecognizedOption(option)

        spec = self.table[name]
        self._store(spec, option, self._resolve_value(spec, option, value if eq else None))
        del self.argv[0]

    def _parse_short(self, arg: str) -> None:
        shorts, eq, value = arg[1:].partition('=')
        if eq and not value:
            raise EmptyValueAfterEquals(f"-{shorts}")
        if not shorts:
            raise UnrecognizedOption('-')
        if '-' in shorts:
            raise UnrecognizedOption(f"-{shorts}")

        if len(shorts) > 1:
            # Mashed together short flags are only allowed without arguments.
            if eq:
                raise UnexpectedArgument(f"-{shorts}", value)
            for s in shorts:
                if (spec := self.table.by_short(s)) is None:
                    raise UnrecognizedOption(f"-{s}")
                if spec.requires_argument:
                    raise MashedArgRequired(f"-{s}")
                self._store(spec, f"-{s}", spec.default_value())
            del self.argv[0]
            return

        option = f"-{shorts}"
        if (spec := self.table.by_short(shorts)) is None:
            raise UnrecognizedOption(option)
        self._store(spec, option, self._resolve_value(spec, option, value if eq else None))
        del self.argv[0]

    def _store(self, spec: OptionSpec, option: str, value: OptionValue) -> None:
        if spec.is_repeated:
            assert isinstance(value, Scalar)
            self.result.setdefault(spec.long, Repeated()).values.append(value.value)
        else:
            self.result[spec.long] = value

        if self.verbosity > 0:
            print(f"\033[90m{self.step:>3} :\033[0m  {option} = {format_value(value)}", file=sys.stderr)
        self.step += 1


def parse_options_impl(optmap: OptionInfoMap, argv: list[str], *, verbosity: int = 0) -> OptionMap:
    """Parse options from `argv`, whose first element is the program name; raises OptionError."""
    table = compile_options(optmap)
    if argv: del argv[0]
    return OptionParser(table, argv, verbosity=verbosity).run()


def parse_options(optmap: OptionInfoMap, argv: list[str], *,
                  on_error: Callable[[str], object] = error, verbosity: int = 0) -> OptionMap:
    """Like `parse_options_impl`, but any problem is reported through `on_error`, which should not return."""
    try:
        return parse_options_impl(optmap, argv, verbosity=verbosity)
    except OptionError as exc:
        on_error(str(exc))
        raise
