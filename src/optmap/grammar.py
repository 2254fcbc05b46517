## Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

import lark

from .types import OptionKind, OptionSpec, OptionTable, OptionInfoMap
from .errors import MalformedSpecification, DuplicateOption


GRAMMAR = r"""?start: option_key
option_key: NAME suffix?
suffix: REPEAT                   -> repeated
      | OPTIONAL DEFAULT?        -> optional
      | REQUIRED                 -> required

// TOKENS
REPEAT: "[]"
OPTIONAL: "::"
REQUIRED: ":"
NAME: /[^\s:=\[\]\-][^\s:=\[\]]*/
DEFAULT: /.+/s
"""

_KIND_BY_SUFFIX = {
    'repeated': OptionKind.REPEATED,
    'optional': OptionKind.OPTIONAL,
    'required': OptionKind.REQUIRED,
}

_KEY_PARSER: lark.Lark | None = None


def _key_parser() -> lark.Lark:
    global _KEY_PARSER
    if _KEY_PARSER is None:
        # Contextual lexer only offers DEFAULT right after `::`, so it never swallows names.
        _KEY_PARSER = lark.Lark(GRAMMAR, parser="lalr", lexer="contextual")
    return _KEY_PARSER


def parse_option_key(key: str) -> tuple[str, OptionKind, str | None]:
    """Split a key such as `name::12` into its long name, kind and default text."""
    try:
        tree = _key_parser().parse(key)
    except lark.exceptions.UnexpectedInput as exc:
        raise MalformedSpecification(f"couldn't understand option map format `{key}`", key=key) from exc

    name, *rest = tree.children
    if not rest:
        return name.value, OptionKind.FLAG, None

    [suffix] = rest
    default = next((t.value for t in suffix.children if t.type == 'DEFAULT'), None)
    return name.value, _KIND_BY_SUFFIX[suffix.data], default


def _check_short(key: str, short: str) -> None:
    if short == '': return
    if len(short) != 1 or short in ('-', '=') or short.isspace():
        raise MalformedSpecification(f"short name `{short}` for option map key `{key}` must be a single character", key=key)


def compile_options(optmap: OptionInfoMap) -> OptionTable:
    """Build the lookup tables used by the parser; every problem with `optmap` surfaces here."""
    longs: dict[str, OptionSpec] = {}
    short_to_long: dict[str, str] = {}

    for key, info in optmap.items():
        try:
            short, description = info
        except (TypeError, ValueError):
            raise MalformedSpecification(f"option map entry `{key}` must be a (short, description) pair", key=key) from None

        long, kind, default = parse_option_key(key)
        _check_short(key, short)
        if long in longs:
            raise DuplicateOption(f"option --{long} is declared twice, by `{longs[long].key}` and `{key}`", key=key)
        if short and short in short_to_long:
            raise DuplicateOption(f"short name -{short} is used by both --{short_to_long[short]} and --{long}", key=key)

        longs[long] = OptionSpec(long, kind, short=short, description=description, default=default, key=key)
        if short: short_to_long[short] = long

    return OptionTable(longs=longs, short_to_long=short_to_long)
