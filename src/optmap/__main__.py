## Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘
#
# optmap — Option parsing for small command-line scripts.
#

import sys
import json
from dataclasses import dataclass

import click

from .types import OptionInfoMap, to_plain
from .errors import OptionError
from .options import parse_options, error
from .formatting import write_without_ansi, format_value, format_help


@dataclass(frozen=True)
class CliConfig:
    verbose: int
    plain: bool


def _load_spec_file(path: str) -> OptionInfoMap:
    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as exc:
        raise click.BadParameter(f"Cannot read option map from `{path}`: {exc}") from exc
    if not isinstance(data, dict):
        raise click.BadParameter(f"Expected a JSON object of `key: [short, description]` in `{path}`.")

    optmap: OptionInfoMap = {}
    for key, info in data.items():
        if not (isinstance(info, list) and len(info) == 2 and all(isinstance(i, str) for i in info)):
            raise click.BadParameter(f"Entry `{key}` in `{path}` must be a list of [short, description].")
        optmap[key] = (info[0], info[1])
    return optmap


def _build_optmap(spec_file: str | None, entries: tuple[tuple[str, str, str], ...]) -> OptionInfoMap:
    optmap = _load_spec_file(spec_file) if spec_file else {}
    for key, short, description in entries:
        optmap[key] = (short, description)
    return optmap


_option_entries = click.option('--option', '-o', 'entries', type=(str, str, str), multiple=True,
                               metavar='KEY SHORT DESC', help='Add an option map entry, e.g. `-o name: n "set name"`.')
_spec_file = click.option('--spec-file', '-s', type=click.Path(exists=True, dir_okay=False),
                          help='Load option map entries from a JSON object of `key: [short, description]`.')


@click.group()
@click.option('--verbose', '-v', default=0, count=True, envvar='OPTMAP_VERBOSE', help='Trace each option as it is parsed.')
@click.option('--plain', '-p', is_flag=True, envvar='OPTMAP_PLAIN', help='Strip ANSI color codes and redirect stderr to stdout.')
@click.pass_context
def cli(ctx: click.Context, verbose: int, plain: bool) -> None:
    ctx.ensure_object(dict)
    ctx.obj['config'] = CliConfig(verbose=verbose, plain=plain)

    if plain:
        writer = write_without_ansi(sys.stdout.write)
        sys.stdout.write, sys.stderr.write = writer, writer


@cli.command('parse', context_settings={'ignore_unknown_options': True, 'allow_extra_args': True,
                                         'allow_interspersed_args': False})
@_option_entries
@_spec_file
@click.option('--json', 'as_json', is_flag=True, help='Print the parsed options and positionals as JSON.')
@click.argument('argv', nargs=-1)
@click.pass_context
def parse_command(ctx: click.Context, entries, spec_file: str | None, as_json: bool, argv: tuple[str, ...]) -> None:
    """Parse ARGV, whose first item is the program name, against the option map."""
    config: CliConfig = ctx.obj['config']
    optmap = _build_optmap(spec_file, entries)
    remaining = list(argv)
    options = parse_options(optmap, remaining, verbosity=config.verbose)

    if as_json:
        click.echo(json.dumps({'options': to_plain(options), 'positional': remaining}))
        return

    width = max((len(name) for name in options), default=0)
    for name, value in options.items():
        click.echo(f"\033[97m{name:<{width}}\033[0m  {format_value(value)}")
    click.echo("\033[90m--\033[0m")
    for arg in remaining:
        click.echo(arg)


@cli.command('help')
@_option_entries
@_spec_file
@click.option('--message', '-m', default='', help='Text shown ahead of the options table.')
def help_command(entries, spec_file: str | None, message: str) -> None:
    """Render the help table for the option map."""
    optmap = _build_optmap(spec_file, entries)
    try:
        text = format_help(message, optmap)
    except OptionError as exc:
        error(str(exc))
    click.echo(text, nl=False)


def main(argv: list[str] | None = None) -> None:
    cli.main(args=list(sys.argv[1:] if argv is None else argv), prog_name='optmap')


if __name__ == "__main__":
    main()
