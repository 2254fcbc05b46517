## optmap — CLI integration tests

import os, sys
import json
import subprocess
from pathlib import Path


def run_cli(*cli_args: str | Path, env: dict | None = None, extra_args: list[str] | None = None) -> subprocess.CompletedProcess:
    args = [sys.executable, "-m", "optmap", "--plain"]
    if extra_args:
        args.extend(extra_args)
    args.extend(str(arg) for arg in cli_args)
    merged_env = os.environ.copy()
    if env:
        merged_env.update(env)
    return subprocess.run(args, capture_output=True, text=True, env=merged_env)


def _strip_output_lines(output: str) -> list[str]:
    return [line.rstrip() for line in output.splitlines() if line.strip()]


EXAMPLE_ENTRIES = ("-o", "help", "h", "show help", "-o", "name:", "n", "set name")


def test_cli_parse_prints_options_and_positionals():
    result = run_cli("parse", *EXAMPLE_ENTRIES, "--", "prog", "-h", "--name=bob", "extra")

    assert result.returncode == 0
    assert _strip_output_lines(result.stdout) == ['help  false', 'name  "bob"', '--', 'extra']


def test_cli_parse_json_output():
    result = run_cli("parse", *EXAMPLE_ENTRIES, "--json", "--", "prog", "-h", "--name", "bob", "extra")

    assert result.returncode == 0
    assert json.loads(result.stdout) == {"options": {"help": False, "name": "bob"}, "positional": ["extra"]}


def test_cli_parse_error_shows_banner_and_fails():
    result = run_cli("parse", *EXAMPLE_ENTRIES, "--", "prog", "--name")

    assert result.returncode == 1
    out = result.stdout
    assert "OPTION ERROR." in out
    assert "option --name requires an argument" in out


def test_cli_parse_malformed_key_fails():
    result = run_cli("parse", "-o", "a:b", "", "broken", "--", "prog")

    assert result.returncode == 1
    assert "couldn't understand option map format `a:b`" in result.stdout


def test_cli_parse_verbose_traces_steps():
    result = run_cli("parse", *EXAMPLE_ENTRIES, "--", "prog", "-h", "--name=bob", extra_args=["-v"])

    assert result.returncode == 0
    out = result.stdout
    assert "-h = false" in out
    assert '--name = "bob"' in out


def test_cli_help_renders_table():
    result = run_cli("help", *EXAMPLE_ENTRIES, "-m", "usage: prog [options]")

    assert result.returncode == 0
    assert _strip_output_lines(result.stdout) == [
        "usage: prog [options]",
        "Options:",
        "    -h  --help         show help",
        "    -n  --name=arg     set name",
    ]


def test_cli_spec_file_entries_come_first(tmp_path: Path):
    spec = tmp_path / "options.json"
    spec.write_text(json.dumps({"include[]": ["I", "add path"], "quiet": ["q", "less output"]}), encoding="utf-8")

    result = run_cli("parse", "-s", spec, "-o", "verbose", "v", "more", "--json", "--",
                     "prog", "-I", "a", "-qv", "-I", "b", "file")

    assert result.returncode == 0
    assert json.loads(result.stdout) == {
        "options": {"include": ["a", "b"], "quiet": False, "verbose": False},
        "positional": ["file"],
    }


def test_cli_spec_file_must_be_object(tmp_path: Path):
    spec = tmp_path / "options.json"
    spec.write_text("[1, 2]", encoding="utf-8")

    result = run_cli("help", "-s", spec)

    assert result.returncode == 2
    assert "Invalid value" in result.stdout + result.stderr


def test_cli_parse_leaves_own_options_after_program_name():
    result = run_cli("parse", "-o", "json", "", "as json", "--json", "prog", "--json", "file")

    assert result.returncode == 0
    assert json.loads(result.stdout) == {"options": {"json": False}, "positional": ["file"]}


def test_cli_verbose_from_environment():
    result = run_cli("parse", *EXAMPLE_ENTRIES, "--", "prog", "-h", env={"OPTMAP_VERBOSE": "1"})

    assert result.returncode == 0
    assert "-h = false" in result.stdout


def test_cli_plain_from_environment_strips_colors():
    args = [sys.executable, "-m", "optmap", "-v", "parse", *EXAMPLE_ENTRIES, "--", "prog", "-h", "--name=bob"]
    env = os.environ.copy()
    env["OPTMAP_PLAIN"] = "1"
    result = subprocess.run(args, capture_output=True, text=True, env=env)

    assert result.returncode == 0
    assert "-h = false" in result.stdout
    assert "\033[" not in result.stdout + result.stderr
