"""Command-line front door for navipage.

Parses flags, runs the optional startup script, discovers files, and then
dispatches into the interactive pager runtime.
"""

from __future__ import annotations

import argparse
import os
import subprocess
import sys
from collections.abc import Mapping, Sequence
from typing import NoReturn

from . import __version__
from .app import run_pager
from .config import ENV_SH, Flags, default_corpus_dir, startup_script
from .diagnostics import DEFAULT_PROGRAM_NAME, warn
from .discovery import FileCollector, collect_files, sort_newest_first
from .state import EXIT_FAILURE

USAGE = """\
navipage - A program to view and organize Omnavi files

Usage: navipage [-dhnrsv] files...
Options:
    -d  Enable debug output.
    -h  Print this help and exit.
    -n  Show line numbers.
    -r  Infinitely recurse in directories.
    -s  Run the NAVIPAGE_SH shell snippet before reading files.
    -v  Print version information and exit.
Environment:
    NAVIPAGE_DIR  Directory to read when no files are given.
    NAVIPAGE_SH   Shell snippet run by -s.
For examples, see README.md or https://github.com/smlavine/navipage.
"""


class _Parser(argparse.ArgumentParser):
    """ArgumentParser that answers bad options with the full usage block."""

    def error(self, message: str) -> NoReturn:
        sys.stderr.write(USAGE)
        self.exit(2, f"{self.prog}: {message}\n")


def program_name_from(argv0: str | None) -> str:
    name = os.path.basename(argv0 or "")
    if not name or name == "__main__.py":
        return DEFAULT_PROGRAM_NAME
    return name


def build_parser(prog: str) -> argparse.ArgumentParser:
    parser = _Parser(prog=prog, add_help=False, usage=argparse.SUPPRESS)
    parser.add_argument("-d", dest="debug", action="store_true")
    parser.add_argument("-h", dest="help", action="store_true")
    parser.add_argument("-n", dest="numbers", action="store_true")
    parser.add_argument("-r", dest="recurse_more", action="store_true")
    parser.add_argument("-s", dest="sh", action="store_true")
    parser.add_argument("-v", dest="version", action="store_true")
    parser.add_argument("paths", nargs="*")
    return parser


def run_startup_script(program_name: str, environ: Mapping[str, str] | None = None) -> int | None:
    """Run ``NAVIPAGE_SH`` through the shell; ``None`` when it is not set."""
    script = startup_script(environ)
    if script is None:
        warn(f"{program_name}: -s given but {ENV_SH} is not set")
        return None
    completed = subprocess.run(script, shell=True, check=False)
    if completed.returncode != 0:
        warn(f"{program_name}: {ENV_SH} exited with status {completed.returncode}")
    return completed.returncode


def resolve_paths(
    positional: Sequence[str],
    flags: Flags,
    program_name: str,
    environ: Mapping[str, str] | None = None,
) -> list[str]:
    """Expand positional paths, or ``NAVIPAGE_DIR`` when none were given."""
    if positional:
        return collect_files(positional, recurse_more=flags.recurse_more, program_name=program_name)
    corpus = default_corpus_dir(environ)
    if corpus is None:
        return []
    collector = FileCollector(recurse_more=True, program_name=program_name)
    collector.add(corpus)
    return sort_newest_first(collector.files)


def main(argv: Sequence[str] | None = None, prog: str | None = None) -> None:
    """Parse CLI arguments and launch the pager over the discovered files.

    ``prog`` names the program in diagnostics. When omitted it comes from
    ``sys.argv[0]``, which is what a console-script launch provides.
    """
    program_name = prog if prog else program_name_from(sys.argv[0] if sys.argv else None)
    args = build_parser(program_name).parse_args(argv)

    if args.help:
        sys.stdout.write(USAGE)
        raise SystemExit(0)
    if args.version:
        sys.stdout.write(f"navipage {__version__}\n")
        raise SystemExit(0)

    flags = Flags(
        debug=args.debug,
        numbers=args.numbers,
        recurse_more=args.recurse_more,
        sh=args.sh,
    )
    if flags.sh:
        run_startup_script(program_name)

    paths = resolve_paths(args.paths, flags, program_name)
    if not paths:
        sys.stdout.write(USAGE)
        raise SystemExit(EXIT_FAILURE)

    raise SystemExit(run_pager(paths, flags, program_name))


if __name__ == "__main__":
    main()
