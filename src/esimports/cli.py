#!/usr/bin/env python3
"""
esimports CLI - merge ES module imports into JavaScript files.

Usage:
    esimports named <file> <module> <member>...    Add named imports (Name or Name:Alias)
    esimports default <file> <module> <name>       Add a default import
    esimports namespace <file> <module> <alias>    Add a namespace import
    esimports sort <file>                          Merge and order existing imports
"""
import argparse
import json
import logging
import sys
from dataclasses import replace
from pathlib import Path

from . import __version__
from .modules.core.api import (
    add_default_import,
    add_named_import,
    add_namespace_import,
    sort_imports,
)
from .modules.core.config import QUOTE_STYLES, RenderConfig, load_config
from .modules.core.errors import (
    ImportMergeError,
    ParserUnavailableError,
    SourceSyntaxError,
    error_from_exception,
)

logger = logging.getLogger(__name__)


def _machine_output(result: dict | list, args) -> None:
    """Print result in machine-readable format if --machine flag is set.

    For --machine mode, wraps result in success envelope:
    {"success": true, "result": <result>}

    Otherwise prints with standard indentation.
    """
    if getattr(args, "machine", False):
        wrapped = {"success": True, "result": result}
        print(json.dumps(wrapped, separators=(",", ":"), ensure_ascii=False))
    else:
        print(json.dumps(result, indent=2))


def _parse_member(raw: str) -> str | tuple[str, str]:
    """`Name` imports as itself, `Name:Alias` binds under Alias."""
    if ":" not in raw:
        return raw
    name, alias = raw.split(":", 1)
    return (name.strip(), alias.strip())


def _read_source(file_arg: str) -> str:
    if file_arg == "-":
        return sys.stdin.read()
    return Path(file_arg).read_text(encoding="utf-8")


def _resolve_config(args) -> RenderConfig:
    if args.project:
        project = Path(args.project)
    elif args.file != "-":
        project = Path(args.file).resolve().parent
    else:
        project = Path(".")
    config = load_config(project)

    if args.quote:
        config = replace(config, quote=QUOTE_STYLES[args.quote])
    if args.no_semicolons:
        config = replace(config, semicolons=False)
    return config


def _run(args, source: str) -> str:
    config = _resolve_config(args)

    if args.command == "named":
        members = [_parse_member(m) for m in args.members]
        return add_named_import(source, args.module, *members, config=config)
    if args.command == "default":
        return add_default_import(source, args.module, args.name, config=config)
    if args.command == "namespace":
        return add_namespace_import(source, args.module, args.alias, config=config)
    if args.command == "sort":
        return sort_imports(source, config=config)
    raise ValueError(f"Unknown command: {args.command}")


def _emit(args, source: str, updated: str) -> None:
    changed = updated != source
    written = False
    if args.write and changed:
        Path(args.file).write_text(updated, encoding="utf-8")
        written = True
        logger.info("Updated %s", args.file)

    if getattr(args, "machine", False):
        result = {"file": args.file, "changed": changed, "written": written}
        if not args.write:
            result["source"] = updated
        _machine_output(result, args)
        return

    if args.write:
        if written:
            print(f"Updated {args.file}", file=sys.stderr)
        return
    print(updated, end="" if updated.endswith("\n") else "\n")


def _add_common_args(p: argparse.ArgumentParser) -> None:
    p.add_argument("file", help="JavaScript source file ('-' reads stdin)")
    p.add_argument(
        "-w", "--write",
        action="store_true",
        help="Rewrite the file in place instead of printing the result",
    )
    p.add_argument(
        "--project",
        default=None,
        help="Directory holding .esimports.json (default: the file's directory)",
    )
    p.add_argument(
        "--quote",
        choices=sorted(QUOTE_STYLES),
        default=None,
        help="Quote style for module paths (overrides config)",
    )
    p.add_argument(
        "--no-semicolons",
        action="store_true",
        help="Print import declarations without trailing semicolons",
    )


def main(argv: list[str] | None = None):
    parser = argparse.ArgumentParser(
        prog="esimports",
        description="Merge ES module imports into JavaScript source",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Version: %(prog)s """ + __version__ + """

Examples:
    esimports named src/app.js react Component       # import { Component } from 'react'
    esimports named src/app.js ./foo Foo:Bar -w      # import { Foo as Bar } from './foo'
    esimports default src/app.js react React         # import React from 'react'
    esimports namespace src/app.js ./utils utils     # import * as utils from './utils'
    esimports sort src/app.js --write                # merge + order existing imports

Configuration:
    .esimports.json in the project directory:
        {"quote": "single" | "double", "semicolons": true | false}
    ESIMPORTS_QUOTE overrides the quote style; --quote overrides both.
        """,
    )

    # Global flags
    parser.add_argument(
        "-v", "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "--machine",
        action="store_true",
        help="Machine-readable output (JSON with consistent schema and error codes)",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log merge and rewrite steps to stderr",
    )

    # Shell completion support
    try:
        import shtab
        shtab.add_argument_to(parser, ["--print-completion", "-s"])
    except ImportError:
        pass  # shtab is optional

    subparsers = parser.add_subparsers(dest="command", required=True)

    # esimports named <file> <module> <member>...
    named_p = subparsers.add_parser("named", help="Add named imports")
    _add_common_args(named_p)
    named_p.add_argument("module", help="Module specifier, e.g. ./foo or react")
    named_p.add_argument("members", nargs="+", help="Members as Name or Name:Alias")

    # esimports default <file> <module> <name>
    default_p = subparsers.add_parser("default", help="Add a default import")
    _add_common_args(default_p)
    default_p.add_argument("module", help="Module specifier")
    default_p.add_argument("name", help="Local name for the default export")

    # esimports namespace <file> <module> <alias>
    namespace_p = subparsers.add_parser("namespace", help="Add a namespace import")
    _add_common_args(namespace_p)
    namespace_p.add_argument("module", help="Module specifier")
    namespace_p.add_argument("alias", help="Namespace binding name")

    # esimports sort <file>
    sort_p = subparsers.add_parser("sort", help="Merge and order existing imports")
    _add_common_args(sort_p)

    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    if args.write and args.file == "-":
        parser.error("--write cannot be used when reading from stdin")

    try:
        source = _read_source(args.file)
        updated = _run(args, source)
        _emit(args, source, updated)
    except (
        ImportMergeError,
        SourceSyntaxError,
        ParserUnavailableError,
        FileNotFoundError,
        ValueError,
    ) as e:
        if getattr(args, "machine", False):
            print(json.dumps(error_from_exception(e)))
        else:
            print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
