# src/hl7_codec/cli.py
"""
Command-line interface for hl7_codec.

Subcommands
-----------
generate
    Generate one message of a given type and either:
        - write it to ``hl7-<T>-<E>-<ControlId>.<ext>`` (default), or
        - print it to stdout (with --stdout), or
        - print the structured result as JSON (with --json, after writing;
          cannot be combined with --stdout).

parse
    Tokenize, label and validate a message read from a file, stdin ("-"),
    inline text (--text) or a bucket document (--bucket/--bucket-path), and
    print the result as JSON.

list
    List supported message types and their events (default first).

Exit codes
----------
0  success (including a parse whose result is not valid)
1  handled, expected error (HL7CodecError or KeyboardInterrupt)
2  CLI usage error (argparse or validation failure)
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Dict, List, Optional

import yaml

from . import __version__
from .config import AppConfig, load_config
from .conformance import conformance_issues
from .exceptions import HL7CodecError, InputError
from .fields import FieldOption, option_from_raw
from .generator import generate_message, write_message
from .logging_utils import configure_logging
from .parser import parse_message
from .sources import load_bucket_file, make_bucket_lookup, read_message_source
from .synthetic import SyntheticDataGenerator
from .templates.registry import available_events

# ------------------------------------------------------------------------------
# globals
# ------------------------------------------------------------------------------

LOG = logging.getLogger("hl7_codec")

EXIT_OK = 0
EXIT_ERR = 1
EXIT_CLI = 2

# ------------------------------------------------------------------------------
# Parser construction
# ------------------------------------------------------------------------------


def _build_parser() -> argparse.ArgumentParser:
    """
    Build and return the top-level argparse parser and subcommands.

    Returns
    -------
    argparse.ArgumentParser
        Configured parser with subcommands: generate, parse, list.
    """
    parser = argparse.ArgumentParser(
        prog="hl7-codec",
        description="Generate synthetic HL7 v2 messages and parse ER7 text.",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to YAML config file (overrides defaults).",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Increase verbosity (-v for DEBUG, -vv to include hl7apy).",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"hl7-codec (cli) {__version__}",
    )

    sub = parser.add_subparsers(dest="cmd", required=True)

    # generate
    s1 = sub.add_parser("generate", help="Generate one HL7 v2 message.")
    s1.add_argument("message_type", help="Message type, e.g. ADT or oru.")
    s1.add_argument(
        "--event",
        default=None,
        help="Event type, e.g. A03. Invalid events fall back to the default.",
    )
    s1.add_argument(
        "--field",
        action="append",
        default=[],
        metavar="NAME=VALUE",
        help='Explicit field value (repeatable). Use "random" on gender, race, '
        "maritalStatus or patientClass to force a synthetic value.",
    )
    s1.add_argument(
        "--bucket",
        type=Path,
        default=None,
        help="JSON file with bucket data consulted for fields not given explicitly.",
    )
    s1.add_argument(
        "--bucket-path",
        default="",
        help="Dotted path inside the bucket under which field names are looked up.",
    )
    s1.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Seed for reproducible synthetic values.",
    )
    s1.add_argument(
        "-o",
        "--output-dir",
        type=Path,
        default=None,
        help="Directory to write the message (defaults to config.default_output_dir).",
    )
    s1.add_argument(
        "--stdout",
        action="store_true",
        help="Print the message to stdout instead of writing a file.",
    )
    s1.add_argument(
        "--json",
        action="store_true",
        help="Print the structured generation result as JSON (not with --stdout).",
    )
    s1.add_argument(
        "--pretty",
        action="store_true",
        help="Pretty-print JSON output.",
    )

    # parse
    s2 = sub.add_parser("parse", help="Parse and validate an HL7 v2 message.")
    s2.add_argument(
        "path",
        nargs="?",
        type=Path,
        default=None,
        help='Path to HL7 v2 message file. Use "-" to read from stdin.',
    )
    s2.add_argument("--text", default=None, help="Inline message text.")
    s2.add_argument(
        "--bucket",
        type=Path,
        default=None,
        help="JSON file holding the message inside bucket data.",
    )
    s2.add_argument(
        "--bucket-path",
        default="",
        help="Dotted path to the message inside the bucket (empty = root).",
    )
    s2.add_argument(
        "--conformance",
        action="store_true",
        help="Also report whether hl7apy accepts the message structure.",
    )
    s2.add_argument(
        "--pretty",
        action="store_true",
        help="Pretty-print JSON output.",
    )

    # list
    sub.add_parser("list", help="List supported message types and events.")

    return parser


# ------------------------------------------------------------------------------
# Input helpers
# ------------------------------------------------------------------------------


def _parse_field_args(items: List[str]) -> Dict[str, FieldOption]:
    """
    Turn repeated ``NAME=VALUE`` arguments into field options.

    Raises
    ------
    InputError
        If an item has no ``=`` or an empty name.
    """
    out: Dict[str, FieldOption] = {}
    for item in items:
        name, sep, value = item.partition("=")
        name = name.strip()
        if not sep or not name:
            raise InputError(f"Invalid --field {item!r} (expected NAME=VALUE)")
        out[name] = option_from_raw(name, value)
    return out


def _read_parse_input(
    path: Optional[Path], text: Optional[str], bucket: Optional[Path], bucket_path: str
) -> str:
    """
    Read message text for the parse command from exactly one source.

    Raises
    ------
    HL7CodecError
        On missing, unreadable or empty input.
    """
    if text is not None:
        return read_message_source(text=text)
    if path is not None:
        if str(path) == "-":
            return read_message_source(text=sys.stdin.read())
        return read_message_source(path=path)
    if bucket is not None:
        return read_message_source(
            bucket=load_bucket_file(bucket), bucket_path=bucket_path
        )
    raise InputError("No input given: pass PATH, --text or --bucket")


def _load_cli_config(path: Optional[Path]) -> AppConfig:
    """
    Load the YAML config named on the command line.

    Raises
    ------
    InputError
        If the file is missing, unreadable or not a YAML mapping.
    """
    if path is not None and not path.is_file():
        raise InputError(f"Config file not found: {path}")
    try:
        return load_config(path)
    except (OSError, TypeError, yaml.YAMLError) as e:
        raise InputError(f"Invalid config file {path}: {e}") from e


# ------------------------------------------------------------------------------
# Command handlers
# ------------------------------------------------------------------------------


def _cmd_generate(args: argparse.Namespace, cfg: AppConfig) -> int:
    """
    Generate: render one message and write or print it.

    Returns
    -------
    int
        EXIT_OK on success.

    Raises
    ------
    HL7CodecError
        For unknown types or fields, format violations, unreadable bucket
        files or unwritable output.
    """
    explicit = _parse_field_args(args.field)
    lookup = None
    if args.bucket is not None:
        lookup = make_bucket_lookup(load_bucket_file(args.bucket), args.bucket_path)

    synthetic = SyntheticDataGenerator.from_config(cfg, seed=args.seed)
    result = generate_message(
        args.message_type,
        args.event,
        explicit,
        lookup,
        config=cfg,
        synthetic=synthetic,
    )

    if args.stdout:
        sys.stdout.write(result.message.replace("\r", "\n") + "\n")
    else:
        write_message(result, args.output_dir or cfg.default_output_dir)

    if args.json:
        print(result.model_dump_json(indent=2 if args.pretty else None))
    return EXIT_OK


def _cmd_parse(args: argparse.Namespace) -> int:
    """
    Parse: print the labeled, validated parse result as JSON.

    Returns
    -------
    int
        EXIT_OK whenever a result was produced, valid or not.

    Raises
    ------
    HL7CodecError
        On input acquisition failures or when the text is not an HL7 message.
    """
    content = _read_parse_input(args.path, args.text, args.bucket, args.bucket_path)
    result = parse_message(content)
    if args.conformance:
        result = result.model_copy(
            update={"conformance": conformance_issues(content)}
        )
    if not result.valid:
        LOG.warning("Message is not valid: %s", "; ".join(result.errors))
    print(result.model_dump_json(indent=2 if args.pretty else None))
    return EXIT_OK


def _cmd_list() -> int:
    print("Supported HL7 v2 message types (default event first):")
    for message_type, events in available_events().items():
        print(f"    {message_type}: {', '.join(events)}")
    return EXIT_OK


# ------------------------------------------------------------------------------
# Entrypoint
# ------------------------------------------------------------------------------


def main(argv: Optional[List[str]] = None) -> int:
    """
    CLI entrypoint.

    Parameters
    ----------
    argv : list[str] or None, default None
        Argument list for testing; None uses sys.argv[1:].

    Returns
    -------
    int
        Process exit code (EXIT_OK, EXIT_ERR, or EXIT_CLI).
    """
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(args.verbose, stream=sys.stderr)

    try:
        cfg = _load_cli_config(args.config)
        if args.cmd == "generate":
            if args.stdout and args.output_dir is not None:
                parser.error("--stdout and --output-dir are mutually exclusive")
            if args.stdout and args.json:
                parser.error("--stdout and --json are mutually exclusive")
            return _cmd_generate(args, cfg)
        if args.cmd == "parse":
            return _cmd_parse(args)
        if args.cmd == "list":
            return _cmd_list()
        parser.error("Unknown command")
        return EXIT_CLI

    except HL7CodecError as e:
        LOG.error("%s", e)
        return EXIT_ERR
    except KeyboardInterrupt:
        LOG.error("Interrupted")
        return EXIT_ERR


if __name__ == "__main__":
    raise SystemExit(main())
