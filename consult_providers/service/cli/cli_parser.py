"""CLI parser construction for the consultation CLI.

This module wires subparsers but contains no execution logic. Subcommand
handlers live in ``cli_actions``.
"""

from __future__ import annotations

import argparse


def _add_common_flags(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--json", action="store_true", help="Emit machine-readable JSON")
    parser.add_argument(
        "--mock",
        action="store_true",
        default=None,
        help="Serve every provider with the offline mock adapter",
    )


def build_parser() -> argparse.ArgumentParser:
    """Construct the top-level CLI parser and subcommands.

    Returns
    -------
    argparse.ArgumentParser
        Configured parser with ``models`` and ``ask`` subcommands.
    """
    p = argparse.ArgumentParser(
        prog="consult", description="Send one prompt to several AI models at once"
    )
    sub = p.add_subparsers(dest="cmd")
    sub.required = True

    # models
    p_models = sub.add_parser("models", help="List addressable model ids")
    _add_common_flags(p_models)

    # ask
    p_ask = sub.add_parser("ask", help="Consult one or more models with a prompt")
    p_ask.add_argument("prompt")
    p_ask.add_argument(
        "-m",
        "--model",
        dest="models",
        action="append",
        default=[],
        metavar="ID",
        help="Addressable model id, e.g. openai:gpt-4o-mini (repeatable)",
    )
    _add_common_flags(p_ask)
    return p


__all__ = ["build_parser"]
