"""
CLI Item Sources

Collect the ordered item list shared by commit/prove:
--item TEXT (repeatable), --lines PATH (one item per line),
--file PATH (repeatable, whole file is one item).
Order: --item values, then --lines, then --file.
"""

from __future__ import annotations

import argparse
from argparse import Namespace
from pathlib import Path


def add_item_arguments(parser: argparse.ArgumentParser) -> None:
    """Register the item-source options on a subcommand parser."""
    parser.add_argument(
        "--item", "-i",
        dest="items",
        action="append",
        default=[],
        help="Text item to commit to (repeatable, order is significant)",
    )
    parser.add_argument(
        "--lines",
        type=str,
        default=None,
        help="Text file whose lines are the items (trailing newline ignored)",
    )
    parser.add_argument(
        "--file", "-f",
        dest="files",
        action="append",
        default=[],
        help="File whose full contents is one item (repeatable)",
    )


def read_lines(path: Path, encoding: str = "utf-8") -> list[bytes]:
    """Read one item per line; line terminators are not part of the item."""
    text = path.read_text(encoding=encoding)
    return [line.encode(encoding) for line in text.splitlines()]


def collect_items(args: Namespace, encoding: str = "utf-8") -> list[bytes]:
    """
    Build the ordered item list from parsed arguments.

    Raises:
        OSError: If a referenced file cannot be read
    """
    items: list[bytes] = [text.encode(encoding) for text in args.items]

    if args.lines:
        items.extend(read_lines(Path(args.lines), encoding=encoding))

    for file_path in args.files:
        items.append(Path(file_path).read_bytes())

    return items


__all__ = ["add_item_arguments", "collect_items", "read_lines"]
