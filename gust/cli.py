"""Command-line interface for gust."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Sequence

from .errors import GustError
from .repository import CheckoutMode, Repository, init_project


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser with one sub-command per operation."""
    parser = argparse.ArgumentParser(
        prog="gust", description="A small version control system"
    )
    commands = parser.add_subparsers(dest="command", required=True, metavar="COMMAND")

    commands.add_parser("init", help="create a project in the current directory")

    add = commands.add_parser("add", help="stage changed files")
    add.add_argument("paths", nargs="*", type=Path)

    rm = commands.add_parser("rm", help="unstage files")
    rm.add_argument("paths", nargs="*", type=Path)

    commit = commands.add_parser("commit", help="record the staged changes")
    commit.add_argument("-m", "--message", default="")

    commands.add_parser("status", help="show staged and unstaged changes")
    commands.add_parser("info", help="show the commit history of HEAD")

    branch = commands.add_parser("branch", help="list branches or create one")
    branch.add_argument("branch_name", nargs="?", default=None)

    checkout = commands.add_parser("checkout", help="switch to a branch or commit")
    checkout.add_argument("name")
    checkout.add_argument(
        "-m", "--mode", choices=[mode.value for mode in CheckoutMode], default=None
    )
    return parser


def _run(args: argparse.Namespace) -> None:
    if args.command == "init":
        init_project()
        return

    repo = Repository.open()
    match args.command:
        case "add":
            repo.add(args.paths)
        case "rm":
            repo.remove(args.paths)
        case "commit":
            repo.commit(args.message)
        case "status":
            print(repo.status())
        case "info":
            print(repo.info())
        case "branch":
            if args.branch_name is None:
                listing = repo.branch()
                if listing:
                    print(listing)
            else:
                repo.branch(args.branch_name)
        case "checkout":
            mode = CheckoutMode(args.mode) if args.mode is not None else None
            repo.checkout(args.name, mode)


def main(argv: Sequence[str] | None = None) -> int:
    """Run gust with ``argv`` (default: the process arguments); return the exit status."""
    args = build_parser().parse_args(argv)
    try:
        _run(args)
    except GustError as exc:
        print(exc, file=sys.stderr)
        return 1
    except OSError as exc:
        print(f"I/O error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())