"""CLI entrypoints for luaudoc commands."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .changelog import ChangelogError, run_changelog_update
from .config import ConfigError
from .logging import configure_logging
from .orchestrator import Orchestrator


def _add_verbose_option(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    kwargs: dict[str, object] = {
        "action": "store_true",
        "help": "Increase log verbosity for troubleshooting.",
    }
    if suppress_default:
        kwargs["default"] = argparse.SUPPRESS
    else:
        kwargs["default"] = False
    parser.add_argument(
        "-v",
        "--verbose",
        **kwargs,
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="luaudoc",
        description=(
            "Generate architecture, feature, and API pages from Luau sources. "
            "Without a command, rebuilds the docs for the current directory."
        ),
    )
    _add_verbose_option(parser)
    subparsers = parser.add_subparsers(dest="command")
    parser.set_defaults(command="build", path=".")

    build_parser = subparsers.add_parser(
        "build",
        help="Rebuild the generated documentation tree from scratch.",
    )
    _add_verbose_option(build_parser, suppress_default=True)
    build_parser.add_argument(
        "path",
        nargs="?",
        default=".",
        help="Path to the repository root (defaults to current directory).",
    )

    changelog_parser = subparsers.add_parser(
        "changelog",
        help="Record the merged pull request from GITHUB_EVENT_PATH in the changelog.",
    )
    _add_verbose_option(changelog_parser, suppress_default=True)
    changelog_parser.add_argument(
        "--changelog",
        default="CHANGELOG.md",
        help="Changelog file to update (defaults to CHANGELOG.md).",
    )

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for luaudoc commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(verbose=bool(args.verbose))

    if args.command == "build":
        orchestrator = Orchestrator()
        try:
            outcome = orchestrator.run_build(args.path)
        except (FileNotFoundError, NotADirectoryError) as exc:
            parser.exit(1, f"{exc}\n")
        except ConfigError as exc:
            parser.exit(1, f"luaudoc build failed: {exc}\n")
        except OSError as exc:
            parser.exit(1, f"luaudoc build failed: {exc}\nRun with --verbose for more details.\n")
        print(f"Generated docs in {_relativize(outcome.output_root)}")
    elif args.command == "changelog":
        try:
            message = run_changelog_update(Path(args.changelog))
        except ChangelogError as exc:
            parser.exit(1, f"{exc}\n")
        except OSError as exc:
            parser.exit(1, f"luaudoc changelog failed: {exc}\n")
        print(message)
    else:  # pragma: no cover - argparse enforces choices
        parser.exit(1, "Unknown command\n")


def _relativize(path: Path) -> str:
    try:
        return str(path.relative_to(Path.cwd()))
    except ValueError:
        return str(path)


if __name__ == "__main__":
    main(sys.argv[1:])
