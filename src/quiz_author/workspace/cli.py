"""``quiz-author init``: prepare the workspace and its config file."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Mapping, Sequence

from quiz_author import config as config_mod
from quiz_author.core import workspace as workspace_mod


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="quiz-author init",
        description=(
            "Create the quiz-author workspace (config, logs and bank "
            "directories) and write a default quiz_author.toml."
        ),
    )
    parser.add_argument(
        "--path",
        type=Path,
        help=(
            "Override the workspace root (defaults to QUIZ_AUTHOR_DATA_HOME "
            "or ~/.quiz-author)."
        ),
    )
    parser.add_argument(
        "--force",
        action="store_true",
        help="Overwrite an existing quiz_author.toml.",
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Suppress informational output on success.",
    )
    return parser


def _format_created(created: Mapping[str, bool], key: str) -> str:
    return "created" if created.get(key, False) else "exists"


def main(argv: Sequence[str] | None = None) -> int:
    args = _build_parser().parse_args(list(argv) if argv is not None else None)

    try:
        layout = workspace_mod.ensure_workspace(path=args.path)
    except workspace_mod.WorkspaceError as exc:
        sys.stderr.write(str(exc) + "\n")
        return 1

    target = layout.config_dir / config_mod.CONFIG_FILENAME
    config_status = "written"
    try:
        config_mod.write_template(target, overwrite=args.force)
    except config_mod.ConfigError:
        config_status = "exists"

    if args.quiet:
        return 0

    lines = [
        f"Workspace ready at {layout.home} "
        f"({_format_created(layout.created, 'home')})"
    ]
    width = max(len(name) for name in layout.directories)
    for name, directory in layout.items():
        status = _format_created(layout.created, name)
        lines.append(f"  {name.ljust(width)}  {directory} ({status})")
    lines.append(f"Config: {target} ({config_status})")
    sys.stdout.write("\n".join(lines) + "\n")
    return 0


if __name__ == "__main__":  # pragma: no cover - module CLI guard
    raise SystemExit(main())
