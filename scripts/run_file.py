#!/usr/bin/env python3
"""Run a source file through the local-execution toolbar action.

Opens the file in a workbench host, activates the LOCAL_EXECUTION toolbar
item exactly as the editor would, and waits for the command sequence.
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path

from workbench import load_settings
from workbench.application import build_workbench
from workbench.local_execution import EXTENSION_ID
from workbench.telemetry.logging_utils import configure_logging

EXIT_UNSUPPORTED = 2


def _write_line(message: str) -> None:
    sys.stdout.write(f"{message}\n")
    sys.stdout.flush()


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Run a file with the local toolchain for its language.",
    )
    parser.add_argument("path", type=Path, help="File to run.")
    parser.add_argument(
        "--language",
        default=None,
        help="Language identifier (defaults to one derived from the file suffix).",
    )
    parser.add_argument(
        "--show-path",
        action="store_true",
        help="Echo the full command line instead of the program name.",
    )
    return parser.parse_args(argv)


async def main(argv: list[str] | None = None) -> int:
    """Run the file and return the last command's exit code."""
    args = parse_args(argv)
    settings = load_settings()
    if args.show_path:
        settings = settings.model_copy(update={"compiler_show_path": True})
    configure_logging(settings)

    workbench = build_workbench(settings=settings)
    workbench.host.open_file(args.path, language_id=args.language)

    snapshot = workbench.host.snapshot()
    visible = [item.key for item in workbench.manager.toolbar.visible_items(snapshot)]
    if (EXTENSION_ID, "default") not in visible:
        _write_line(f"error: no local runner for {args.path}")
        return EXIT_UNSUPPORTED

    await workbench.manager.activate(EXTENSION_ID)
    outcome = await workbench.executor.wait()
    if outcome is None or outcome.exit_code is None:
        return 1
    return outcome.exit_code


if __name__ == "__main__":
    raise SystemExit(asyncio.run(main()))
