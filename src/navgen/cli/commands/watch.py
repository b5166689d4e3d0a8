"""Regenerate extensions whenever the manifest or type mapping file changes."""
from __future__ import annotations

import argparse
import sys
import time
from pathlib import Path

from watchfiles import DefaultFilter, watch

from navgen.cli.commands.generate import add_generation_arguments, run_generation
from navgen.config import GeneratorSettings


class InputsFilter(DefaultFilter):
    """Only let through changes to the watched input files."""

    def __init__(self, watched_files: list[Path]) -> None:
        super().__init__()
        self.watched_files = {watched_file.resolve().as_posix() for watched_file in watched_files}

    def __call__(self, change, path: str) -> bool:
        return super().__call__(change, path) and Path(path).resolve().as_posix() in self.watched_files


def register_watch_command(subparsers: argparse._SubParsersAction) -> None:
    """Register the `watch` subcommand and its CLI arguments."""
    parser = subparsers.add_parser("watch", help="Generate, then regenerate on manifest changes.")
    add_generation_arguments(parser)
    parser.add_argument("--debounce", type=int, default=300, help="Debounce window in milliseconds.")


def watched_inputs(args: argparse.Namespace, settings: GeneratorSettings) -> list[Path]:
    manifest_path = Path(args.manifest)
    type_map_path = Path(args.type_map) if args.type_map else settings.type_map_path
    return [manifest_path, type_map_path]


def regenerate(args: argparse.Namespace, settings: GeneratorSettings) -> int:
    """One generation pass; failures are reported and the watch keeps running."""
    try:
        run_generation(args, settings)
    except Exception as exc:
        print(f"navgen: generation failed: {exc}", file=sys.stderr, flush=True)
        return 1
    return 0


def run_watch_command(args: argparse.Namespace) -> int:
    """Generate once, then watch the inputs until interrupted."""
    settings = GeneratorSettings()
    input_files = watched_inputs(args, settings)
    watch_dirs = sorted({str(input_file.resolve().parent) for input_file in input_files if input_file.resolve().parent.is_dir()})
    if not watch_dirs:
        print(f"navgen: nothing to watch; missing directory for {args.manifest}", file=sys.stderr)
        return 2

    regenerate(args, settings)

    print("[navgen] watching:", flush=True)
    for input_file in input_files:
        print(f"  - {input_file}", flush=True)

    for changes in watch(*watch_dirs, watch_filter=InputsFilter(input_files), debounce=args.debounce):
        changed = sorted({changed_path for (_change, changed_path) in changes})
        print("\n[navgen] change detected:", flush=True)
        for changed_path in changed:
            print(f"  - {changed_path}", flush=True)

        regenerate(args, settings)
        time.sleep(0.05)

    return 0
