"""Generate Kotlin navigator extensions from an extras manifest."""
from __future__ import annotations

import argparse
from pathlib import Path

from navgen.config import GeneratorSettings
from navgen.generator import ExtensionGenerator
from navgen.manifest import load_manifest
from navgen.resolver import BUILTIN_TYPES, load_type_mapping
from navgen.writer import KotlinFileWriter


def add_generation_arguments(parser: argparse.ArgumentParser) -> None:
    """Arguments shared by `generate` and `watch`."""
    parser.add_argument("manifest", help="JSON manifest describing classes and their extras.")
    parser.add_argument(
        "--out",
        dest="out",
        default=None,
        help="Generated-sources root (default: KAPT_KOTLIN_GENERATED with kaptKotlin -> kapt).",
    )
    parser.add_argument(
        "--type-map",
        dest="type_map",
        default=None,
        help="Descriptor -> Kotlin type overrides file (default: NAVGEN_TYPE_MAP or ./type_mappings.yaml).",
    )
    parser.add_argument(
        "--navigator-class",
        dest="navigator_class",
        default=None,
        help="Fully qualified dispatcher class the registration function extends.",
    )


def register_generate_command(subparsers: argparse._SubParsersAction) -> None:
    """Register the `generate` subcommand and its CLI arguments."""
    parser = subparsers.add_parser("generate", help="Generate Kotlin extension files once.")
    add_generation_arguments(parser)


def build_generator(args: argparse.Namespace, settings: GeneratorSettings) -> ExtensionGenerator:
    """Combine CLI flags with settings; flags win."""
    output_dir = args.out if args.out else settings.output_dir
    type_map_path = Path(args.type_map) if args.type_map else settings.type_map_path
    navigator_class = args.navigator_class or settings.navigator_class

    return ExtensionGenerator(
        output_dir=output_dir,
        base_types={**BUILTIN_TYPES, **load_type_mapping(type_map_path)},
        navigator_class=navigator_class,
    )


def run_generation(args: argparse.Namespace, settings: GeneratorSettings | None = None) -> list[Path]:
    """Load the manifest, generate every unit and write it. Returns the written paths."""
    settings = settings if settings is not None else GeneratorSettings()
    extension_generator = build_generator(args, settings)

    if not extension_generator.is_enabled:
        print("[navgen] no output directory configured (KAPT_KOTLIN_GENERATED / --out); nothing to do", flush=True)
        return []

    manifest = load_manifest(Path(args.manifest))
    extension_generator.capabilities = manifest.capabilities

    writer = KotlinFileWriter(extension_generator.output_dir)
    units = extension_generator.generate_and_write(manifest.class_descriptors, writer)

    print(f"[navgen] {len(units)} extension file(s) -> {writer.output_dir}", flush=True)
    for written_path in writer.written_paths:
        print(f"  - {written_path}", flush=True)
    return writer.written_paths


def run_generate_command(args: argparse.Namespace) -> int:
    """Run a single generation pass."""
    run_generation(args)
    return 0
