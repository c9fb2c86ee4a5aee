#!/usr/bin/env python3
"""
ChromaForge - Transparent Icon Finalizer
Command line entry point.
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

import structlog

from chromaforge.core import IconFinalizer, IconStyle, tolerance_for_style
from chromaforge.core.mask_color import select_mask_color_hex
from chromaforge.core.styles import foreground_for_style
from chromaforge.instrumentation import setup_logging
from chromaforge.settings import get_settings

logger = structlog.get_logger()

OUTPUT_SUFFIX = "_transparent"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="chromaforge",
        description="Turn mask-color icon renders into transparent PNG assets.",
    )
    parser.add_argument("--log-level", help="Override CHROMAFORGE_LOG_LEVEL")
    sub = parser.add_subparsers(dest="command", required=True)

    finalize = sub.add_parser("finalize", help="Key out the background and pad PNG files")
    finalize.add_argument("inputs", nargs="+", type=Path, help="Rendered PNG files")
    finalize.add_argument("-o", "--output-dir", type=Path, help="Defaults to each input's folder")
    finalize.add_argument("--style", default=IconStyle.FLAT_SINGLE_COLOR.value,
                          help="Icon style label or name (sets the default tolerance)")
    finalize.add_argument("--padding", type=int, help="Transparent margin in pixels")
    finalize.add_argument("--tolerance", type=int, help="Override the style's tolerance")
    finalize.add_argument("--workers", type=int, help="Images processed in parallel")

    mask = sub.add_parser("mask-color", help="Print the mask color to render against")
    mask.add_argument("--style", default=IconStyle.FLAT_SINGLE_COLOR.value)
    mask.add_argument("--color", help="Icon foreground color, e.g. #1a73e8")

    sub.add_parser("styles", help="List icon styles and their tolerances")
    return parser


def output_path(source: Path, output_dir: Optional[Path]) -> Path:
    folder = output_dir if output_dir is not None else source.parent
    return folder / f"{source.stem}{OUTPUT_SUFFIX}.png"


def run_finalize(args) -> int:
    settings = get_settings()
    padding = settings.default_padding if args.padding is None else args.padding
    finalizer = IconFinalizer(args.style, padding=padding, tolerance=args.tolerance)

    images = []
    for path in args.inputs:
        try:
            images.append(path.read_bytes())
        except OSError as e:
            # Unreadable files fail like undecodable ones
            logger.error("cli.read_failed", path=str(path), error=str(e))
            images.append(b"")

    results = finalizer.finalize_batch(images, max_workers=args.workers)

    if args.output_dir is not None:
        args.output_dir.mkdir(parents=True, exist_ok=True)

    written = 0
    claimed = {}
    for path, result in zip(args.inputs, results):
        if not result.ok:
            print(f"[FAILED] {path}: {result.error}")
            continue

        target = output_path(path, args.output_dir)
        if target in claimed:
            print(f"[FAILED] {path}: {target} already written for {claimed[target]}")
            continue
        try:
            target.write_bytes(result.png)
        except OSError as e:
            logger.error("cli.write_failed", path=str(target), error=str(e))
            print(f"[FAILED] {path}: could not write {target}: {e}")
            continue

        claimed[target] = path
        print(f"[OK] {path} -> {target}")
        written += 1

    return 0 if written else 1


def run_mask_color(args) -> int:
    style = IconStyle.parse(args.style)
    print(select_mask_color_hex(foreground_for_style(style, args.color)))
    return 0


def run_styles(args) -> int:
    for style in IconStyle:
        print(f"{style.name:<18} {style.value:<26} tolerance={tolerance_for_style(style)}")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main application entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(level=args.log_level)

    commands = {
        "finalize": run_finalize,
        "mask-color": run_mask_color,
        "styles": run_styles,
    }
    try:
        return commands[args.command](args)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())
