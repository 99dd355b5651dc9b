from __future__ import annotations

import argparse
import logging
import sys
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path
from typing import Sequence

from .bounds import drawing_bounds
from .convert import to_dxf
from .document import entity_type_counts, load, paper_size_name
from .drawing import render_drawing
from .layers import INVALID_LAYER_POLICIES, LAYER_COUNT
from .style import THEMES, get_theme

_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
_LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
_ADVISORY_COUNT_KEYS = ("lines", "arcs", "points", "texts", "solids", "blocks")


def _package_version() -> str:
    try:
        return version("jwwsvg")
    except PackageNotFoundError:
        return "0.0.0"


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="jwwsvg",
        description="Inspect parsed JWW drawings and render them to SVG or DXF.",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {_package_version()}",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging.",
    )
    subparsers = parser.add_subparsers(dest="command")

    inspect_parser = subparsers.add_parser("inspect", help="Show basic drawing information.")
    inspect_parser.add_argument("path", help="Path to parsed JWW JSON file.")

    render_parser = subparsers.add_parser("render", help="Render a parsed drawing to SVG.")
    render_parser.add_argument("input_path", help="Path to parsed JWW JSON file.")
    render_parser.add_argument("output_path", help="Path to output SVG file.")
    render_parser.add_argument(
        "--theme",
        choices=tuple(THEMES),
        default="default",
        help="Background and text color theme.",
    )
    render_parser.add_argument(
        "--padding",
        type=float,
        default=20.0,
        help="Padding around the drawing extents in drawing units.",
    )
    render_parser.add_argument(
        "--invalid-layers",
        choices=INVALID_LAYER_POLICIES,
        default="drop",
        help=f"What to do with entities whose layer index is outside 0-{LAYER_COUNT - 1}.",
    )
    render_parser.add_argument(
        "--include-solids",
        action="store_true",
        help="Fold SOLID corners into the drawing extents.",
    )

    convert_parser = subparsers.add_parser(
        "convert",
        help="Convert a parsed drawing to DXF using ezdxf as the writing backend.",
    )
    convert_parser.add_argument("input_path", help="Path to parsed JWW JSON file.")
    convert_parser.add_argument("output_path", help="Path to output DXF file.")
    convert_parser.add_argument(
        "--dxf-version",
        default="R2010",
        help="DXF version for ezdxf.new(), e.g. R2000/R2010/R2018.",
    )
    convert_parser.add_argument(
        "--strict",
        action="store_true",
        help="Fail if any entity cannot be converted.",
    )
    return parser


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format=_LOG_FORMAT,
        datefmt=_LOG_DATE_FORMAT,
    )


def _run_inspect(path: str) -> int:
    file_path = Path(path)
    if not file_path.exists():
        print(f"error: file not found: {file_path}", file=sys.stderr)
        return 2

    try:
        drawing = load(file_path)
    except Exception as exc:
        print(f"error: failed to read drawing: {exc}", file=sys.stderr)
        return 2

    entities = drawing.decoded_entities()
    bounds = drawing_bounds(entities)

    print(f"file: {file_path}")
    if drawing.paper_size is not None:
        print(f"paper_size: {paper_size_name(drawing.paper_size)}")
    print(f"total_entities: {len(entities)}")
    for kind, count in entity_type_counts(entities).items():
        if count > 0:
            print(f"{kind}: {count}")

    layer_counts: dict[int, int] = {}
    for entity in entities:
        layer_counts[entity.base.layer] = layer_counts.get(entity.base.layer, 0) + 1
    for layer_id, count in sorted(layer_counts.items()):
        if 0 <= layer_id < LAYER_COUNT:
            print(f"layer[{layer_id}]: {count}")
        else:
            print(f"layer_out_of_range[{layer_id}]: {count}")

    print(
        f"bounds: {bounds.min_x:g} {bounds.min_y:g} {bounds.max_x:g} {bounds.max_y:g}"
    )

    for key in _ADVISORY_COUNT_KEYS:
        if key in drawing.entity_counts:
            print(f"parser_count[{key}]: {drawing.entity_counts[key]}")
    return 0


def _run_render(
    input_path: str,
    output_path: str,
    *,
    theme: str = "default",
    padding: float = 20.0,
    invalid_layers: str = "drop",
    include_solids: bool = False,
) -> int:
    file_path = Path(input_path)
    if not file_path.exists():
        print(f"error: file not found: {file_path}", file=sys.stderr)
        return 2

    try:
        drawing = load(file_path)
        result = render_drawing(
            drawing.decoded_entities(),
            style=get_theme(theme),
            padding=padding,
            on_invalid_layer=invalid_layers,
            include_solids_in_bounds=include_solids,
        )
        out_path = result.write(output_path)
    except Exception as exc:
        print(f"error: failed to render drawing: {exc}", file=sys.stderr)
        return 2

    print(f"input: {file_path}")
    print(f"output: {out_path}")
    print(f"total_entities: {result.entity_count}")
    for layer_id, count in result.layer_counts().items():
        print(f"layer[{layer_id}]: {count}")
    return 0


def _run_convert(
    input_path: str,
    output_path: str,
    *,
    dxf_version: str = "R2010",
    strict: bool = False,
) -> int:
    file_path = Path(input_path)
    if not file_path.exists():
        print(f"error: file not found: {file_path}", file=sys.stderr)
        return 2

    try:
        result = to_dxf(
            str(file_path),
            output_path,
            dxf_version=dxf_version,
            strict=strict,
        )
    except Exception as exc:
        print(f"error: failed to convert drawing to DXF: {exc}", file=sys.stderr)
        return 2

    print(f"input: {result.source_path}")
    print(f"output: {result.output_path}")
    print(f"total_entities: {result.total_entities}")
    print(f"written_entities: {result.written_entities}")
    print(f"skipped_entities: {result.skipped_entities}")
    for kind, count in result.skipped_by_type.items():
        print(f"skipped[{kind}]: {count}")
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    _configure_logging(bool(args.verbose))

    if args.command == "inspect":
        return _run_inspect(args.path)
    if args.command == "render":
        return _run_render(
            args.input_path,
            args.output_path,
            theme=args.theme,
            padding=float(args.padding),
            invalid_layers=args.invalid_layers,
            include_solids=bool(args.include_solids),
        )
    if args.command == "convert":
        return _run_convert(
            args.input_path,
            args.output_path,
            dxf_version=args.dxf_version,
            strict=bool(args.strict),
        )

    parser.print_help()
    return 0
