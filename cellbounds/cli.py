"""cellbounds — compute boundary lines for a JSON scene of rectangles.

Usage:
    cellbounds scene.json
    cellbounds scene.json --width 400 --height 300 -o lines.json
    cat scene.json | cellbounds - --debug
"""

from __future__ import annotations

import argparse
import logging
import sys

from cellbounds.engine.boundaries import calculate_cell_boundaries, compute_cell_boundaries
from cellbounds.engine.config import ORPHAN_POLICIES, PipelineConfig
from cellbounds.engine.errors import PipelineError
from cellbounds.scene.parser import load_scene
from cellbounds.scene.serializer import dumps, lines_to_dicts, result_to_dict


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Cell boundaries — split a container between rectangles")
    parser.add_argument("input", help="JSON scene file, or - for stdin")
    parser.add_argument("-o", "--output", help="Write JSON here instead of stdout")
    parser.add_argument("--width", type=float, help="Container width (defaults to the bounds)")
    parser.add_argument("--height", type=float, help="Container height (defaults to the bounds)")
    parser.add_argument("--orphans", choices=ORPHAN_POLICIES, default="nearest", help="Unreached grid rect policy")
    parser.add_argument("--debug", action="store_true", help="Emit every intermediate stage")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log pipeline progress to stderr")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )

    try:
        if args.input == "-":
            text = sys.stdin.read()
        else:
            with open(args.input, encoding="utf-8") as f:
                text = f.read()
    except OSError as e:
        print(f"Cannot read {args.input}: {e}", file=sys.stderr)
        return 1

    config = PipelineConfig(orphan_policy=args.orphans)
    try:
        rects = load_scene(text)
        if args.debug:
            data = result_to_dict(compute_cell_boundaries(rects, args.width, args.height, config))
        else:
            data = lines_to_dicts(calculate_cell_boundaries(rects, args.width, args.height, config))
    except ValueError as e:  # malformed JSON, InvalidRectangleError, bad container size
        print(f"Invalid scene: {e}", file=sys.stderr)
        return 1
    except PipelineError as e:
        print(str(e), file=sys.stderr)
        return 2

    out = dumps(data)
    if args.output:
        with open(args.output, "w", encoding="utf-8") as f:
            f.write(out + "\n")
    else:
        print(out)
    return 0


if __name__ == "__main__":
    sys.exit(main())
