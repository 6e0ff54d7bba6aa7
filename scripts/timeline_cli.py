#!/usr/bin/env python3
"""
Timeline publisher CLI

Usage modes:
- Default run: compile YAML timeline, print or write the generated code
- Validation: check frame order, instance identity, masks and assets
- Stats: summary of the reduced timeline (instances, children, masks, sounds)
- Export: write the declaration tree as GraphML, or shape draw commands as JSON
- Utility: list sample timelines, show version, dry-run compile only
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List

import yaml

from timeline_core import RenderConfig, Renderer, compile_from_dict
from timeline_core.metrics import container_summary, mask_timeline
from timeline_core.model import frames_from_list
from timeline_core.compiler import load_library
from timeline_core.validation import get_validation_summary, validate_all


def parse_args(argv: List[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(
        description="Publish a YAML animation timeline as scene-graph code",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )

    # Utilities / meta
    p.add_argument("--version", action="store_true", help="Print version and exit")
    p.add_argument("-v", "--verbose", action="count", default=0, help="Increase verbosity (-v, -vv)")
    p.add_argument("--list-scenes", action="store_true", help="List bundled sample YAML timelines and exit")

    # Primary input
    p.add_argument("yaml", nargs="?", help="Path to YAML timeline (e.g., scripts/masked_stage.yaml)")

    # Output
    p.add_argument("--dry-run", action="store_true", help="Compile only; print a summary instead of code")
    p.add_argument("--out", type=str, default="", help="Optional output file path")
    p.add_argument("--shapes-out", type=str, default="", help="Write shape draw commands as JSON to this path")

    # Render config overrides
    p.add_argument("--compress", action="store_true", help="Emit short opcode names")
    p.add_argument("--stage-name", type=str, default=None, help="Declared name of the stage container")
    p.add_argument("--strict", action="store_true", help="Refuse to publish timelines with validation errors")

    # Analysis / export
    p.add_argument("--validate", action="store_true", help="Run timeline validation")
    p.add_argument("--stats", action="store_true", help="Print statistics of the reduced timeline")
    p.add_argument("--export-graphml", type=str, default="", help="Export the declaration tree to GraphML at given path")

    return p.parse_args(argv)


def build_config(args: argparse.Namespace, doc: Dict[str, Any]) -> RenderConfig:
    cfg = RenderConfig.from_settings(doc.get("publish"))
    if args.compress:
        cfg.compress = True
    if args.stage_name:
        cfg.stage_name = args.stage_name
    if args.strict:
        cfg.strict_validation = True
    return cfg


def setup_logging(verbosity: int) -> None:
    level = {0: logging.WARNING, 1: logging.INFO}.get(verbosity, logging.DEBUG)
    logging.basicConfig(level=level, format="[%(levelname)s] %(message)s")


def find_sample_scenes() -> List[str]:
    """Sample timelines shipped beside this script."""
    return sorted(str(path) for path in Path(__file__).resolve().parent.glob("*.yaml"))


def _write_or_print(text: str, path: str) -> None:
    if path:
        with open(path, "w", encoding="utf-8") as f:
            f.write(text)
    else:
        print(text)


def main(argv: List[str] | None = None) -> int:
    from timeline_core import __version__ as timeline_version

    args = parse_args(argv)
    setup_logging(args.verbose)

    if args.version:
        print(timeline_version)
        return 0

    if args.list_scenes:
        print(json.dumps(find_sample_scenes(), indent=2))
        return 0

    if not args.yaml:
        print("error: missing YAML path (try --list-scenes)", file=sys.stderr)
        return 2

    with open(args.yaml, "r", encoding="utf-8") as f:
        doc = yaml.safe_load(f) or {}
    cfg = build_config(args, doc)

    if args.validate:
        frames = frames_from_list(doc.get("frames", []))
        results = validate_all(frames, load_library(doc))
        summary = get_validation_summary(results)
        logging.info("Validation issues: %d (errors=%d warnings=%d)", summary["total_issues"], summary["errors"], summary["warnings"])
        print(json.dumps({"summary": summary, "results": results}, indent=2))
        # Non-zero exit on errors
        return 1 if summary["errors"] > 0 else 0

    logging.info("Compiling timeline from %s", args.yaml)
    publication = compile_from_dict(doc, cfg)
    stage = publication.stage

    if args.stats:
        stats = container_summary(stage)
        stats["masks_timeline"] = mask_timeline(stage)
        print(json.dumps(stats, indent=2))
        if args.dry_run:
            return 0

    if args.export_graphml:
        from timeline_core.scene_graph import export_graphml

        logging.info("Exporting GraphML to %s", args.export_graphml)
        export_graphml(stage, args.export_graphml)

    if args.shapes_out:
        logging.info("Writing %d shapes to %s", len(publication.library.shapes), args.shapes_out)
        with open(args.shapes_out, "w", encoding="utf-8") as f:
            json.dump(publication.library.shapes_payload(), f, indent=2)

    if args.dry_run:
        minimal = {
            "instances": len(stage.instances_map),
            "children": len(stage.children),
            "masks": len(stage.masks),
        }
        _write_or_print(json.dumps(minimal, indent=2), args.out)
        return 0

    _write_or_print(publication.render(Renderer(cfg)), args.out)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
