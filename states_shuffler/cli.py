"""
Command line entry point.

    states-shuffler parse  path/to/state_regions  -o json/states.json
    states-shuffler generate json/states.json -o modded --seed 7
    states-shuffler roundtrip path/to/00_west_europe.txt
"""

from __future__ import annotations

import argparse
import logging
import random
import sys
from pathlib import Path
from typing import Dict, List, Optional

from states_shuffler.config.settings import AppConfig, MutationConfig
from states_shuffler.formatter import format_state_regions
from states_shuffler.models import Region
from states_shuffler.mutation import shuffle_regions
from states_shuffler.parsers import ParseError, parse_state_file
from states_shuffler.scanner import scan_state_regions
from states_shuffler.storage import RegionStore

LOG = logging.getLogger("states_shuffler")


def _modded_name(group: str) -> str:
    name = group if Path(group).suffix else f"{group}.txt"
    return f"modded_{name}"


def cmd_parse(args: argparse.Namespace, config: AppConfig) -> int:
    src = Path(args.src or config.scan.input_dir)
    dest = Path(args.output or config.output_json)

    if src.is_dir():
        groups = scan_state_regions(
            src,
            skip_files=config.scan.skip_files,
            pattern=config.scan.pattern,
            block_prefix=config.scan.block_prefix,
        )
    else:
        groups = {src.name: parse_state_file(src, block_prefix=config.scan.block_prefix)}
        groups = {name: regions for name, regions in groups.items() if regions}

    if not groups:
        print(f"ERROR: no state regions parsed from {src}", file=sys.stderr)
        return 1

    RegionStore(dest).save(groups)
    total = sum(len(regions) for regions in groups.values())
    print(f"Wrote {total} regions from {len(groups)} files to {dest}")
    return 0


def cmd_generate(args: argparse.Namespace, config: AppConfig) -> int:
    src = Path(args.src or config.output_json)
    out_dir = Path(args.output or config.modded_dir)

    groups: Dict[str, List[Region]] = RegionStore(src).load()

    if not args.no_modify:
        mutation = MutationConfig(
            add_random=args.add_random if args.add_random is not None else config.mutation.add_random,
            new_resource=args.new_resource if args.new_resource is not None else config.mutation.new_resource,
            new_resource_value=(
                args.new_resource_value if args.new_resource_value is not None else config.mutation.new_resource_value
            ),
            seed=args.seed if args.seed is not None else config.mutation.seed,
        )
        rng = random.Random(mutation.seed)
        for regions in groups.values():
            shuffle_regions(regions, mutation, rng=rng)

    out_dir.mkdir(parents=True, exist_ok=True)
    for group, regions in groups.items():
        dest = out_dir / _modded_name(group)
        dest.write_text(format_state_regions(regions), encoding="utf-8")
        LOG.debug("Wrote %d regions to %s", len(regions), dest)

    print(f"Wrote {len(groups)} files to {out_dir}")
    return 0


def cmd_roundtrip(args: argparse.Namespace, config: AppConfig) -> int:
    regions = parse_state_file(args.src, block_prefix=config.scan.block_prefix)
    text = format_state_regions(regions)
    if args.output:
        Path(args.output).write_text(text, encoding="utf-8")
    else:
        sys.stdout.write(text)
    return 0


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="states-shuffler",
        description="Convert Victoria 3 state region files to JSON and back, shuffling capped resources.",
    )
    ap.add_argument("--log-level", default=None, help="Logging level (default: $STATES_SHUFFLER_LOG_LEVEL or INFO)")
    sub = ap.add_subparsers(dest="command", required=True)

    p = sub.add_parser("parse", help="Parse a state_regions directory or file into JSON")
    p.add_argument("src", nargs="?", help="Directory or .txt file (default: $STATES_SHUFFLER_INPUT_DIR)")
    p.add_argument("-o", "--output", help="JSON file to write (default: json/states.json)")
    p.set_defaults(func=cmd_parse)

    g = sub.add_parser("generate", help="Write modded state region files from JSON")
    g.add_argument("src", nargs="?", help="JSON document (default: json/states.json)")
    g.add_argument("-o", "--output", help="Output directory (default: modded)")
    g.add_argument("--add-random", type=int, help="Upper bound of the random bump per capped resource")
    g.add_argument("--new-resource", help="Capped resource to add to every region ('' to skip)")
    g.add_argument("--new-resource-value", type=int, help="Cap for the new resource (0 = random 10-100)")
    g.add_argument("--seed", type=int, help="Random seed for reproducible output")
    g.add_argument("--no-modify", action="store_true", help="Write regions unchanged")
    g.set_defaults(func=cmd_generate)

    r = sub.add_parser("roundtrip", help="Parse a file and print it back in canonical form")
    r.add_argument("src", help="State region .txt file")
    r.add_argument("-o", "--output", help="File to write instead of stdout")
    r.set_defaults(func=cmd_roundtrip)

    return ap


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        config = AppConfig.from_env()
        logging.basicConfig(
            level=(args.log_level or config.log_level).upper(),
            format="%(asctime)s %(levelname)s %(name)s %(message)s",
        )
        return args.func(args, config)
    except (FileNotFoundError, ValueError, ParseError) as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
