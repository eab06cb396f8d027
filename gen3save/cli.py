"""
gen3save - print what is inside a Gen 3 .sav file.

Usage:
  gen3save SAVE [--backup] [--strict] [--dump OUT] [--verbose]
  python -m gen3save SAVE ...
"""

import argparse
import logging
import sys
from pathlib import Path

from .data_types import SaveSlot
from .exceptions import Gen3SaveError
from .gen3_decoder import load_file
from .items import read_bag_items, read_money, read_pc_items

log = logging.getLogger(__name__)

# ── logging setup ─────────────────────────────────────────────────────────────


def _setup_logging(verbose: bool):
    level = logging.DEBUG if verbose else logging.INFO
    fmt = "%(asctime)s [%(levelname)s] %(message)s"
    datefmt = "%H:%M:%S"
    logging.basicConfig(level=level, format=fmt, datefmt=datefmt, stream=sys.stderr)


# ── entry point ───────────────────────────────────────────────────────────────


def build_parser():
    parser = argparse.ArgumentParser(
        prog="gen3save", description="Decode a Gen 3 (GBA) Pokemon save file"
    )
    parser.add_argument("save", help="Path to the .sav file (128 KiB)")
    parser.add_argument("--backup", action="store_true", help="Decode the older copy instead of the newest")
    parser.add_argument("--strict", action="store_true", help="Reject duplicate sections and bad checksums")
    parser.add_argument("--dump", metavar="OUT", help="Write the decoded logical buffer to OUT")
    parser.add_argument("--verbose", action="store_true", help="Log decode steps at DEBUG level")
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)
    _setup_logging(args.verbose)

    slot = SaveSlot.BACKUP if args.backup else SaveSlot.MAIN
    try:
        decoded = load_file(args.save, slot=slot, strict=args.strict)
    except (Gen3SaveError, OSError) as e:
        log.error(f"Could not decode {args.save}: {e}")
        return 1

    money = read_money(decoded)
    print(f"Version:    {decoded.version.game_name}")
    print(f"Copy:       {decoded.copy_name} (save index {decoded.save_index})")
    print(f"Sections:   {' '.join(str(s) for s in decoded.order)}")
    print(f"Money:      {'?' if money is None else money}")
    print(f"PC items:   {len(read_pc_items(decoded))}")
    print(f"Bag items:  {len(read_bag_items(decoded))}")

    if args.dump:
        try:
            Path(args.dump).write_bytes(decoded.data)
        except OSError as e:
            log.error(f"Could not write {args.dump}: {e}")
            return 1
        log.info(f"Wrote {len(decoded.data)} bytes to {args.dump}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
