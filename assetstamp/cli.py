import argparse
import logging
import sys

from . import __version__, config
from .build import build
from .errors import BuildError


def setup_logging(log_path=config.LOG_PATH, verbose=False):
    handlers = [logging.StreamHandler(sys.stdout)]
    if log_path:
        handlers.insert(0, logging.FileHandler(log_path, encoding="utf-8"))
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(message)s",
        handlers=handlers,
        force=True,
    )


def parse_args(argv=None):
    p = argparse.ArgumentParser(
        prog="assetstamp",
        description="Minify a static site and stamp local asset references with ?t=<build time>.",
    )
    p.add_argument("--src", default=config.SRC_DIR, help="source tree (default: %(default)s)")
    p.add_argument("--dst", default=config.DIST_DIR, help="output tree, cleared first (default: %(default)s)")
    p.add_argument("--timestamp", type=int, help="use this value instead of the current time")
    p.add_argument("--log-file", default=config.LOG_PATH, help="log file, empty to disable (default: %(default)s)")
    p.add_argument("--report", default=config.REPORT_PATH, help="rewrite report json, empty to disable (default: %(default)s)")
    p.add_argument("--asset-ext", action="append", default=[], metavar="EXT",
                   help="extra suffix stamped inside css url(); repeatable")
    p.add_argument("--no-audit", action="store_true", help="skip the missing-reference check of the output")
    p.add_argument("-v", "--verbose", action="store_true")
    p.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return p.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    setup_logging(args.log_file, args.verbose)
    logging.info("=== build start ===")
    logging.info(f"SRC={args.src}  DST={args.dst}")
    try:
        result = build(
            args.src,
            args.dst,
            timestamp=args.timestamp,
            report_path=args.report or None,
            audit=not args.no_audit,
            extra_asset_ext=args.asset_ext,
        )
    except BuildError as e:
        logging.error(f"[FATAL] {e}")
        return 1
    if not result.ok:
        logging.warning(f"[SKIP] {len(result.skipped)} file(s) left out of {args.dst}")
    logging.info(f"=== build done === t={result.timestamp}")
    return 0
