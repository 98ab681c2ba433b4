from __future__ import annotations

"""Elevation study CLI.

Usage
-----
python -m elevate.cli optimize --deck decks/demo/deck.yaml --out out/result.json
python -m elevate.cli sweep --deck decks/demo/deck.yaml --out out/sweep.csv --step 0.14
python -m elevate.cli benchmark --deck decks/demo/deck.yaml --elevation 0 --samples 100000

© 2026 Afshin Arjhangmehr
"""

import argparse
import json
from pathlib import Path
import sys

from .errors import ConfigurationError, ReferenceDataError
from .logging_setup import get_logger, setup_logging
from .study import ElevationStudy, write_result_json

logger = get_logger(__name__)


def _cmd_optimize(args: argparse.Namespace) -> int:
    study = ElevationStudy.from_path(args.deck)
    result = study.run(with_sweep=not args.no_sweep)
    if args.out:
        print(str(write_result_json(result, Path(args.out))))
    else:
        print(json.dumps(result.to_dict(), indent=2, sort_keys=True))
    return 0


def _cmd_sweep(args: argparse.Namespace) -> int:
    study = ElevationStudy.from_path(args.deck)
    sweep = study.run_sweep(step=args.step)
    path = sweep.write_csv(Path(args.out), names=["elevation_ft"])
    logger.info("sweep minimum at %.3f ft (%.2f USD)", float(sweep.best_decision[0]), sweep.best_value)
    print(str(path))
    return 0


def _cmd_benchmark(args: argparse.Namespace) -> int:
    study = ElevationStudy.from_path(args.deck)
    cmp = study.run_benchmark(elevation_ft=args.elevation, n_samples=args.samples, seed=args.seed)
    print(json.dumps(cmp.to_dict(), indent=2, sort_keys=True))
    return 0


def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser(prog="elevate", add_help=True)
    p.add_argument("--log-level", default="INFO", help="Logging level (DEBUG, INFO, WARNING, ...)")
    sp = p.add_subparsers(dest="cmd", required=True)

    po = sp.add_parser("optimize", help="Optimize the elevation over the deck's ensemble")
    po.add_argument("--deck", required=True, help="Path to run deck (YAML or JSON)")
    po.add_argument("--out", default=None, help="Output result JSON path (stdout if omitted)")
    po.add_argument("--no-sweep", action="store_true", help="Skip the grid validation sweep")
    po.set_defaults(func=_cmd_optimize)

    ps = sp.add_parser("sweep", help="Scan the objective on a uniform elevation grid")
    ps.add_argument("--deck", required=True, help="Path to run deck (YAML or JSON)")
    ps.add_argument("--out", required=True, help="Output CSV path")
    ps.add_argument("--step", type=float, default=None, help="Grid spacing in ft (deck value if omitted)")
    ps.set_defaults(func=_cmd_sweep)

    pb = sp.add_parser("benchmark", help="Compare quadrature and Monte Carlo EAD on one SOW")
    pb.add_argument("--deck", required=True, help="Path to run deck (YAML or JSON)")
    pb.add_argument("--elevation", type=float, default=0.0, help="Elevation in ft")
    pb.add_argument("--samples", type=int, default=None, help="Monte Carlo draws per year")
    pb.add_argument("--seed", type=int, default=0, help="Monte Carlo seed")
    pb.set_defaults(func=_cmd_benchmark)

    ns = p.parse_args(argv)
    setup_logging(ns.log_level)
    try:
        return int(ns.func(ns))
    except (ConfigurationError, ReferenceDataError) as e:
        logger.error("%s: %s", type(e).__name__, e)
        return 2


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
