import argparse
import json
import logging
import sys
from dataclasses import asdict
from importlib import metadata
from typing import List, Optional

import matplotlib

from load_planner import plan, plan_flags
from load_planner.metrics import summarize
from load_planner.plan_io import plan_to_payload, save_plan

from .data import load_catalog
from .jobs import load_job

logger = logging.getLogger("load_planner_app")


def _get_app_version() -> str:
    try:
        return metadata.version("load-planner")
    except metadata.PackageNotFoundError:
        return "dev"


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="load-planner",
        description="Assign loads from a YAML job file to trailers and containers.",
    )
    ap.add_argument("job", help="YAML job file with loads and the vehicle selection")
    ap.add_argument("--catalog", help="vehicle catalog XML (bundled catalog by default)")
    ap.add_argument("--output", help="write the plan as JSON to this path")
    ap.add_argument("--plot-dir", help="write one floor-plan PNG per vehicle here")
    ap.add_argument(
        "--check",
        action="store_true",
        help="verify plan invariants and exit non-zero on a violation",
    )
    ap.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    ap.add_argument("--version", action="version", version=_get_app_version())
    return ap


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        catalog = load_catalog(args.catalog)
        job = load_job(args.job)
        result = plan(job.loads, catalog, job.trailers, job.containers)
    except (FileNotFoundError, ValueError) as e:
        logger.error("%s", e)
        return 2

    if args.output:
        save_plan(args.output, result)
        logger.info("Wrote %s", args.output)
    else:
        json.dump(plan_to_payload(result), sys.stdout, ensure_ascii=False, indent=2)
        sys.stdout.write("\n")

    if args.plot_dir:
        matplotlib.use("Agg")
        from .render import save_vehicle_figures

        for path in save_vehicle_figures(result, args.plot_dir):
            logger.info("Wrote %s", path)

    logger.info("Summary: %s", asdict(summarize(result)))

    if args.check:
        flags = plan_flags(result, job.loads)
        if flags:
            logger.error("Plan violates invariants: %s", ", ".join(sorted(flags)))
            return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
