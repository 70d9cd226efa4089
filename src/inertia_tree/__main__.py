"""Command line entry point: print the aggregate of an assembly document."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

import numpy as np

from . import __version__
from .core.diagnostics import inertia_about_point, principal_moments, summary
from .errors import InertiaTreeError
from .io import assembly_to_system, load_assembly
from .logging_config import setup_logging


logger = logging.getLogger("inertia_tree.cli")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="inertia_tree")
    parser.add_argument("assembly", type=Path, nargs="?", default=None)
    parser.add_argument(
        "--about",
        type=float,
        nargs=3,
        metavar=("X", "Y", "Z"),
        default=None,
        help="also print the inertia tensor about this point",
    )
    parser.add_argument("--tree", action="store_true", help="print the system tree")
    parser.add_argument("-v", "--verbose", action="store_true")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)
    setup_logging(logging.DEBUG if args.verbose else logging.WARNING)

    if args.assembly is None:
        print(f"inertia_tree v{__version__}")
        return 0

    try:
        system = assembly_to_system(load_assembly(args.assembly))
        agg = system.aggregate()
        moments, _ = principal_moments(system)
        about = None
        if args.about is not None:
            about = inertia_about_point(system, np.asarray(args.about))
    except (InertiaTreeError, OSError) as exc:
        logger.debug("assembly %s rejected", args.assembly, exc_info=True)
        print(f"error: {exc}", file=sys.stderr)
        return 2

    with np.printoptions(precision=6, suppress=True):
        if args.tree:
            print(summary(system))
        print("total mass:", agg.mass)
        print("center of mass:", agg.center)
        print("inertia about center of mass:")
        print(agg.inertia)
        print("principal moments:", moments)
        if about is not None:
            print(f"inertia about {args.about}:")
            print(about)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
