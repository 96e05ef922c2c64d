"""Headless command-line driver.

Run: python -m tick_city --ticks 50 --build PowerPlant:0:0 --save city.json
"""
from __future__ import annotations

import argparse
import logging
import sys

from tick_city.config import CityConfig
from tick_city.log import LogEntry
from tick_city.session import CitySession
from tick_city.types import CityError, TileType

logger = logging.getLogger(__name__)


def _placement(value: str) -> tuple[TileType, int, int]:
    try:
        name, x, y = value.split(":")
        return TileType.parse(name), int(x), int(y)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(
            f"expected CATEGORY:X:Y, got {value!r} ({exc})"
        ) from None


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(
        prog="tick-city", description="tick-city - headless city simulation"
    )
    p.add_argument("--ticks", type=int, default=20, help="Ticks to run (default: 20)")
    p.add_argument("--width", type=int, default=12, help="Grid width (default: 12)")
    p.add_argument("--height", type=int, default=12, help="Grid height (default: 12)")
    p.add_argument("--tax", type=float, default=0.10,
                   help="Tax rate 0.0-1.0 (default: 0.10)")
    p.add_argument("--events", type=float, default=0.05,
                   help="Per-tick event chance (default: 0.05)")
    p.add_argument("--seed", type=int, default=None, help="Random seed")
    p.add_argument("--build", type=_placement, action="append", default=[],
                   metavar="CATEGORY:X:Y", help="Build before running (repeatable)")
    p.add_argument("--load", metavar="FILE", default=None,
                   help="Start from a .json or .xml save")
    p.add_argument("--save", metavar="FILE", default=None,
                   help="Write a .json or .xml save when done")
    p.add_argument("--quiet", action="store_true", help="Only print the final status")
    return p.parse_args(argv)


def status_line(session: CitySession) -> str:
    s = session.state
    return (
        f"tick={s.tick_count} money={s.money} population={s.population} "
        f"jobs={s.jobs} power={s.power} water={s.water} "
        f"materials={s.materials} pollution={s.pollution}"
    )


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.WARNING if args.quiet else logging.INFO,
        format="%(levelname)s %(message)s",
    )

    try:
        config = CityConfig(
            width=args.width,
            height=args.height,
            tax_rate=args.tax,
            event_chance=args.events,
        )
    except ValueError as exc:
        logger.error("%s", exc)
        return 2

    session = CitySession(config, seed=args.seed)

    def forward(entry: LogEntry) -> None:
        logger.info("%s", entry)

    session.log.subscribe(forward)

    try:
        if args.load:
            session.load(args.load)
        for category, x, y in args.build:
            session.build(x, y, category)
        session.run(args.ticks)
        if args.save:
            session.save(args.save)
    except CityError as exc:
        logger.error("%s", exc)
        return 1

    print(status_line(session))
    return 0


if __name__ == "__main__":
    sys.exit(main())
