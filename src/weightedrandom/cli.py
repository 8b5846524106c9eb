from __future__ import annotations

import argparse
import json
import logging
import sys
from collections.abc import Sequence

from .core.errors import WeightedRandomError
from .core.models import Group, ValueKind, export_value, lookup_key
from .core.random_source import RandomSource, SeededRandomSource
from .core.schemas import DistributionPayload, DistributionRow
from .sampling.bag import BagSampler
from .sampling.base import BaseSampler
from .sampling.weighted import WeightedSampler
from .ui.presenters import RichPresenter

__all__ = ["main", "parse_pair", "build_sampler", "distribution_payload"]

GROUP_SEPARATOR = "|"


def parse_pair(text: str) -> tuple[str | Group, float]:
    """Parse ``VALUE=WEIGHT``; ``a|b|c=WEIGHT`` declares a group."""

    value, sep, raw_weight = text.rpartition("=")
    if not sep or not value:
        raise argparse.ArgumentTypeError(f"expected VALUE=WEIGHT, got {text!r}")
    try:
        weight = float(raw_weight)
    except ValueError:
        raise argparse.ArgumentTypeError(f"weight of {value!r} is not a number: {raw_weight!r}") from None
    if GROUP_SEPARATOR in value:
        members = [member for member in value.split(GROUP_SEPARATOR) if member]
        return Group(members), weight
    return value, weight


def build_sampler(
    pairs: Sequence[tuple[str | Group, float]], *, bag: bool = False, rng: RandomSource | None = None
) -> BaseSampler:
    sampler: BaseSampler = BagSampler(rng=rng) if bag else WeightedSampler(rng=rng)
    for value, weight in pairs:
        sampler.register_value(value, weight)
    return sampler


def distribution_payload(sampler: BaseSampler) -> DistributionPayload:
    analytics = sampler.analytics
    weights = {slot.key: slot.weight for slot in sampler.table.slots() if slot.kind is not ValueKind.GROUP}
    rows = [
        DistributionRow(value=export_value(value), weight=weights.get(lookup_key(value)), probability=probability)
        for value, probability in analytics.distribution_items()
    ]
    return DistributionPayload(
        rows=rows,
        total_weight=sampler.total_weight(),
        entropy=analytics.entropy(flatten=True),
        expected_value=analytics.expected_value(),
        variance=analytics.variance(),
        standard_deviation=analytics.standard_deviation(),
    )


def _add_common_args(p: argparse.ArgumentParser) -> None:
    p.add_argument("pairs", nargs="+", type=parse_pair, metavar="VALUE=WEIGHT", help="Value and weight; a|b=W for a group")
    p.add_argument("--json", action="store_true", help="Emit JSON instead of tables")
    p.add_argument("--no-color", action="store_true", help="Disable colored output")
    p.add_argument("-v", "--verbose", action="store_true", help="Log debug output to stderr")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="weightedrandom", description="Weighted random selection from the shell")
    sub = parser.add_subparsers(dest="command", required=True)

    draw = sub.add_parser("draw", help="Draw values")
    _add_common_args(draw)
    draw.add_argument("-n", "--count", type=int, default=1, help="Number of draws")
    draw.add_argument("--bag", action="store_true", help="Draw without replacement (exact ratios per cycle)")
    draw.add_argument("--unique", action="store_true", help="Reject repeated values")
    # If omitted, draws come from OS entropy. Pass an int to reproduce.
    draw.add_argument("--seed", type=int, default=None, help="RNG seed (random if omitted)")
    draw.add_argument("--namespace", default="", help="Seed namespace for independent reproducible streams")

    stats = sub.add_parser("stats", help="Show the normalised distribution and its moments")
    _add_common_args(stats)
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(list(sys.argv[1:] if argv is None else argv))

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING, stream=sys.stderr)
    presenter = RichPresenter(no_color=args.no_color)

    try:
        if args.command == "draw":
            rng = SeededRandomSource(args.seed, args.namespace) if args.seed is not None else None
            sampler = build_sampler(args.pairs, bag=args.bag, rng=rng)
            if args.unique:
                results = list(sampler.generate_multiple_without_duplicates(args.count))
            else:
                results = list(sampler.generate_multiple(args.count))
            if args.json:
                print(json.dumps([export_value(value) for value in results]))
            else:
                presenter.show_draws(results, mode="bag" if args.bag else "weighted")
        else:
            payload = distribution_payload(build_sampler(args.pairs))
            if args.json:
                print(json.dumps(payload.to_dict()))
            else:
                presenter.show_distribution(payload)
    except WeightedRandomError as exc:
        presenter.show_error(str(exc))
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
