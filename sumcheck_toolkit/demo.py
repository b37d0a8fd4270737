"""
Sum-Check Protocol Demo

Walks through complete sum-check sessions, from the hand-checkable
g(x, y, z) = 2x³ + xz + yz over Z_71 to a cheating prover being caught.

Run with:
    sumcheck-demo
    python -m sumcheck_toolkit.demo --demo tamper --seed 7
"""

from __future__ import annotations
from dataclasses import replace
from typing import List, Optional
import argparse
import logging

from tabulate import tabulate

from .common.field import PrimeField
from .common.polynomial import SparsePolynomial
from .config import ProtocolConfig, create_test_config
from .lagrange.multilinear import MultilinearExtension
from .lagrange.univariate import UnivariateInterpolation
from .protocol.session import SumCheckResult, run_protocol


def sample_polynomial(field: PrimeField) -> SparsePolynomial:
    """g(x, y, z) = 2x³ + xz + yz"""
    return SparsePolynomial.from_terms(field, 3, [
        (2, [(0, 3)]),
        (1, [(0, 1), (2, 1)]),
        (1, [(1, 1), (2, 1)]),
    ])


def print_transcript(result: SumCheckResult):
    """Print one row per round."""
    rows = []
    for rd in result.round_data:
        rows.append([
            rd.round_index,
            str(rd.polynomial),
            rd.round_sum.value if rd.round_sum is not None else "-",
            rd.challenge.value if rd.challenge is not None else "-",
        ])
    print(tabulate(rows, headers=["Round", "h(X)", "h(0) + h(1)", "Challenge r"],
                   tablefmt="github"))

    print(f"\nClaim: {result.claim}")
    print(f"Challenges: ({', '.join(str(r) for r in result.challenges)})")
    if result.accepted:
        print("\n✓ VERIFICATION PASSED")
    else:
        print(f"\n✗ VERIFICATION FAILED: {type(result.error).__name__}: {result.error}")


def demo_textbook_example(config: ProtocolConfig) -> SumCheckResult:
    """
    The three-variable example: Σ g = 12 over Z_71.

    Small enough to verify every round by hand:
        h_0(X) = 8X³ + 2X + 1, so h_0(0) + h_0(1) = 1 + 11 = 12
    """
    print("\n" + "=" * 70)
    print("DEMO 1: g(x, y, z) = 2x³ + xz + yz")
    print("=" * 70)

    field = config.field()
    g = sample_polynomial(field)
    print(f"\ng = {g}")
    print(f"Σ g over {{0,1}}^3 = {g.sum_over_hypercube()}")

    result = run_protocol(g, config=config)
    print()
    print_transcript(result)
    return result


def demo_multilinear_extension(config: ProtocolConfig) -> SumCheckResult:
    """
    Sum-check on the multilinear extension of a value table.

    The table [3, 7, 2, 5, 1, 8, 4, 6] is indexed by (x0, x1, x2) with x0
    as the most significant bit.
    """
    print("\n" + "=" * 70)
    print("DEMO 2: MULTILINEAR EXTENSION OF A TABLE")
    print("=" * 70)

    field = config.field()
    table = [3, 7, 2, 5, 1, 8, 4, 6]
    mle = MultilinearExtension.from_evaluations(field, table)
    g = mle.to_polynomial()

    print(f"\nTable: {table}")
    print(f"f̃ = {g}")
    print(f"Σ table = {sum(table)} ≡ {mle.sum_over_hypercube()} (mod {field.prime})")

    result = run_protocol(g, config=config)
    print()
    print_transcript(result)
    return result


def demo_cheating_prover(config: ProtocolConfig) -> SumCheckResult:
    """
    A prover claiming 13 instead of 12.

    The prover shifts h_0 by a constant so that h_0(0) + h_0(1) matches the
    false claim. It is caught in round 1: the honest h_1 sums to h_0(r_1),
    not to the shifted h_0(r_1) + 1/2.
    """
    print("\n" + "=" * 70)
    print("DEMO 3: CHEATING PROVER")
    print("=" * 70)

    field = config.field()
    g = sample_polynomial(field)
    false_claim = field.element(13)
    # (h + c)(0) + (h + c)(1) = 12 + 2c, so c = 1/2 makes the sum 13
    shift = field.element(1) / 2

    def cheat(round_index: int, poly: SparsePolynomial) -> SparsePolynomial:
        return poly + shift if round_index == 0 else poly

    print(f"\nTrue sum: {g.sum_over_hypercube()}, claimed: {false_claim}")
    result = run_protocol(g, claim=false_claim, config=config, intercept=cheat)
    print()
    print_transcript(result)
    return result


def demo_low_degree_extension(config: ProtocolConfig):
    """Round polynomials sent as evaluations: recover h(r) by interpolation."""
    print("\n" + "=" * 70)
    print("DEMO 4: ROUND POLYNOMIAL FROM EVALUATIONS")
    print("=" * 70)

    field = config.field()
    h_0 = SparsePolynomial.from_univariate_coefficients(field, [1, 2, 0, 8])
    evaluations = [h_0(k) for k in range(4)]
    interp = UnivariateInterpolation(field, evaluations)

    rows = [[x, h_0(x).value, interp.interpolate(x).value] for x in range(8)]
    print(f"\nh_0(X) = {h_0}, sent as h_0(0..3) = {[e.value for e in evaluations]}")
    print(tabulate(rows, headers=["x", "h_0(x)", "interpolated"], tablefmt="github"))


DEMOS = {
    "textbook": demo_textbook_example,
    "mle": demo_multilinear_extension,
    "tamper": demo_cheating_prover,
    "interpolation": demo_low_degree_extension,
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sumcheck-demo",
        description="Step through sum-check sessions over a small prime field.",
    )
    parser.add_argument("--demo", choices=["all", *DEMOS], default="all",
                        help="which walkthrough to run (default: all)")
    parser.add_argument("--prime", type=int, default=PrimeField.SMALL_TEST_PRIME,
                        help="field modulus (default: 71)")
    parser.add_argument("--seed", type=int, default=42,
                        help="challenge seed (default: 42)")
    parser.add_argument("--workers", type=int, default=1,
                        help="prover threads for the round reduction")
    parser.add_argument("--log-level", default="WARNING",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
                        help="logging level for the protocol modules")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(levelname)s %(name)s: %(message)s",
    )

    config = replace(create_test_config(seed=args.seed),
                     prime=args.prime, num_workers=args.workers)

    print(config.summary())

    names = list(DEMOS) if args.demo == "all" else [args.demo]
    for name in names:
        DEMOS[name](config)

    print("\n" + "=" * 70)
    print("DEMO COMPLETE")
    print("=" * 70)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
