#!/usr/bin/env python3
"""Randomized cross-check of BigNumber arithmetic against Python int.

Generates random operands that fit the capacity, runs every operator on
both BigNumber and int, and reports mismatches. Division and modulo are
compared against truncating semantics, not Python's flooring ones.

Usage:
    python scripts/crosscheck.py [--capacity 30] [--iterations 500] [--seed 1] [--verbose]

Exit codes:
    0 - All results matched
    1 - Mismatches found (with details printed)
"""

import argparse
import logging
import random
import sys
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

import structlog

# Add project root to path for imports
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from bignumber import BigNumber, CapacityExceeded, bignumber_type  # noqa: E402

logger = structlog.get_logger()


@dataclass
class Mismatch:
    """A BigNumber result that disagreed with the int reference."""

    operation: str
    left: int
    right: int
    expected: int
    actual: str


def trunc_div(a: int, b: int) -> int:
    """Integer division truncating toward zero."""
    quotient = abs(a) // abs(b)
    return quotient if (a >= 0) == (b >= 0) else -quotient


def trunc_mod(a: int, b: int) -> int:
    """Remainder matching trunc_div: a - trunc_div(a, b) * b."""
    return a - trunc_div(a, b) * b


IntOp = Callable[[int, int], int]
BigOp = Callable[[BigNumber, BigNumber], BigNumber]

# Name -> (int reference, BigNumber operation)
OPERATIONS: dict[str, tuple[IntOp, BigOp]] = {
    "add": (lambda a, b: a + b, lambda a, b: a + b),
    "sub": (lambda a, b: a - b, lambda a, b: a - b),
    "mul": (lambda a, b: a * b, lambda a, b: a * b),
    "div": (trunc_div, lambda a, b: a / b),
    "mod": (trunc_mod, lambda a, b: a % b),
}


def random_operand(rng: random.Random, max_digits: int) -> int:
    digits = rng.randint(1, max_digits)
    value = rng.randint(0, 10**digits - 1)
    return -value if rng.random() < 0.5 else value


def check_pair(cls: type[BigNumber], a: int, b: int) -> list[Mismatch]:
    """Run every operation on one operand pair."""
    mismatches = []
    big_a, big_b = cls(a), cls(b)
    limit = 10**cls.capacity
    for name, (reference, operation) in OPERATIONS.items():
        if name in ("div", "mod") and b == 0:
            continue
        expected = reference(a, b)
        try:
            actual = operation(big_a, big_b)
        except CapacityExceeded:
            if abs(expected) >= limit:
                continue
            mismatches.append(Mismatch(name, a, b, expected, "CapacityExceeded"))
            continue
        if int(actual) != expected:
            mismatches.append(Mismatch(name, a, b, expected, str(actual)))
    return mismatches


def check_powers(cls: type[BigNumber], rng: random.Random, iterations: int) -> list[Mismatch]:
    """Small bases and exponents, skipping results past the capacity."""
    mismatches = []
    limit = 10**cls.capacity
    largest_base = min(99, limit - 1)
    for _ in range(iterations):
        base = rng.randint(-largest_base, largest_base)
        exponent = rng.randint(0, 40)
        expected = base**exponent
        if abs(expected) >= limit:
            continue
        actual = cls(base) ** exponent
        if int(actual) != expected:
            mismatches.append(Mismatch("pow", base, exponent, expected, str(actual)))
    return mismatches


def main() -> int:
    parser = argparse.ArgumentParser(
        description="Cross-check BigNumber arithmetic against Python int",
    )
    parser.add_argument("--capacity", type=int, default=30, help="Digit capacity (default: 30)")
    parser.add_argument(
        "--iterations", type=int, default=500, help="Random operand pairs (default: 500)"
    )
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose logging",
    )

    args = parser.parse_args()

    # Configure logging
    log_level = logging.DEBUG if args.verbose else logging.INFO
    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
    )

    if args.capacity <= 0:
        print(f"Error: capacity must be positive, got {args.capacity}")
        return 1

    cls = bignumber_type(args.capacity)
    rng = random.Random(args.seed)
    logger.info("crosscheck_started", capacity=args.capacity, iterations=args.iterations)

    mismatches: list[Mismatch] = []
    for i in range(args.iterations):
        a = random_operand(rng, args.capacity)
        b = random_operand(rng, args.capacity)
        found = check_pair(cls, a, b)
        if found:
            logger.debug("crosscheck_mismatch", iteration=i, count=len(found))
        mismatches.extend(found)
    mismatches.extend(check_powers(cls, rng, args.iterations))

    if not mismatches:
        logger.info("crosscheck_passed", capacity=args.capacity)
        return 0

    print(f"Found {len(mismatches)} mismatches:")
    for m in mismatches:
        print(f"  {m.operation}({m.left}, {m.right}): expected {m.expected}, got {m.actual}")
    return 1


if __name__ == "__main__":
    sys.exit(main())
