#!/usr/bin/env python3
"""
PickLock command line tool

Give it an RSA public key and it will try to lock pick the private exponent,
either with the weak (close primes) or the strong (far primes) algorithm.
"""

import argparse
import json
import logging
import sys
import time
from typing import Any, Callable, Dict, Optional, Tuple

from tqdm import tqdm

from picklock.engine import PickLock
from picklock.errors import PickLockError
from picklock.keys import KeyType, to_pem
from picklock.primitives import safe_prime_source
from picklock.strong import SIZE_ADJUSTMENTS, ProgressEvent

EXIT_SUCCESS = 0
EXIT_FAILURE = 1
EXIT_USAGE = 2

# Levels printed even without verbose mode
LOG_PREFIXES = {'SUCCESS': '[✓]', 'WARNING': '[!]', 'ERROR': '[✗]'}

REPORT_LEVELS = (0, 1, 2)

EXPLAIN = """
PickLock offers two RSA cracking algorithms.

1. Weak:
Cracks the RSA private key when p and q are not too far apart.
Based on https://en.wikipedia.org/wiki/Fermat%27s_factorization_method
With common RSA key sizes (2048 bit) in tests, the Fermat algorithm with 100
rounds reliably factors numbers where p and q differ up to 2^517. In other
words, primes that only differ within the lower 64 bytes (or around half their
size) are vulnerable. If this tool cracks your key, you are using an insecure
RSA key generator.

2. Strong:
Cracks RSA when p and q are far apart, on the principle that:
 -> p * q = n,
 -> p and q are fairly equal in bit size and can vary +/- 1 bit,
 -> the bit sizes of p and q add up to the bit size of n.
Random primes of that size are tried as a factor of n. This is a prototype:
there are far too many primes, so success is a matter of luck.
"""


def parse_int(value: str) -> int:
    """Parse a decimal or 0x prefixed hexadecimal integer."""
    value = value.strip()
    if value.lower().startswith('0x'):
        return int(value, 16)
    return int(value)


def check_level(level: Optional[int]) -> int:
    """Validate a report level, defaulting to 0."""
    level = 0 if level is None else level
    if level not in REPORT_LEVELS:
        raise ValueError(f"Expected level 0, 1 or 2, got {level}")
    return level


class PickLockTool:
    """
    Runs one lock pick attempt and reports on it.
    """

    def __init__(self, verbose: bool = False, report_level: int = 0):
        """
        Initialize the tool.

        Args:
            verbose: Whether to print detailed information
            report_level: 0 results only, 1 important steps, 2 progress of the strong search
        """
        self.report_level = check_level(report_level)
        self.verbose = verbose or self.report_level >= 1

    def log(self, message: str, level: str = 'INFO') -> None:
        """Print a message in verbose mode. Levels in LOG_PREFIXES always print."""
        if not self.verbose and level not in LOG_PREFIXES:
            return
        print(LOG_PREFIXES.get(level, f"[{level}]"), message)

    def load_key(self, key_file: Optional[str] = None, n: Optional[int] = None,
                 e: Optional[int] = None) -> PickLock:
        """
        Build a PickLock from a PEM file or from explicit numbers.

        Raises:
            InvalidModulus: If the key material cannot be used
            OSError: If the key file cannot be read
            ValueError: If neither a key file nor a modulus is given
        """
        if key_file:
            self.log(f"Reading public key from {key_file}")
            with open(key_file, 'rb') as f:
                lock = PickLock.from_pem(f.read())
        elif n is not None:
            if e is None:
                self.log("Using default public exponent e = 65537")
                e = 65537
            lock = PickLock.from_exponent_and_modulus(e, n)
        else:
            raise ValueError("Either a key file or a modulus (n) must be provided")

        self.log(f"PickLock: {lock}")
        return lock

    def _progress_bar(self, total: int) -> Tuple[Callable[[ProgressEvent], None], tqdm]:
        bar = tqdm(total=total, unit='prime', desc='Strong lock pick')

        def observer(event: ProgressEvent) -> None:
            bar.update(event.attempts - bar.n)
            bar.set_postfix(checked=event.checked, bits=event.bits)

        return observer, bar

    def run(self, lock: PickLock, strong_iters: Optional[int] = None,
            max_iter: Optional[int] = None, safe_primes: bool = False) -> Dict[str, Any]:
        """
        Lock pick the private exponent of the key.

        Args:
            lock: The PickLock of the audited key
            strong_iters: Use the strong algorithm; a non-zero value replaces the iteration cap
            max_iter: Iteration cap for the weak algorithm
            safe_primes: Generate safe primes in the strong algorithm

        Returns:
            Dictionary with the outcome of the attempt
        """
        results: Dict[str, Any] = {
            'success': False,
            'method': 'strong' if strong_iters is not None else 'weak',
            'key_info': {
                'n': lock.n,
                'e': lock.e,
                'n_bit_length': lock.n.bit_length(),
            },
        }

        try:
            if strong_iters is None:
                self.log("Starting lock picking the weak RSA private key.")
                d = lock.try_weak(max_iter=max_iter)
            else:
                self.log("Starting lock picking the strong RSA private key.")
                if strong_iters != 0:
                    lock.alter_max_iter(strong_iters)
                prime_source = safe_prime_source if safe_primes else None
                if self.report_level == 2:
                    observer, bar = self._progress_bar(len(SIZE_ADJUSTMENTS) * lock.max_iter)
                    try:
                        d = lock.try_strong(observer=observer, prime_source=prime_source)
                    finally:
                        bar.close()
                else:
                    d = lock.try_strong(prime_source=prime_source)
        except PickLockError as e:
            self.log(f"{type(e).__name__}: {e}")
            results['error'] = str(e)
            results['error_type'] = type(e).__name__
            return results

        results['success'] = True
        results['d'] = d
        results['pem'] = to_pem(d, KeyType.PRIVATE)
        self.log("Lock picked the private exponent", level="SUCCESS")
        return results


def write_results(results: Dict[str, Any], output_file: str, output_format: str) -> None:
    """Save results as JSON or plain text."""
    with open(output_file, 'w') as f:
        if output_format == 'json':
            json.dump(results, f, indent=2, default=str)
        else:
            f.write("PickLock Results\n")
            f.write("================\n\n")
            f.write(f"Success: {results['success']}\n")
            f.write(f"Method: {results['method']}\n")
            if results['success']:
                f.write(f"Private exponent: {results['d']}\n\n")
                f.write(results['pem'])
            else:
                f.write(f"Error: {results.get('error', 'unknown')}\n")
            f.write(f"\nElapsed time: {results.get('elapsed_time', 0):.2f} seconds\n")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='picklock',
        description="PickLock - attempts to lock pick the private exponent of an RSA public key"
    )

    # Input options
    source = parser.add_mutually_exclusive_group()
    source.add_argument('--file', type=str, help='Path to the public key in PEM format')
    source.add_argument('--n', type=str, help='RSA modulus (decimal or 0x hex)')
    parser.add_argument('--e', type=str, help='Public exponent (decimal or 0x hex), default 65537')

    # Algorithm options
    parser.add_argument('--strong', type=int, metavar='ITERS',
                        help='Use the strong algorithm; number of primes to try per size, 0 keeps the default')
    parser.add_argument('--max-iter', type=int,
                        help='Iteration cap for the weak algorithm')
    parser.add_argument('--safe-primes', action='store_true',
                        help='Guess safe primes only in the strong algorithm')
    parser.add_argument('--report', type=int, default=0,
                        help='Level of reporting. 0 (default): only results. 1: important steps. '
                             '2: progress of the strong algorithm.')

    # Output options
    parser.add_argument('--output-file', type=str, help='Output file for results')
    parser.add_argument('--output-format', choices=['json', 'text'], default='json',
                        help='Output format')
    parser.add_argument('--verbose', action='store_true', help='Enable verbose output')
    parser.add_argument('--explain', action='store_true', help='Explain the algorithms and exit')
    return parser


def main(argv: Optional[list] = None) -> int:
    """Main function for the PickLock tool."""
    args = build_parser().parse_args(argv)

    if args.explain:
        print(EXPLAIN)
        return EXIT_SUCCESS

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING, format="%(message)s")

    try:
        tool = PickLockTool(verbose=args.verbose, report_level=args.report)
        n = parse_int(args.n) if args.n else None
        e = parse_int(args.e) if args.e else None
        lock = tool.load_key(key_file=args.file, n=n, e=e)
    except (ValueError, OSError) as err:
        print(f"Error: {err}")
        return EXIT_USAGE

    start_time = time.time()
    try:
        results = tool.run(lock, strong_iters=args.strong, max_iter=args.max_iter,
                           safe_primes=args.safe_primes)
    except ValueError as err:
        print(f"Error: {err}")
        return EXIT_USAGE
    elapsed = time.time() - start_time
    tool.log(f"Lock picking completed in {elapsed:.2f} seconds")

    if results['success']:
        print(f"Lock picked private PEM key:\n{results['pem']}")
    else:
        print(f"LockPick Failure: {results['error']}")

    if args.output_file:
        results['timestamp'] = time.time()
        results['elapsed_time'] = elapsed
        try:
            write_results(results, args.output_file, args.output_format)
            tool.log(f"Results saved to {args.output_file}")
        except OSError as err:
            print(f"Error saving results: {err}")

    return EXIT_SUCCESS if results['success'] else EXIT_FAILURE


if __name__ == "__main__":
    sys.exit(main())
