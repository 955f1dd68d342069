#!/usr/bin/env python3
"""
Range Proof Benchmark Script
============================

Benchmarks proving and verification time for score threshold proofs.
Target: <5 seconds proving time.

Usage:
    python scripts/benchmark_zk.py [--iterations N] [--stage NAME] [--output FILE]
"""

import argparse
import json
import random
import statistics
import sys
import time
from dataclasses import asdict, dataclass
from pathlib import Path

# Add parent to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from shared.zk import ZkProof, prove, verify


# Configuration
TARGET_TIME_MS = 5000
DEFAULT_ITERATIONS = 10


@dataclass
class BenchmarkResult:
    """Result of a benchmark run."""
    stage: str
    iterations: int
    min_ms: int
    max_ms: int
    mean_ms: float
    median_ms: float
    p95_ms: int
    p99_ms: int
    success_rate: float
    pass_target: bool


def percentile(data: list[int], p: int) -> int:
    """Calculate percentile."""
    sorted_data = sorted(data)
    index = int(len(sorted_data) * p / 100)
    return sorted_data[min(index, len(sorted_data) - 1)]


def summarize(stage: str, iterations: int, times: list[int], successes: int) -> BenchmarkResult:
    if not times:
        return BenchmarkResult(
            stage=stage,
            iterations=iterations,
            min_ms=0,
            max_ms=0,
            mean_ms=0,
            median_ms=0,
            p95_ms=0,
            p99_ms=0,
            success_rate=0,
            pass_target=False,
        )

    return BenchmarkResult(
        stage=stage,
        iterations=iterations,
        min_ms=min(times),
        max_ms=max(times),
        mean_ms=statistics.mean(times),
        median_ms=statistics.median(times),
        p95_ms=percentile(times, 95),
        p99_ms=percentile(times, 99),
        success_rate=successes / iterations,
        pass_target=percentile(times, 95) < TARGET_TIME_MS,
    )


def benchmark_prove(iterations: int) -> tuple[BenchmarkResult, list[ZkProof]]:
    """Benchmark proof generation."""
    times: list[int] = []
    proofs: list[ZkProof] = []

    print(f"\n{'='*60}")
    print("Benchmarking: prove")
    print(f"Iterations: {iterations}")
    print(f"{'='*60}")

    for i in range(iterations):
        threshold = random.randint(300, 850)
        score = random.randint(threshold, 850)

        start = time.perf_counter()
        proofs.append(prove(score=score, threshold=threshold))
        duration_ms = int((time.perf_counter() - start) * 1000)
        times.append(duration_ms)

        status = "✓" if duration_ms < TARGET_TIME_MS else "✗"
        print(f"  [{i+1}/{iterations}] {status} {duration_ms}ms (threshold={threshold})")

    return summarize("prove", iterations, times, len(proofs)), proofs


def benchmark_verify(proofs: list[ZkProof]) -> BenchmarkResult:
    """Benchmark verification of previously generated proofs."""
    times: list[int] = []
    successes = 0

    print(f"\n{'='*60}")
    print("Benchmarking: verify")
    print(f"Iterations: {len(proofs)}")
    print(f"{'='*60}")

    for i, zk_proof in enumerate(proofs):
        start = time.perf_counter()
        valid = verify(zk_proof)
        duration_ms = int((time.perf_counter() - start) * 1000)
        times.append(duration_ms)
        successes += valid

        status = "✓" if valid else "✗ INVALID"
        print(f"  [{i+1}/{len(proofs)}] {status} {duration_ms}ms")

    return summarize("verify", len(proofs), times, successes)


def print_results(results: list[BenchmarkResult]) -> bool:
    """Print benchmark results summary."""
    print(f"\n{'='*70}")
    print("BENCHMARK SUMMARY")
    print(f"{'='*70}")

    print(f"\n{'Stage':<25} | {'P95':>8} | {'Mean':>8} | {'Target':>8} | Status")
    print("-" * 70)

    all_pass = True
    for r in results:
        passed = r.pass_target and r.success_rate == 1
        status = "✅ PASS" if passed else "❌ FAIL"
        if not passed:
            all_pass = False
        print(f"{r.stage:<25} | {r.p95_ms:>6}ms | {r.mean_ms:>6.0f}ms | <{TARGET_TIME_MS}ms | {status}")

    print()

    # Detailed stats
    for r in results:
        print(f"\n{r.stage}:")
        print(f"  Iterations:   {r.iterations}")
        print(f"  Success rate: {r.success_rate*100:.1f}%")
        print(f"  Min:          {r.min_ms}ms")
        print(f"  Max:          {r.max_ms}ms")
        print(f"  Mean:         {r.mean_ms:.0f}ms")
        print(f"  Median:       {r.median_ms:.0f}ms")
        print(f"  P95:          {r.p95_ms}ms")
        print(f"  P99:          {r.p99_ms}ms")

    print()
    return all_pass


def main() -> None:
    parser = argparse.ArgumentParser(description="Benchmark range proof generation and verification")
    parser.add_argument("--iterations", "-n", type=int, default=DEFAULT_ITERATIONS,
                       help=f"Number of iterations (default: {DEFAULT_ITERATIONS})")
    parser.add_argument("--stage", "-s", type=str, choices=["prove", "verify"],
                       help="Report a single stage only")
    parser.add_argument("--output", "-o", type=str, help="Output JSON file for results")

    args = parser.parse_args()

    print("╔" + "═"*58 + "╗")
    print("║  SCOREPROOF RANGE PROOF BENCHMARK                        ║")
    print(f"║  Target: <{TARGET_TIME_MS}ms proving time                            ║")
    print("╚" + "═"*58 + "╝")

    prove_result, proofs = benchmark_prove(args.iterations)
    results: list[BenchmarkResult] = []

    if args.stage is None or args.stage == "prove":
        results.append(prove_result)

    if args.stage is None or args.stage == "verify":
        results.append(benchmark_verify(proofs))

    # Print summary
    all_pass = print_results(results)

    # Save results if requested
    if args.output:
        output_data = {
            "timestamp": time.strftime("%Y-%m-%dT%H:%M:%SZ"),
            "target_ms": TARGET_TIME_MS,
            "results": [asdict(r) for r in results],
            "all_pass": all_pass,
        }

        with open(args.output, "w") as f:
            json.dump(output_data, f, indent=2)

        print(f"Results saved to: {args.output}")

    # Exit with appropriate code
    sys.exit(0 if all_pass else 1)


if __name__ == "__main__":
    main()
