#!/usr/bin/env python3
"""
Performance Benchmark for Shardflake

Checks the generator's throughput characteristics:

- Single thread: 1024 IDs in well under one second
- Single thread: sustained rate over 100K IDs
- Contended: 8 threads sharing one generator, no duplicates
- Independent shards: one generator per thread, no cross-shard collisions

Run:
    python scripts/performance_benchmark.py
"""

import threading
import time

from shardflake import Generator
from shardflake.kernel.ids import decompose_id


def benchmark_liveness() -> dict:
    """Benchmark the 1024-ID liveness check"""
    print("\n=== Benchmark: 1024 IDs ===")

    gen = Generator(1)
    start_time = time.perf_counter()
    for _ in range(1024):
        gen.generate_id()
    elapsed = time.perf_counter() - start_time

    print(f"  Time elapsed: {elapsed * 1000:.2f}ms")
    print(f"  Target: <1000ms")
    print(f"  Status: {'✓ PASS' if elapsed < 1 else '✗ FAIL'}")

    return {"test": "liveness_1024", "elapsed_sec": elapsed, "pass": elapsed < 1}


def benchmark_sustained_rate() -> dict:
    """Benchmark single-threaded generation rate"""
    print("\n=== Benchmark: Sustained Rate ===")

    gen = Generator(2)
    num_ids = 100_000
    start_time = time.perf_counter()
    ids = [gen.generate_id() for _ in range(num_ids)]
    elapsed = time.perf_counter() - start_time

    ids_per_sec = num_ids / elapsed if elapsed > 0 else 0
    unique = len(set(ids))

    print(f"  IDs generated: {num_ids}")
    print(f"  Unique: {unique}")
    print(f"  IDs/sec: {ids_per_sec:,.0f}")
    print(f"  Status: {'✓ PASS' if unique == num_ids else '✗ FAIL'}")

    return {
        "test": "sustained_rate",
        "ids": num_ids,
        "ids_per_sec": ids_per_sec,
        "pass": unique == num_ids,
    }


def _run_threads(generators: list[Generator], per_thread: int) -> tuple[list[int], float]:
    results: list[list[int]] = [[] for _ in generators]

    def worker(index: int) -> None:
        gen = generators[index]
        out = results[index]
        for _ in range(per_thread):
            out.append(gen.generate_id())

    threads = [threading.Thread(target=worker, args=(i,)) for i in range(len(generators))]
    start_time = time.perf_counter()
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    elapsed = time.perf_counter() - start_time

    return [i for out in results for i in out], elapsed


def benchmark_contended() -> dict:
    """Benchmark 8 threads sharing one generator"""
    print("\n=== Benchmark: Shared Generator, 8 Threads ===")

    gen = Generator(3)
    ids, elapsed = _run_threads([gen] * 8, 10_000)
    unique = len(set(ids))

    print(f"  IDs generated: {len(ids)}")
    print(f"  Unique: {unique}")
    print(f"  IDs/sec: {len(ids) / elapsed:,.0f}")
    print(f"  Status: {'✓ PASS' if unique == len(ids) else '✗ FAIL'}")

    return {"test": "shared_generator", "ids": len(ids), "pass": unique == len(ids)}


def benchmark_independent_shards() -> dict:
    """Benchmark one generator per thread"""
    print("\n=== Benchmark: Independent Shards, 8 Threads ===")

    generators = [Generator(shard_id) for shard_id in range(100, 108)]
    ids, elapsed = _run_threads(generators, 10_000)
    unique = len(set(ids))
    shards = {decompose_id(i).shard_id for i in ids}

    print(f"  IDs generated: {len(ids)}")
    print(f"  Unique: {unique}")
    print(f"  Shards seen: {sorted(shards)}")
    print(f"  IDs/sec: {len(ids) / elapsed:,.0f}")
    print(f"  Status: {'✓ PASS' if unique == len(ids) else '✗ FAIL'}")

    return {"test": "independent_shards", "ids": len(ids), "pass": unique == len(ids)}


def main() -> None:
    """Run all benchmarks"""
    print("\n" + "=" * 70)
    print("  Shardflake - Performance Benchmark Suite")
    print("=" * 70)

    results = [
        benchmark_liveness(),
        benchmark_sustained_rate(),
        benchmark_contended(),
        benchmark_independent_shards(),
    ]

    print("\n" + "=" * 70)
    print("  Summary")
    print("=" * 70)

    passed = sum(1 for r in results if r["pass"])
    for result in results:
        status = "✓ PASS" if result["pass"] else "✗ FAIL"
        print(f"  {result['test']:30s} {status}")

    print(f"\n  Tests passed: {passed}/{len(results)}")
    print("\n" + "=" * 70 + "\n")


if __name__ == "__main__":
    main()
