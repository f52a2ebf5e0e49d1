#!/usr/bin/env python3
"""
Evaluation runner for huffman-compressor.

This evaluation script:
- Runs pytest on the tests/ folder and collects individual test results
- Benchmarks compress/uncompress over a fixed set of generated inputs
- Generates a structured JSON report with environment metadata

Run with:
    python evaluation/evaluation.py [--output report.json] [--size BYTES]
"""
import os
import sys
import json
import uuid
import random
import platform
import subprocess
import time
from datetime import datetime
from pathlib import Path

PROJECT_ROOT = Path(__file__).parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from huffman_compressor import HuffmanError, compress, uncompress  # noqa: E402

SAMPLE_TEXT = (
    b"It was the best of times, it was the worst of times, it was the age of "
    b"wisdom, it was the age of foolishness, it was the epoch of belief, it "
    b"was the epoch of incredulity, it was the season of Light, it was the "
    b"season of Darkness.\n"
)


def generate_run_id():
    """Generate a short unique run ID."""
    return uuid.uuid4().hex[:8]


def get_git_info():
    """Get git commit and branch information."""
    git_info = {"git_commit": "unknown", "git_branch": "unknown"}
    commands = {
        "git_commit": ["git", "rev-parse", "HEAD"],
        "git_branch": ["git", "rev-parse", "--abbrev-ref", "HEAD"],
    }
    for key, cmd in commands.items():
        try:
            result = subprocess.run(cmd, capture_output=True, text=True, timeout=5, cwd=str(PROJECT_ROOT))
        except (OSError, subprocess.SubprocessError):
            continue
        if result.returncode == 0:
            value = result.stdout.strip()
            git_info[key] = value[:8] if key == "git_commit" else value
    return git_info


def get_environment_info():
    """Collect environment information for the report."""
    git_info = get_git_info()

    return {
        "python_version": platform.python_version(),
        "platform": platform.platform(),
        "os": platform.system(),
        "os_release": platform.release(),
        "architecture": platform.machine(),
        "hostname": platform.node(),
        "git_commit": git_info["git_commit"],
        "git_branch": git_info["git_branch"],
    }


def run_pytest(tests_dir, timeout=600):
    """
    Run pytest on the tests/ folder.

    Args:
        tests_dir: Path to the tests directory
        timeout: Seconds before the pytest run is abandoned

    Returns:
        dict with test results
    """
    print(f"\n{'=' * 60}")
    print("RUNNING TESTS")
    print(f"{'=' * 60}")
    print(f"Tests directory: {tests_dir}")

    cmd = [
        sys.executable, "-m", "pytest",
        str(tests_dir),
        "-v",
        "--tb=short",
    ]

    env = os.environ.copy()
    env["PYTHONPATH"] = os.pathsep.join(filter(None, [str(PROJECT_ROOT), env.get("PYTHONPATH")]))

    try:
        result = subprocess.run(
            cmd,
            capture_output=True,
            text=True,
            cwd=str(PROJECT_ROOT),
            env=env,
            timeout=timeout,
        )
    except subprocess.TimeoutExpired:
        print("❌ Test execution timed out")
        return {
            "success": False,
            "exit_code": -1,
            "tests": [],
            "summary": {"error": "Test execution timed out"},
            "stdout": "",
            "stderr": "",
        }

    stdout = result.stdout
    stderr = result.stderr

    tests = parse_pytest_verbose_output(stdout)

    passed = sum(1 for t in tests if t.get("outcome") == "passed")
    failed = sum(1 for t in tests if t.get("outcome") == "failed")
    errors = sum(1 for t in tests if t.get("outcome") == "error")
    skipped = sum(1 for t in tests if t.get("outcome") == "skipped")
    total = len(tests)

    print(f"\nResults: {passed} passed, {failed} failed, {errors} errors, {skipped} skipped (total: {total})")

    for test in tests:
        status_icon = {
            "passed": "✅",
            "failed": "❌",
            "error": "💥",
            "skipped": "⏭️"
        }.get(test.get("outcome"), "❓")
        print(f"  {status_icon} {test.get('nodeid', 'unknown')}: {test.get('outcome', 'unknown')}")

    return {
        "success": result.returncode == 0,
        "exit_code": result.returncode,
        "tests": tests,
        "summary": {
            "total": total,
            "passed": passed,
            "failed": failed,
            "errors": errors,
            "skipped": skipped,
        },
        "stdout": stdout[-3000:] if len(stdout) > 3000 else stdout,
        "stderr": stderr[-1000:] if len(stderr) > 1000 else stderr,
    }


def parse_pytest_verbose_output(output):
    """Parse pytest verbose output to extract test results."""
    tests = []

    for line in output.split('\n'):
        line_stripped = line.strip()

        # Match lines like: tests/test_container.py::test_truncated_container_rejected PASSED
        if '::' not in line_stripped:
            continue

        for status_word, outcome in [(' PASSED', "passed"), (' FAILED', "failed"),
                                     (' ERROR', "error"), (' SKIPPED', "skipped")]:
            if status_word in line_stripped:
                nodeid = line_stripped.split(status_word)[0].strip()
                tests.append({
                    "nodeid": nodeid,
                    "name": nodeid.split("::")[-1],
                    "outcome": outcome,
                })
                break

    return tests


def benchmark_inputs(size, seed=0):
    """Build the named inputs the benchmark runs over."""
    rng = random.Random(seed)
    text = (SAMPLE_TEXT * (size // len(SAMPLE_TEXT) + 1))[:size]
    return {
        "empty": b"",
        "single_byte_repeated": b"A" * size,
        "all_byte_values": bytes(range(256)) * max(size // 256, 1),
        "english_text": text,
        "random_bytes": bytes(rng.getrandbits(8) for _ in range(size)),
    }


def run_benchmark(size):
    """Compress and uncompress every benchmark input, recording sizes and timings."""
    print(f"\n{'=' * 60}")
    print("RUNNING BENCHMARK")
    print(f"{'=' * 60}")
    print(f"{'Input':<22} {'Bytes':>10} {'Compressed':>12} {'Ratio':>7} {'Comp (ms)':>10} {'Uncomp (ms)':>12}")

    results = []
    for name, data in benchmark_inputs(size).items():
        entry = {"name": name, "input_bytes": len(data)}
        try:
            t0 = time.perf_counter()
            packed = compress(data)
            t1 = time.perf_counter()
            restored = uncompress(packed)
            t2 = time.perf_counter()
        except HuffmanError as e:
            entry.update({"round_trip": False, "error": str(e)})
            results.append(entry)
            print(f"{name:<22} {len(data):>10} ❌ {e}")
            continue

        ratio = 100 - int((len(packed) * 100) / max(len(data), 1))
        entry.update({
            "compressed_bytes": len(packed),
            "ratio_percent": ratio,
            "compress_ms": round((t1 - t0) * 1000, 3),
            "uncompress_ms": round((t2 - t1) * 1000, 3),
            "round_trip": restored == data,
            "error": None,
        })
        results.append(entry)
        print(f"{name:<22} {len(data):>10} {len(packed):>12} {ratio:>6}% "
              f"{entry['compress_ms']:>10.2f} {entry['uncompress_ms']:>12.2f}"
              f"{'' if entry['round_trip'] else '  ❌ round trip mismatch'}")

    return {
        "success": all(r["round_trip"] for r in results),
        "inputs": results,
    }


def run_evaluation(size, skip_tests=False):
    """
    Run the test suite and the benchmark.

    Returns dict with both result sets.
    """
    print(f"\n{'=' * 60}")
    print("HUFFMAN COMPRESSOR EVALUATION")
    print(f"{'=' * 60}")

    test_results = None if skip_tests else run_pytest(PROJECT_ROOT / "tests")
    benchmark_results = run_benchmark(size)

    print(f"\n{'=' * 60}")
    print("EVALUATION SUMMARY")
    print(f"{'=' * 60}")
    if test_results is not None:
        summary = test_results.get("summary", {})
        print(f"  Tests: {'✅ PASSED' if test_results.get('success') else '❌ FAILED'} "
              f"({summary.get('passed', 0)}/{summary.get('total', 0)} passed)")
    print(f"  Benchmark round trips: {'✅ PASSED' if benchmark_results['success'] else '❌ FAILED'}")

    return {
        "tests": test_results,
        "benchmark": benchmark_results,
    }


def generate_output_path():
    """Generate output path in format: evaluation/YYYY-MM-DD/HH-MM-SS/report.json"""
    now = datetime.now()
    date_str = now.strftime("%Y-%m-%d")
    time_str = now.strftime("%H-%M-%S")

    output_dir = PROJECT_ROOT / "evaluation" / date_str / time_str
    output_dir.mkdir(parents=True, exist_ok=True)

    return output_dir / "report.json"


def main(argv=None):
    """Main entry point for evaluation."""
    import argparse

    parser = argparse.ArgumentParser(description="Run the huffman-compressor evaluation")
    parser.add_argument(
        "--output",
        type=str,
        default=None,
        help="Output JSON file path (default: evaluation/YYYY-MM-DD/HH-MM-SS/report.json)"
    )
    parser.add_argument(
        "--size",
        type=int,
        default=256 * 1024,
        help="Size in bytes of each generated benchmark input (default: 262144)"
    )
    parser.add_argument(
        "--skip-tests",
        action="store_true",
        help="Only run the benchmark"
    )

    args = parser.parse_args(argv)

    run_id = generate_run_id()
    started_at = datetime.now()

    print(f"Run ID: {run_id}")
    print(f"Started at: {started_at.isoformat()}")

    results = run_evaluation(args.size, skip_tests=args.skip_tests)
    tests_ok = results["tests"] is None or results["tests"].get("success", False)
    success = tests_ok and results["benchmark"]["success"]
    if success:
        error_message = None
    elif not tests_ok:
        error_message = "Test suite failed"
    else:
        error_message = "Benchmark round trip failed"

    finished_at = datetime.now()
    duration = (finished_at - started_at).total_seconds()

    report = {
        "run_id": run_id,
        "started_at": started_at.isoformat(),
        "finished_at": finished_at.isoformat(),
        "duration_seconds": round(duration, 6),
        "success": success,
        "error": error_message,
        "environment": get_environment_info(),
        "results": results,
    }

    if args.output:
        output_path = Path(args.output)
    else:
        output_path = generate_output_path()

    output_path.parent.mkdir(parents=True, exist_ok=True)

    with open(output_path, "w") as f:
        json.dump(report, f, indent=2)
    print(f"\n✅ Report saved to: {output_path}")

    print(f"\n{'=' * 60}")
    print("EVALUATION COMPLETE")
    print(f"{'=' * 60}")
    print(f"Run ID: {run_id}")
    print(f"Duration: {duration:.2f}s")
    print(f"Success: {'✅ YES' if success else '❌ NO'}")

    return 0 if success else 1


if __name__ == "__main__":
    sys.exit(main())
