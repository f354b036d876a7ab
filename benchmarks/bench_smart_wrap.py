"""Repeatable benchmark for smart-wrap render passes over a large pane buffer.

Builds a synthetic codex-style buffer (banner, commentary, diff hunks with
wrapped fragments, dividers, long-token list items) and times classify() and
decorate_lines() over repeated passes, the way a viewer re-renders on scroll.

Usage:
    uv run python benchmarks/bench_smart_wrap.py              # default 2000 lines
    uv run python benchmarks/bench_smart_wrap.py --lines 10000 --passes 50
    uv run python benchmarks/bench_smart_wrap.py --json       # machine-readable output
"""

import argparse
import json
import statistics
import sys
import time
import tracemalloc

from smart_wrap.core.classify import classify
from smart_wrap.core.decorate import decorate_lines
from smart_wrap.viewport import text_to_line_html


BANNER = [
    "╭───────────────────────────────╮",
    "│ >_ OpenAI Codex (v0.104.0)    │",
    "╰───────────────────────────────╯",
]

SECTION = [
    "• I'll tighten the parser before touching the renderer.",
    "• Edited src/renderer/viewport_rows.py (+3 -1)",
    "    41  def render_rows(rows):",
    "    42 -    return [row.text for row in rows]",
    "    42 +    return [",
    "decorate(row.text, row.classification) for row in rows",
    "    43 +    ]",
    "",
    '<span class="hl-punct">-</span> <span class="hl-path">src/renderer/viewport_rows.py:42</span>',
    "    Search configuration-management-guide",
    "INFO renderer ready",
    "─ Worked for 1m 17s ──────────────────────────────",
]


def generate_buffer(n_lines: int) -> list[str]:
    """Build n_lines of pane HTML: a banner followed by repeated sections."""
    lines = [text_to_line_html(text) for text in BANNER]
    index = 0
    while len(lines) < n_lines - 1:
        text = SECTION[index % len(SECTION)]
        lines.append(text if text.startswith("<") else text_to_line_html(text))
        index += 1
    lines.append(text_to_line_html("43% context left"))
    return lines


def _summary(samples_ms: list[float]) -> dict:
    ordered = sorted(samples_ms)
    cuts = statistics.quantiles(ordered, n=100) if len(ordered) > 1 else ordered * 99
    return {
        "count": len(ordered),
        "min_ms": round(ordered[0], 3),
        "max_ms": round(ordered[-1], 3),
        "mean_ms": round(statistics.fmean(ordered), 3),
        "p50_ms": round(cuts[49], 3),
        "p95_ms": round(cuts[94], 3),
    }


def run_benchmark(n_lines: int, passes: int, agent: str) -> dict:
    """Time classify + decorate over repeated passes and return results dict."""
    lines = generate_buffer(n_lines)
    classify_ms: list[float] = []
    decorate_ms: list[float] = []

    tracemalloc.start()
    wall_start = time.perf_counter_ns()

    for _ in range(passes):
        started = time.perf_counter_ns()
        classifications = classify(lines, agent)
        classified = time.perf_counter_ns()
        decorated = decorate_lines(lines, classifications)
        finished = time.perf_counter_ns()
        classify_ms.append((classified - started) / 1_000_000)
        decorate_ms.append((finished - classified) / 1_000_000)
        _ = len(decorated)

    wall_elapsed_ns = time.perf_counter_ns() - wall_start
    mem_current, mem_peak = tracemalloc.get_traced_memory()
    tracemalloc.stop()

    return {
        "n_lines": len(lines),
        "passes": passes,
        "agent": agent,
        "wall_time_ms": wall_elapsed_ns / 1_000_000,
        "mem_peak_kb": mem_peak / 1024,
        "mem_current_kb": mem_current / 1024,
        "stages": {
            "classify": _summary(classify_ms),
            "decorate_lines": _summary(decorate_ms),
        },
    }


def print_report(results: dict) -> None:
    """Print a human-readable benchmark report."""
    print(f"\n{'='*60}")
    print("  Smart-wrap Render Pass Benchmark")
    print(f"{'='*60}")
    print(f"  Buffer:     {results['n_lines']} lines, agent={results['agent']}")
    print(f"  Passes:     {results['passes']}")
    print(f"  Wall time:  {results['wall_time_ms']:.1f} ms")
    print(f"  Memory:     {results['mem_peak_kb']:.0f} KB peak, "
          f"{results['mem_current_kb']:.0f} KB current")
    print()

    for stage_name, stats in results["stages"].items():
        print(f"  [{stage_name}] ({stats['count']} samples)")
        print(f"    min={stats['min_ms']:.2f}ms  "
              f"p50={stats['p50_ms']:.2f}ms  "
              f"p95={stats['p95_ms']:.2f}ms  "
              f"max={stats['max_ms']:.2f}ms")
        print()

    print(f"{'='*60}\n")


def main() -> None:
    parser = argparse.ArgumentParser(description="Smart-wrap render pass benchmark")
    parser.add_argument("--lines", type=int, default=2000,
                        help="Buffer size in lines (default: 2000)")
    parser.add_argument("--passes", type=int, default=20,
                        help="Number of render passes (default: 20)")
    parser.add_argument("--agent", default="codex", choices=["codex", "claude", "other"])
    parser.add_argument("--json", action="store_true",
                        help="Output machine-readable JSON")
    args = parser.parse_args()

    results = run_benchmark(args.lines, args.passes, args.agent)

    if args.json:
        json.dump(results, sys.stdout, indent=2)
        sys.stdout.write("\n")
    else:
        print_report(results)


if __name__ == "__main__":
    main()
