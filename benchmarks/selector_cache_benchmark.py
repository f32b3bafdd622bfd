"""Benchmark selector calls served by the argument cache and the result cache."""

from __future__ import annotations

import argparse
import statistics
import time
from dataclasses import dataclass
from typing import Any, Callable, Iterable, Sequence

from memoselect import create_selector, set_global_dev_mode_checks


@dataclass(slots=True)
class BenchmarkResult:
    """Statistical summary for a benchmark series."""

    label: str
    durations: list[float]
    calls_per_run: int

    @property
    def mean(self) -> float:
        return statistics.fmean(self.durations)

    @property
    def pstdev(self) -> float:
        if len(self.durations) <= 1:
            return 0.0
        return statistics.pstdev(self.durations)

    @property
    def runs(self) -> int:
        return len(self.durations)


def _build_selector() -> Callable[..., Any]:
    return create_selector(
        lambda state: state["a"],
        lambda state: state["b"],
        lambda a, b: a + b,
    )


def _run_pass(selector: Callable[..., Any], states: Sequence[dict[str, int]]) -> float:
    start = time.perf_counter()
    for state in states:
        selector(state)
    return time.perf_counter() - start


def _measure_series(
    states: Sequence[dict[str, int]],
    *,
    repeats: int,
) -> list[float]:
    durations: list[float] = []
    for _ in range(max(repeats, 1)):
        selector = _build_selector()
        durations.append(_run_pass(selector, states))
        if selector.recomputations() != 1:
            raise SystemExit(
                f"Expected a single recomputation, observed {selector.recomputations()}"
            )
    return durations


def _summarise(label: str, durations: Iterable[float], *, calls_per_run: int) -> BenchmarkResult:
    return BenchmarkResult(label=label, durations=list(durations), calls_per_run=calls_per_run)


def _format_result(result: BenchmarkResult) -> str:
    throughput = result.calls_per_run / result.mean if result.mean else float("nan")
    return (
        f"{result.label}: {result.mean:.6f}s ± {result.pstdev:.6f}s over {result.runs} runs "
        f"({throughput:,.0f} calls/s)"
    )


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "--calls",
        type=int,
        default=1_000_000,
        help="Number of selector calls per measured run.",
    )
    parser.add_argument(
        "--repeats",
        type=int,
        default=3,
        help="Number of measured runs per scenario.",
    )
    return parser.parse_args()


def main() -> None:
    args = parse_args()
    calls = max(args.calls, 1)
    set_global_dev_mode_checks(input_stability_check="never", identity_function_check="never")

    same_state = {"a": 1, "b": 2}
    identical_states = [same_state] * calls
    equal_states = [{"a": 1, "b": 2} for _ in range(calls)]

    argument_hits = _summarise(
        "Same state object (argument cache)",
        _measure_series(identical_states, repeats=args.repeats),
        calls_per_run=calls,
    )
    result_hits = _summarise(
        "Equal state objects (result cache)",
        _measure_series(equal_states, repeats=args.repeats),
        calls_per_run=calls,
    )
    print(_format_result(argument_hits))
    print(_format_result(result_hits))


if __name__ == "__main__":
    main()
