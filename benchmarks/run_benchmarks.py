#!/usr/bin/env python3
"""Benchmark suite for pyskiplist comparing against sortedcontainers."""

import argparse
import json
import random
import time
from pathlib import Path
from typing import Callable, Dict, List

import numpy as np
import plotly.graph_objects as go
from sortedcontainers import SortedSet
from tqdm import tqdm

from pyskiplist import SkipListSet
from pyskiplist.config import Configuration


class Metrics:
    def __init__(self):
        self.insert_latencies: List[float] = []
        self.search_latencies: List[float] = []
        self.delete_latencies: List[float] = []

    def to_dict(self) -> Dict:
        return {
            name: {
                "p50": np.percentile(latencies, 50),
                "p95": np.percentile(latencies, 95),
                "p99": np.percentile(latencies, 99),
            }
            for name, latencies in (
                ("insert_latencies", self.insert_latencies),
                ("search_latencies", self.search_latencies),
                ("delete_latencies", self.delete_latencies),
            )
        }

    def plot_latencies(self, title: str, output_path: Path):
        fig = go.Figure()
        for name, latencies in (
            ("Insert Latency", self.insert_latencies),
            ("Search Latency", self.search_latencies),
            ("Delete Latency", self.delete_latencies),
        ):
            fig.add_trace(go.Box(y=latencies, name=name, boxpoints="outliers"))

        fig.update_layout(
            title=title,
            yaxis_title="Latency (µs)",
            boxmode="group"
        )

        fig.write_html(output_path)


def _timed(label: str, values: List[int], op: Callable[[int], object], sink: List[float]):
    for value in tqdm(values, desc=label):
        start = time.perf_counter()
        op(value)
        sink.append((time.perf_counter() - start) * 1e6)


def _height_histogram(heights: List[int]) -> Dict[int, int]:
    counts = np.bincount(np.asarray(heights))
    return {h: int(c) for h, c in enumerate(counts) if c}


class BenchmarkSuite:
    def __init__(self, num_entries: int, seed: int):
        self.num_entries = num_entries
        rng = random.Random(seed)
        self._values = rng.sample(range(num_entries * 10), num_entries)
        self._lookups = rng.sample(self._values, len(self._values))
        self.heights: Dict[str, Dict[int, int]] = {}

    def run_skiplist_benchmark(self) -> Metrics:
        metrics = Metrics()
        s: SkipListSet[int] = SkipListSet()
        _timed("SkipList Insert", self._values, s.add, metrics.insert_latencies)
        _timed("SkipList Search", self._lookups, s.contains, metrics.search_latencies)
        self.heights["after_insert"] = _height_histogram(s.node_heights())

        # Thin out 90 % of the elements, then restore the height shape
        doomed = self._lookups[: len(self._lookups) * 9 // 10]
        _timed("SkipList Delete", doomed, s.remove, metrics.delete_latencies)
        self.heights["after_delete"] = _height_histogram(s.node_heights())
        s.rebalance()
        self.heights["after_rebalance"] = _height_histogram(s.node_heights())
        return metrics

    def run_sortedcontainers_benchmark(self) -> Metrics:
        metrics = Metrics()
        s = SortedSet()
        _timed("SortedSet Insert", self._values, s.add, metrics.insert_latencies)
        _timed("SortedSet Search", self._lookups, s.__contains__, metrics.search_latencies)
        doomed = self._lookups[: len(self._lookups) * 9 // 10]
        _timed("SortedSet Delete", doomed, s.discard, metrics.delete_latencies)
        return metrics

    def plot_heights(self, output_path: Path):
        fig = go.Figure()
        for phase, histogram in self.heights.items():
            fig.add_trace(go.Bar(x=list(histogram), y=list(histogram.values()), name=phase))
        fig.update_layout(title="Node height distribution", xaxis_title="Height", barmode="group")
        fig.write_html(output_path)


def main():
    parser = argparse.ArgumentParser()
    parser.add_argument("--size", type=int, default=100000, help="Number of elements")
    parser.add_argument("--seed", type=int, default=0, help="Seed for the workload (not the list)")
    parser.add_argument("--output", type=Path, default=Path("benchmark_results"), help="Output directory")
    args = parser.parse_args()

    Configuration().setup_logging()
    args.output.mkdir(parents=True, exist_ok=True)

    suite = BenchmarkSuite(args.size, args.seed)
    skiplist_metrics = suite.run_skiplist_benchmark()
    sortedcontainers_metrics = suite.run_sortedcontainers_benchmark()

    skiplist_metrics.plot_latencies(
        "pyskiplist Latency Distribution",
        args.output / "skiplist_latencies.html"
    )
    sortedcontainers_metrics.plot_latencies(
        "SortedSet Latency Distribution",
        args.output / "sortedset_latencies.html"
    )
    suite.plot_heights(args.output / "heights.html")

    with open(args.output / "metrics.json", "w") as f:
        json.dump({
            "pyskiplist": skiplist_metrics.to_dict(),
            "sortedcontainers": sortedcontainers_metrics.to_dict(),
            "heights": suite.heights,
        }, f, indent=2)


if __name__ == "__main__":
    main()
