# Huffman bit counting
# experiments.py
# 10/17/26

"""
Experiment driver: Huffman bit counts with hash vs dense lookup tables

Runs repeated, timed build/encode passes over synthetic datasets and compares
the two lookup table forms used by the encoder.

Outputs (in --outdir):
  - metrics.csv     (raw row per run per configuration)
  - summary.csv     (grouped mean/stdev)
  - *.png           (charts)

How to run:
  python experiments.py --outdir results --runs 5
  python experiments.py --outdir results --runs 3 --exp1_size_kb 128 --exp2_max_kb 512
  python experiments.py --outdir results --exp1_generators uniform256,zipf128,english_like,unicode_mix

Notes:
  correctness_ok checks that the encoded length equals the sum of code lengths
  over the input and that the code is prefix-free. Nothing is decoded.
"""

from __future__ import annotations

import argparse
import csv
import random
import statistics
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Tuple, Callable, Union

import matplotlib.pyplot as plt

import huffman as huff
from lookup import build_lookup_table

Symbols = Union[bytes, str]
PIPELINES = ("hash", "dense")


# Utilities

def now_ns() -> int:
    return time.perf_counter_ns()

def ns_to_ms(ns: int) -> float:
    return ns / 1_000_000.0

def safe_mkdir(p: Path) -> None:
    p.mkdir(parents=True, exist_ok=True)

def parse_csv_list(s: str) -> List[str]:
    return [x.strip() for x in s.split(",") if x.strip()]


# Synthetic dataset generators

def _make_cdf(weights: List[float]) -> List[float]:
    total = sum(weights)
    cdf = []
    acc = 0.0
    for w in weights:
        acc += w / total
        cdf.append(acc)
    return cdf

def _sample_index(rng: random.Random, cdf: List[float]) -> int:
    # binary search for the first bucket whose cumulative weight covers r
    r = rng.random()
    lo, hi = 0, len(cdf) - 1
    while lo < hi:
        mid = (lo + hi) // 2
        if r <= cdf[mid]:
            hi = mid
        else:
            lo = mid + 1
    return lo

def gen_uniform(size: int, alphabet: int = 256, seed: int = 0) -> bytes:
    rng = random.Random(seed)
    return bytes(rng.randrange(0, alphabet) for _ in range(size))

def gen_repetitive(size: int, dominant: int = ord('A'), dom_frac: float = 0.90, seed: int = 0) -> bytes:
    rng = random.Random(seed)
    others = [i for i in range(256) if i != dominant]
    return bytes(dominant if rng.random() < dom_frac else rng.choice(others) for _ in range(size))

def gen_zipf_like(size: int, alphabet: int = 128, s: float = 1.2, seed: int = 0) -> bytes:
    rng = random.Random(seed)
    cdf = _make_cdf([1.0 / ((i + 1) ** s) for i in range(alphabet)])
    return bytes(_sample_index(rng, cdf) for _ in range(size))

ENGLISH_CHARS = " etaoinshrdlcumwfgypbvkjxqETAOINSHRDLCUMWFGYPBVKJXQ\n"

def _english_weight(ch: str) -> float:
    if ch == ' ':
        return 13.0
    if ch == '\n':
        return 1.5
    if ch.lower() in "etaoinshrdlu":
        return 6.0
    if ch.lower() in "cmfwgypbvk":
        return 2.5
    return 1.2

def gen_english_like(size: int, seed: int = 0) -> str:
    rng = random.Random(seed)
    cdf = _make_cdf([_english_weight(ch) for ch in ENGLISH_CHARS])
    return "".join(ENGLISH_CHARS[_sample_index(rng, cdf)] for _ in range(size))

def gen_unicode_mix(size: int, seed: int = 0, cjk_frac: float = 0.2) -> str:
    """
    English-like text with a sprinkling of CJK ideographs, so the alphabet has
    ordinals far above the dense auto-selection limit
    """
    rng = random.Random(seed)
    base = gen_english_like(size, seed=seed)
    cjk = [chr(0x4E00 + i) for i in range(200)]
    return "".join(rng.choice(cjk) if rng.random() < cjk_frac else ch for ch in base)

GENERATOR_REGISTRY: Dict[str, Callable[[int, int], Symbols]] = {
    "uniform256": lambda size, seed: gen_uniform(size, alphabet=256, seed=seed),
    "uniform128": lambda size, seed: gen_uniform(size, alphabet=128, seed=seed),
    "zipf128": lambda size, seed: gen_zipf_like(size, alphabet=128, s=1.2, seed=seed),
    "zipf64": lambda size, seed: gen_zipf_like(size, alphabet=64, s=1.2, seed=seed),
    "repetitive90": lambda size, seed: gen_repetitive(size, dominant=ord('A'), dom_frac=0.90, seed=seed),
    "repetitive99": lambda size, seed: gen_repetitive(size, dominant=ord('A'), dom_frac=0.99, seed=seed),
    "english_like": lambda size, seed: gen_english_like(size, seed=seed),
    "unicode_mix": lambda size, seed: gen_unicode_mix(size, seed=seed),
}

def generate_dataset(name: str, size: int, seed: int) -> Tuple[str, Symbols]:
    fn = GENERATOR_REGISTRY.get(name)
    if fn is None:
        raise ValueError(f"unknown generator {name!r}, expected one of {sorted(GENERATOR_REGISTRY)}")
    return name, fn(size, seed)


# Experiment runner

@dataclass
class MetricRow:
    exp_name: str
    dataset_name: str
    input_symbols: int
    run_id: int
    pipeline: str  # "hash" or "dense"
    unique_symbols: int

    count_ms: float
    build_tree_ms: float
    build_table_ms: float
    encode_ms: float
    total_ms: float

    encoded_bits: int
    bits_per_symbol: float
    entropy_bits: float
    efficiency: float

    correctness_ok: int  # 1 or 0


def run_one(data: Symbols, pipeline: str) -> MetricRow:
    if pipeline not in PIPELINES:
        raise ValueError(f"pipeline must be one of {PIPELINES}")

    t0 = now_ns()
    ft = huff.freq_table(data)
    t1 = now_ns()
    root = huff.build_huffman_tree(ft)
    t2 = now_ns()
    code_table = build_lookup_table(huff.generate_huffman_codes(root), dense=(pipeline == "dense"))
    t3 = now_ns()
    bits = huff.huffman_encode(data, code_table)
    t4 = now_ns()

    expected_bits = huff.encoded_length(ft, code_table)
    correctness_ok = 1 if len(bits) == expected_bits and huff.is_prefix_free(code_table) else 0

    return MetricRow(
        exp_name="",
        dataset_name="",
        input_symbols=len(data),
        run_id=0,
        pipeline=pipeline,
        unique_symbols=len(ft),
        count_ms=ns_to_ms(t1 - t0),
        build_tree_ms=ns_to_ms(t2 - t1),
        build_table_ms=ns_to_ms(t3 - t2),
        encode_ms=ns_to_ms(t4 - t3),
        total_ms=ns_to_ms(t4 - t0),
        encoded_bits=len(bits),
        bits_per_symbol=len(bits) / max(1, len(data)),
        entropy_bits=huff.entropy(ft),
        efficiency=huff.efficiency(ft, code_table),
        correctness_ok=correctness_ok,
    )


def write_csv(path: Path, rows: List[MetricRow]) -> None:
    fields = list(MetricRow.__dataclass_fields__.keys())
    with path.open("w", newline="", encoding="utf-8") as f:
        w = csv.DictWriter(f, fieldnames=fields)
        w.writeheader()
        for r in rows:
            w.writerow({k: getattr(r, k) for k in fields})


SUMMARY_METRICS = ("bits_per_symbol", "efficiency", "build_tree_ms", "build_table_ms", "encode_ms", "total_ms")

def mean_stdev(vals: List[float]) -> Tuple[float, float]:
    if len(vals) == 1:
        return vals[0], 0.0
    return statistics.mean(vals), statistics.stdev(vals)

def group_summary(rows: List[MetricRow], out_path: Path) -> None:
    """
    Group by exp_name, dataset_name, input_symbols, pipeline and compute mean/stdev
    """
    key_to: Dict[Tuple[str, str, int, str], List[MetricRow]] = {}
    for r in rows:
        key = (r.exp_name, r.dataset_name, r.input_symbols, r.pipeline)
        key_to.setdefault(key, []).append(r)

    summary_fields = ["exp_name", "dataset_name", "input_symbols", "pipeline", "n_runs"]
    for m in SUMMARY_METRICS:
        summary_fields += [f"{m}_mean", f"{m}_stdev"]
    summary_fields.append("correctness_ok_rate")

    with out_path.open("w", newline="", encoding="utf-8") as f:
        w = csv.DictWriter(f, fieldnames=summary_fields)
        w.writeheader()
        for key, items in sorted(key_to.items()):
            exp_name, dataset_name, size, pipeline = key
            out = {
                "exp_name": exp_name,
                "dataset_name": dataset_name,
                "input_symbols": size,
                "pipeline": pipeline,
                "n_runs": len(items),
                "correctness_ok_rate": sum(x.correctness_ok for x in items) / len(items),
            }
            for m in SUMMARY_METRICS:
                out[f"{m}_mean"], out[f"{m}_stdev"] = mean_stdev([getattr(x, m) for x in items])
            w.writerow(out)


# Plotting

def _line_chart(x, series: Dict[str, List[float]], path: Path, title: str, ylabel: str,
                xlabel: str = "", xticklabels: List[str] = None) -> None:
    plt.figure()
    for label, y in series.items():
        plt.plot(x, y, marker="o", label=label)
    if xticklabels is not None:
        plt.xticks(x, xticklabels, rotation=20, ha="right")
    if xlabel:
        plt.xlabel(xlabel)
    plt.ylabel(ylabel)
    plt.title(title)
    if len(series) > 1:
        plt.legend()
    plt.tight_layout()
    plt.savefig(path, dpi=200)
    plt.close()

def _mean_of(rows: List[MetricRow], field: str, **match) -> float:
    vals = [getattr(r, field) for r in rows if all(getattr(r, k) == v for k, v in match.items())]
    return statistics.mean(vals) if vals else float("nan")

def plot_experiment_1(rows: List[MetricRow], outdir: Path) -> None:
    exp_rows = [r for r in rows if r.exp_name == "exp1_distribution"]
    if not exp_rows:
        return

    datasets = sorted(set(r.dataset_name for r in exp_rows))
    x = list(range(len(datasets)))

    # code quality does not depend on the lookup table form, one pipeline is enough
    _line_chart(
        x,
        {
            "huffman": [_mean_of(exp_rows, "bits_per_symbol", dataset_name=d, pipeline="hash") for d in datasets],
            "entropy": [_mean_of(exp_rows, "entropy_bits", dataset_name=d, pipeline="hash") for d in datasets],
        },
        outdir / "exp1_bits_per_symbol.png",
        "Experiment 1: Bits per Symbol vs Entropy by Distribution",
        "Bits per Symbol",
        xticklabels=datasets,
    )
    for field, ylabel, name in (
        ("encode_ms", "Encode Time (ms)", "encode_time"),
        ("total_ms", "Total Time (ms) (count + build + encode)", "total_time"),
    ):
        _line_chart(
            x,
            {p: [_mean_of(exp_rows, field, dataset_name=d, pipeline=p) for d in datasets] for p in PIPELINES},
            outdir / f"exp1_{name}.png",
            f"Experiment 1: {ylabel.split(' (')[0]} by Distribution",
            ylabel,
            xticklabels=datasets,
        )


def plot_experiment_2(rows: List[MetricRow], outdir: Path) -> None:
    exp_rows = [r for r in rows if r.exp_name == "exp2_size_scaling"]
    if not exp_rows:
        return

    for dist in sorted(set(r.dataset_name for r in exp_rows)):
        dist_rows = [r for r in exp_rows if r.dataset_name == dist]
        sizes = sorted(set(r.input_symbols for r in dist_rows))

        for field, ylabel, name in (
            ("encode_ms", "Encode Time (ms)", "encode_time"),
            ("total_ms", "Total Time (ms) (count + build + encode)", "total_time"),
        ):
            _line_chart(
                sizes,
                {p: [_mean_of(dist_rows, field, input_symbols=s, pipeline=p) for s in sizes] for p in PIPELINES},
                outdir / f"exp2_{name}_{dist}.png",
                f"Experiment 2: {ylabel.split(' (')[0]} vs Size ({dist})",
                ylabel,
                xlabel="Input Size (symbols)",
            )


def plot_experiment_3(rows: List[MetricRow], outdir: Path) -> None:
    exp_rows = [r for r in rows if r.exp_name == "exp3_pipeline_compare"]
    if not exp_rows:
        return

    datasets = sorted(set(r.dataset_name for r in exp_rows))
    x = list(range(len(datasets)))
    _line_chart(
        x,
        {p: [_mean_of(exp_rows, "build_table_ms", dataset_name=d, pipeline=p) for d in datasets] for p in PIPELINES},
        outdir / "exp3_build_table_time.png",
        "Experiment 3: Lookup Table Build Time by Dataset",
        "Table Build Time (ms)",
        xticklabels=datasets,
    )
    _line_chart(
        x,
        {p: [_mean_of(exp_rows, "encode_ms", dataset_name=d, pipeline=p) for d in datasets] for p in PIPELINES},
        outdir / "exp3_encode_time.png",
        "Experiment 3: Encode Time by Dataset",
        "Encode Time (ms)",
        xticklabels=datasets,
    )


# Main

def run_configuration(rows: List[MetricRow], exp_name: str, dataset_name: str, data: Symbols, run_id: int) -> None:
    for pipeline in PIPELINES:
        row = run_one(data, pipeline)
        row.exp_name = exp_name
        row.dataset_name = dataset_name
        row.run_id = run_id
        rows.append(row)

def main() -> int:
    ap = argparse.ArgumentParser()
    ap.add_argument("--outdir", type=str, default="results", help="Output directory for CSV and plots")
    ap.add_argument("--runs", type=int, default=3, help="Repetitions per configuration (>=3 recommended for timing)")
    ap.add_argument("--seed", type=int, default=123, help="Base random seed")

    # Experiment toggles
    ap.add_argument("--no_exp1", action="store_true", help="Disable experiment 1 (distribution)")
    ap.add_argument("--no_exp2", action="store_true", help="Disable experiment 2 (size scaling)")
    ap.add_argument("--no_exp3", action="store_true", help="Disable experiment 3 (pipeline compare)")

    # Experiment 1 controls
    ap.add_argument("--exp1_size_kb", type=int, default=128, help="Experiment 1 fixed input size in K symbols")
    ap.add_argument("--exp1_generators", type=str, default="uniform256,zipf128,repetitive90,english_like,unicode_mix",
                    help="Comma-separated dataset generator names for experiment 1")

    # Experiment 2 controls
    ap.add_argument("--exp2_min_kb", type=int, default=4, help="Experiment 2 min size in K symbols (power-of-two growth)")
    ap.add_argument("--exp2_max_kb", type=int, default=512, help="Experiment 2 max size in K symbols (power-of-two growth)")
    ap.add_argument("--exp2_generators", type=str, default="uniform256,zipf128,english_like",
                    help="Comma-separated dataset generator names for experiment 2")

    args = ap.parse_args()

    outdir = Path(args.outdir)
    safe_mkdir(outdir)

    rows: List[MetricRow] = []

    # Experiment 1: distributions (fixed size)
    if not args.no_exp1:
        fixed_size = max(1, args.exp1_size_kb) * 1024
        for gen_name in parse_csv_list(args.exp1_generators):
            for run_id in range(1, args.runs + 1):
                dataset_name, data = generate_dataset(gen_name, fixed_size, args.seed + run_id)
                run_configuration(rows, "exp1_distribution", dataset_name, data, run_id)
        print(f"Experiment 1 done ({len(rows)} rows so far)")

    # Experiment 2: size scaling (powers of 2)
    if not args.no_exp2:
        sizes: List[int] = []
        s = max(1, args.exp2_min_kb) * 1024
        while s <= max(1, args.exp2_max_kb) * 1024:
            sizes.append(s)
            s *= 2

        for gen_name in parse_csv_list(args.exp2_generators):
            for size in sizes:
                for run_id in range(1, args.runs + 1):
                    dataset_name, data = generate_dataset(gen_name, size, args.seed + 10_000 + size + run_id)
                    run_configuration(rows, "exp2_size_scaling", dataset_name, data, run_id)
        print(f"Experiment 2 done ({len(rows)} rows so far)")

    # Experiment 3: lookup table forms on mixed alphabets
    if not args.no_exp3:
        mixed_specs = [
            ("english_like", 256 * 1024),
            ("unicode_mix",  256 * 1024),
            ("uniform256",   256 * 1024),
            ("zipf64",       256 * 1024),
            ("repetitive99", 256 * 1024),
            ("uniform128",   256 * 1024),
        ]
        for gen_name, size in mixed_specs:
            for run_id in range(1, args.runs + 1):
                dataset_name, data = generate_dataset(gen_name, size, args.seed + 200_000 + run_id + size)
                run_configuration(rows, "exp3_pipeline_compare", f"{dataset_name}_{size // 1024}k", data, run_id)
        print(f"Experiment 3 done ({len(rows)} rows so far)")

    # Write raw and summary
    metrics_csv = outdir / "metrics.csv"
    summary_csv = outdir / "summary.csv"
    write_csv(metrics_csv, rows)
    group_summary(rows, summary_csv)

    # Plots
    plot_experiment_1(rows, outdir)
    plot_experiment_2(rows, outdir)
    plot_experiment_3(rows, outdir)

    ok_rate = sum(r.correctness_ok for r in rows) / max(1, len(rows))
    print(f"Wrote {len(rows)} rows to {metrics_csv}")
    print(f"Wrote grouped summary to {summary_csv}")
    print(f"Correctness rate across all runs: {ok_rate:.3f}")
    print("Charts saved in:", outdir.resolve())
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
