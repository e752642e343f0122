#!/usr/bin/env python3
import sys, os, argparse
from pathlib import Path

import matplotlib
# Default to a non-interactive backend; we'll only show() if --show
if "MPLBACKEND" not in os.environ:
    matplotlib.use("Agg")
import matplotlib.pyplot as plt
import numpy as np

from npuzzle.experiments.summarize import load_many, sem


def series(df, metric):
    """{(n, algorithm, heuristic): (depths, means, sems)} over solved rows."""
    ok = df[df["termination"] == "ok"]
    out = {}
    for (n, algo, heur), g in ok.groupby(["n", "algorithm", "heuristic"]):
        by = g.groupby("depth")[metric]
        means = by.mean()
        xs = means.index.to_numpy(dtype=float)
        ys = means.to_numpy(dtype=float)
        es = np.asarray(by.agg(sem), dtype=float)
        out[(n, algo, heur)] = (xs, ys, es)
    return out


def plot_metric(ax, df, metric, log=False):
    for (n, algo, heur), (xs, ys, es) in sorted(series(df, metric).items()):
        label = f"{int(n)}x{int(n)} {algo} | {heur or '—'}"
        ax.errorbar(xs, ys, yerr=es, marker="o", capsize=3, label=label)
    ax.set_xlabel("Scramble depth")
    ax.set_ylabel(metric)
    if log:
        ax.set_yscale("log")
    ax.set_title(f"{metric} vs depth (mean ± sem)")
    ax.grid(True)
    ax.legend()


def save_fig(fig, outdir: Path, name: str) -> Path:
    outdir.mkdir(parents=True, exist_ok=True)
    path = outdir / f"{name}.png"
    fig.savefig(path, dpi=200, bbox_inches="tight")
    print(f"Saved: {path}")
    return path


def main():
    ap = argparse.ArgumentParser(description="Plot runner CSVs and save PNGs.")
    ap.add_argument("csv", nargs="+", help="One or more CSV result files")
    ap.add_argument("--save", default="results/plots", help="Directory to save plots")
    ap.add_argument("--show", action="store_true", help="Also open interactive windows (if GUI available)")
    args = ap.parse_args()

    df = load_many(args.csv)
    if df.empty:
        print("No rows to plot. Are your CSVs empty?")
        sys.exit(0)

    outdir = Path(args.save)
    base = "combo" if len(args.csv) > 1 else Path(args.csv[0]).stem

    fig, axes = plt.subplots(1, 3, figsize=(15, 5))
    for ax, metric in zip(axes, ["expanded", "peak_open", "g"]):
        plot_metric(ax, df, metric, log=metric != "g")
    plt.tight_layout()
    save_fig(fig, outdir, f"{base}_combined")
    plt.close(fig)

    for metric in ["expanded", "skipped", "peak_open", "time_sec"]:
        fig, ax = plt.subplots(figsize=(8, 6))
        plot_metric(ax, df, metric, log=True)
        plt.tight_layout()
        save_fig(fig, outdir, f"{base}_{metric}")
        plt.close(fig)

    if args.show:
        plt.show()

if __name__ == "__main__":
    main()
