#!/usr/bin/env python3
from __future__ import annotations
import argparse, os
from pathlib import Path
from typing import List

import numpy as np
import pandas as pd

METRICS = ["expanded", "skipped", "generated", "peak_open", "time_sec", "g"]
KEYS = ["n", "heuristic", "algorithm", "depth"]


def sem(x):
    x = np.asarray(x, float)
    n = np.sum(~np.isnan(x))
    return 0.0 if n <= 1 else np.nanstd(x, ddof=1) / np.sqrt(n)


def load_many(paths: List[str]) -> pd.DataFrame:
    dfs = []
    for fn in paths:
        try:
            df = pd.read_csv(fn)
        except (OSError, pd.errors.ParserError, pd.errors.EmptyDataError) as e:
            print(f"skip {fn}: {e}")
            continue
        df["__src__"] = os.path.basename(fn)
        dfs.append(df)
    if not dfs:
        return pd.DataFrame()
    df = pd.concat(dfs, ignore_index=True, sort=False)
    for c in METRICS + ["n", "depth", "seed", "solvable"]:
        if c in df.columns:
            df[c] = pd.to_numeric(df[c], errors="coerce")
    if "heuristic" in df.columns:
        df["heuristic"] = df["heuristic"].fillna("")
    return df


def summarize(df: pd.DataFrame) -> pd.DataFrame:
    """Per (n, heuristic, algorithm, depth): solved rate, then mean and sem of every metric over solved rows."""
    if df.empty:
        return df
    keys = [k for k in KEYS if k in df.columns]
    ok = df[df["termination"] == "ok"]
    rate = df.groupby(keys)["termination"].apply(lambda t: float((t == "ok").mean())).rename("solved_rate")
    metrics = [m for m in METRICS if m in ok.columns]
    agg = ok.groupby(keys)[metrics].agg(["mean", sem])
    agg.columns = [f"{m}_{stat}" for m, stat in agg.columns]
    return rate.to_frame().join(agg).reset_index()


def optimality_gap(df: pd.DataFrame) -> pd.DataFrame:
    """Extra moves per heuristic over the BFS oracle on the same instance."""
    if df.empty or "BFS" not in set(df.get("algorithm", [])):
        return pd.DataFrame()
    ok = df[df["termination"] == "ok"]
    base = ok[ok["algorithm"] == "BFS"][["n", "depth", "seed", "g"]].rename(columns={"g": "g_opt"})
    astar = ok[ok["algorithm"] == "A*"].merge(base, on=["n", "depth", "seed"])
    astar["gap"] = astar["g"] - astar["g_opt"]
    return astar.groupby(["n", "heuristic"])["gap"].agg(["mean", "max"]).reset_index()


def main():
    ap = argparse.ArgumentParser(description="Summarize runner CSVs.")
    ap.add_argument("csv", nargs="+", help="CSV files produced by npuzzle.experiments.runner")
    ap.add_argument("--out", type=Path, default=None, help="Write the summary table here")
    args = ap.parse_args()

    df = load_many(args.csv)
    if df.empty:
        print("No rows to summarize.")
        return
    table = summarize(df)
    with pd.option_context("display.max_rows", None, "display.width", 200):
        print(table.to_string(index=False))
        gap = optimality_gap(df)
        if not gap.empty:
            print("\n=== Move count over BFS optimum ===")
            print(gap.to_string(index=False))
    if args.out:
        args.out.parent.mkdir(parents=True, exist_ok=True)
        table.to_csv(args.out, index=False)
        print(f"Wrote {args.out}")

if __name__ == "__main__":
    main()
