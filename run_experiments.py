#!/usr/bin/env python3
import subprocess, sys
from pathlib import Path

def run(desc, cmd):
    print(f"\n=== {desc} ===\n{cmd}")
    r = subprocess.run(cmd, shell=True)
    if r.returncode != 0:
        sys.exit(r.returncode)

def main():
    Path("results").mkdir(exist_ok=True)
    run("3x3 all heuristics + BFS", "python -m npuzzle.experiments.runner --n 3 --depths 6 10 14 18 22 --per_depth 10 --bfs --include_unsolvable --out results/p3.csv")
    run("4x4 all heuristics", "python -m npuzzle.experiments.runner --n 4 --depths 10 20 30 --per_depth 10 --max_expansions 200000 --out results/p4.csv")
    run("Summary", "python -m npuzzle.experiments.summarize results/p3.csv results/p4.csv --out results/summary.csv")
    run("Plots", "python -m npuzzle.experiments.plot results/p3.csv results/p4.csv --save results/plots")

if __name__ == "__main__":
    main()
