#!/usr/bin/env python3
import argparse, os
from pathlib import Path
from typing import List

import matplotlib
if "MPLBACKEND" not in os.environ:
    matplotlib.use("Agg")
import matplotlib.pyplot as plt

from npuzzle.domains.loader import load_puzzle
from npuzzle.domains.spiral import Configuration, build_goal, scramble
from npuzzle.heuristics.distance import HEURISTICS, make_heuristic
from npuzzle.search.a_star import a_star


def draw_board(config: Configuration, out_path: Path):
    n = config.n
    home = build_goal(n)
    plt.figure(figsize=(3, 3))
    ax = plt.gca()
    ax.set_xlim(0, n); ax.set_ylim(0, n)
    ax.set_xticks([]); ax.set_yticks([]); ax.invert_yaxis()
    # grid
    for i in range(n + 1):
        ax.plot([0, n], [i, i], linewidth=1, color="black")
        ax.plot([i, i], [0, n], linewidth=1, color="black")
    # tiles; the ones already home get a shaded cell
    for idx, t in enumerate(config.tiles):
        if t == 0: continue
        r, c = divmod(idx, n)
        if home[t] == (r, c):
            ax.add_patch(plt.Rectangle((c, r), 1, 1, color="#cfe8ff"))
        ax.text(c + 0.5, r + 0.6, str(t), ha="center", va="center", fontsize=16 if n <= 4 else 10)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    plt.tight_layout()
    plt.savefig(out_path, dpi=200)
    plt.close()


def save_frames(path: List[Configuration], outdir: Path) -> int:
    for i, s in enumerate(path):
        draw_board(s, outdir / f"step_{i:03d}.png")
    return len(path)


def main():
    p = argparse.ArgumentParser(description="Solve one instance and save board images along the path.")
    p.add_argument("--heuristic", choices=sorted(HEURISTICS), default="manhattan")
    p.add_argument("--file", type=Path, default=None, help="Puzzle file; otherwise a scrambled instance")
    p.add_argument("--n", type=int, default=3)
    p.add_argument("--depth", type=int, default=10)
    p.add_argument("--seed", type=int, default=1)
    p.add_argument("--outdir", default="results/figs/example_path")
    args = p.parse_args()

    start = load_puzzle(args.file) if args.file else scramble(args.n, args.depth, args.seed)
    res = a_star(start, make_heuristic(args.heuristic, start.n), return_path=True)

    if not res.path:
        print(f"No path ({res.termination}). Try smaller depth.")
        return

    outdir = Path(args.outdir)
    count = save_frames(res.path, outdir)
    print(f"Saved {count} frames to {outdir}")

if __name__ == "__main__":
    main()
