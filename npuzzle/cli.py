#!/usr/bin/env python3
"""n-puzzle solver: A* toward the spiral goal layout, one file at a time."""
from __future__ import annotations
import argparse, csv, logging, re, sys
from pathlib import Path
from typing import List, Optional

from rich.console import Console
from rich.text import Text

from npuzzle.domains.loader import load_puzzle
from npuzzle.domains.spiral import build_goal
from npuzzle.errors import InputIOError, MalformedPuzzleError, MissingBlankError
from npuzzle.heuristics.distance import ADMISSIBLE, get_distance_fn, make_heuristic
from npuzzle.render import render_path, render_summary
from npuzzle.search.a_star import SearchResult, a_star

logger = logging.getLogger("npuzzle")

CSV_HEADER = ["file", "n", "heuristic", "algorithm", "termination", "g", "expanded",
              "skipped", "generated", "peak_open", "peak_closed", "time_sec"]


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="npuzzle", description=__doc__, allow_abbrev=False)
    h = ap.add_argument_group("heuristic (last one given wins)")
    h.add_argument("-e", "--euclidean", dest="heuristic", action="store_const", const="euclidean",
                   help="squared euclidean distance (default, fast but not optimal)")
    h.add_argument("-o", "--out_of_place", dest="heuristic", action="store_const", const="out_of_place",
                   help="out of place tiles")
    h.add_argument("-m", "--manhattan", dest="heuristic", action="store_const", const="manhattan",
                   help="manhattan distance (optimal)")
    ap.set_defaults(heuristic="euclidean")
    ap.add_argument("--include-blank", action="store_true", help="Count the blank in the heuristic sum")
    ap.add_argument("--no-parity-check", dest="check_parity", action="store_false",
                    help="Search even when the parity test says the puzzle is unsolvable")
    ap.add_argument("--max-expansions", type=int, default=None, help="Stop after this many expansions")
    ap.add_argument("--timeout-sec", type=float, default=None, help="Per-file wall time")
    ap.add_argument("-q", "--quiet", action="store_true", help="Only print the summary")
    ap.add_argument("--frames", type=Path, default=None, help="Save PNG frames of each solution under DIR/<file>/")
    ap.add_argument("--csv", type=Path, default=None, help="Append one stats row per file")
    ap.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    ap.add_argument("files", nargs="+", help="Puzzle files")
    return ap


def solve_file(path: str, args: argparse.Namespace, console: Console) -> SearchResult:
    start = load_puzzle(path)
    hfun = make_heuristic(args.heuristic, start.n, args.include_blank)
    console.print(f"Solving {path} ({start.n}x{start.n}, {args.heuristic})...", markup=False)
    if args.heuristic not in ADMISSIBLE:
        logger.debug("%s is not admissible; move count may not be minimal", args.heuristic)
    res = a_star(start, hfun, check_parity=args.check_parity,
                 max_expansions=args.max_expansions, timeout_sec=args.timeout_sec)
    res.extra.update({"file": path, "n": start.n, "heuristic": args.heuristic})

    if res.solved and not args.quiet:
        console.print("Reconstructing...")
        render_path(console, res.path, build_goal(start.n), get_distance_fn(args.heuristic),
                    args.include_blank)
    render_summary(console, res)

    if res.solved and args.frames is not None:
        from npuzzle.experiments.visualize_path import save_frames
        outdir = args.frames / Path(path).stem
        count = save_frames(res.path, outdir)
        console.print(f"Saved {count} frames to {outdir}", markup=False)
    return res


def write_rows(out: Path, results: List[SearchResult]) -> None:
    new = not out.exists()
    out.parent.mkdir(parents=True, exist_ok=True)
    with out.open("a", newline="") as f:
        w = csv.DictWriter(f, fieldnames=CSV_HEADER, extrasaction="ignore")
        if new:
            w.writeheader()
        for r in results:
            w.writerow(r.as_row())


def main(argv: Optional[List[str]] = None) -> int:
    ap = build_parser()
    argv = sys.argv[1:] if argv is None else list(argv)
    # only the exact flag spellings; argparse would otherwise unbundle "-mo"
    bundled = [a for a in argv if re.fullmatch(r"-[A-Za-z]{2,}", a)]
    if bundled:
        ap.error(f"unrecognized arguments: {' '.join(bundled)}")
    args = ap.parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING,
                        format="%(levelname)s %(name)s: %(message)s")
    console = Console(highlight=False, soft_wrap=True)
    err = Console(stderr=True, highlight=False, soft_wrap=True)

    failures = 0
    results: List[SearchResult] = []
    for path in args.files:
        try:
            results.append(solve_file(path, args, console))
        except (InputIOError, MalformedPuzzleError, MissingBlankError) as e:
            failures += 1
            err.print(Text.assemble(("Error", "bright_red"), f": {path}: {e}"))
        console.print()

    if args.csv is not None and results:
        write_rows(args.csv, results)
    return 1 if failures else 0


if __name__ == "__main__":
    sys.exit(main())
