import pandas as pd

from npuzzle.experiments.runner import HEADER, generate, run, write_csv
from npuzzle.experiments.summarize import load_many, optimality_gap, sem, summarize


def test_generate_counts_and_seeds():
    insts = generate(3, [4, 8], per_depth=3)
    assert len(insts) == 6
    assert [i.seed for i in insts] == list(range(6))
    assert [i.depth for i in insts] == [4, 4, 4, 8, 8, 8]


def test_run_and_summarize(tmp_path):
    insts = generate(3, [4, 10], per_depth=2)
    rows = run(insts, ["manhattan", "euclidean"], include_unsolvable=True, with_bfs=True)
    # per instance: 2 heuristics on the solvable and the flipped variant, plus BFS once
    assert len(rows) == len(insts) * 5
    assert {r["termination"] for r in rows if r["solvable"] == 0} == {"unsolvable"}

    out = tmp_path / "run.csv"
    write_csv(rows, out)
    df = pd.read_csv(out)
    assert list(df.columns) == HEADER

    df = load_many([str(out)])
    table = summarize(df)
    man = table[(table["heuristic"] == "manhattan") & (table["depth"] == 4)]
    assert len(man) == 1
    assert man["solved_rate"].iloc[0] == 0.5
    assert "expanded_mean" in table.columns and "expanded_sem" in table.columns

    gap = optimality_gap(df)
    assert gap.set_index("heuristic").loc["manhattan", "max"] == 0


def test_bfs_cap_is_separate_from_expansion_budget():
    insts = generate(3, [10], per_depth=1)
    capped = run(insts, ["manhattan"], with_bfs=True, bfs_max_states=1)
    assert [(r["algorithm"], r["termination"]) for r in capped] == [("A*", "ok"), ("BFS", "budget")]

    budgeted = run(insts, ["manhattan"], with_bfs=True, max_expansions=1)
    assert [(r["algorithm"], r["termination"]) for r in budgeted] == [("A*", "budget"), ("BFS", "ok")]


def test_load_many_skips_unreadable(tmp_path, capsys):
    assert load_many([str(tmp_path / "missing.csv")]).empty
    assert "skip" in capsys.readouterr().out


def test_sem():
    assert sem([3.0]) == 0.0
    assert abs(sem([1.0, 3.0]) - 1.0) < 1e-12


def test_plot_saves_png(tmp_path):
    from npuzzle.experiments.plot import plot_metric, plt, save_fig

    write_csv(run(generate(3, [4, 8], per_depth=2), ["manhattan"]), tmp_path / "r.csv")
    df = load_many([str(tmp_path / "r.csv")])
    fig, ax = plt.subplots()
    plot_metric(ax, df, "expanded")
    path = save_fig(fig, tmp_path / "plots", "expanded")
    plt.close(fig)
    assert path.exists()
