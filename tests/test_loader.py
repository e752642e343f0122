import pytest

from npuzzle.domains.loader import load_puzzle, parse_puzzle
from npuzzle.domains.spiral import goal_configuration
from npuzzle.errors import InputIOError, MalformedPuzzleError

GOAL3 = """\
# This puzzle is solvable
3   # size
1 2 3

8 0 4
# trailing comment
7 6 5
"""


def test_parse_with_comments_and_blank_lines():
    assert parse_puzzle(GOAL3) == goal_configuration(3)


def test_parse_extra_whitespace():
    assert parse_puzzle("2\n  1\t2 \n 0   3\n") == goal_configuration(2)


@pytest.mark.parametrize("text,line", [
    ("", None),
    ("# only a comment\n", None),
    ("3 3\n1 2 3\n8 0 4\n7 6 5\n", 1),
    ("x\n", 1),
    ("0\n", 1),
    ("3\n1 2 3\n8 0 4\n", None),
    ("3\n1 2 3\n8 0 4\n7 6 5\n1 2 3\n", None),
    ("3\n1 2 3\n8 0\n7 6 5\n", 3),
    ("3\n1 2 3\n8 0 4 9\n7 6 5\n", 3),
    ("3\n1 2 three\n8 0 4\n7 6 5\n", 2),
    ("3\n1 2 3\n8 ٠ 4\n7 6 5\n", 3),
    ("2\n١ 2\n0 3\n", 2),
    ("2\n1_0 2\n0 3\n", 2),
    ("2\n+1 2\n0 3\n", 2),
    ("3\n1 2 3\n8 0 4\n7 6 9\n", None),
    ("3\n1 2 3\n8 0 4\n7 6 6\n", None),
])
def test_malformed(text, line):
    with pytest.raises(MalformedPuzzleError) as exc:
        parse_puzzle(text)
    assert exc.value.line == line


def test_duplicate_message():
    with pytest.raises(MalformedPuzzleError, match="duplicate value 6"):
        parse_puzzle("3\n1 2 3\n8 0 4\n7 6 6\n")


def test_load_from_file(tmp_path):
    p = tmp_path / "goal.txt"
    p.write_text(GOAL3)
    assert load_puzzle(p) == goal_configuration(3)
    assert load_puzzle(str(p)) == goal_configuration(3)


def test_missing_file(tmp_path):
    with pytest.raises(InputIOError) as exc:
        load_puzzle(tmp_path / "nope.txt")
    assert exc.value.path.endswith("nope.txt")


def test_directory_is_io_error(tmp_path):
    with pytest.raises(InputIOError):
        load_puzzle(tmp_path)
