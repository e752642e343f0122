from __future__ import annotations
from pathlib import Path
from typing import Iterator, List, Tuple, Union
import logging

from npuzzle.domains.spiral import Configuration
from npuzzle.errors import InputIOError, MalformedPuzzleError

logger = logging.getLogger(__name__)


def _meaningful_lines(text: str) -> Iterator[Tuple[int, List[str]]]:
    """(1-based line number, tokens) for every line left non-empty once '#' comments are cut."""
    for lineno, line in enumerate(text.splitlines(), start=1):
        tokens = line.split("#", 1)[0].split()
        if tokens:
            yield lineno, tokens


def _to_int(tok: str, lineno: int) -> int:
    # ASCII digits only; int() also accepts underscores and non-Latin digits
    if not (tok.isascii() and tok.isdigit()):
        raise MalformedPuzzleError(f"not an integer: {tok!r}", line=lineno)
    return int(tok)


def parse_puzzle(text: str) -> Configuration:
    """
    Parse the puzzle text format:
        # comment
        3
        1 2 3
        8 0 4
        7 6 5
    First meaningful line is the size n, followed by exactly n rows of n values.
    """
    lines = list(_meaningful_lines(text))
    if not lines:
        raise MalformedPuzzleError("no size line")
    lineno, toks = lines[0]
    if len(toks) != 1:
        raise MalformedPuzzleError(f"size line must hold one integer, got {len(toks)} values", line=lineno)
    n = _to_int(toks[0], lineno)
    if n < 1:
        raise MalformedPuzzleError(f"size must be >= 1, got {n}", line=lineno)

    body = lines[1:]
    if len(body) != n:
        raise MalformedPuzzleError(f"expected {n} rows, got {len(body)}")
    rows: List[List[int]] = []
    for lineno, toks in body:
        if len(toks) != n:
            raise MalformedPuzzleError(f"expected {n} values, got {len(toks)}", line=lineno)
        rows.append([_to_int(t, lineno) for t in toks])
    return Configuration.from_rows(rows)


def load_puzzle(path: Union[str, Path]) -> Configuration:
    p = Path(path)
    try:
        text = p.read_text()
    except (OSError, UnicodeDecodeError) as e:
        raise InputIOError(str(p), str(e)) from e
    config = parse_puzzle(text)
    logger.debug("loaded %s: n=%d blank=%s", p, config.n, config.blank_pos)
    return config
