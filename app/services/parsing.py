"""
Share-text parser: turns a pasted Wordle share block into a result.

Public API
----------
parse_share_text(text) -> ParsedShare   (raises ShareTextParseError subclasses)

Accepted input, e.g.::

    Wordle 1,592 4/6*

    ⬛🟨⬛⬛⬛
    ⬛⬛🟩🟨⬛
    🟩🟩🟩⬛🟩
    🟩🟩🟩🟩🟩

- Puzzle numbers may carry thousands separators.
- "X/6" is a failed puzzle and maps to score 7.
- A trailing "*" (hard mode) is ignored.
- Blank lines after the header are skipped, including between grid rows.
  The first non-blank, non-grid line ends the grid.
- An empty grid is accepted.
"""
from __future__ import annotations

import re
from dataclasses import dataclass

from app.core.errors import GarbledHeaderError, MissingHeaderError
from app.models.submission import FAILED_SCORE


# ---------------------------------------------------------------------------
# Pattern constants
# ---------------------------------------------------------------------------

_HEADER_RE = re.compile(r"Wordle\s+([\d,]{1,7})\s+([1-6X])/6\*?", re.IGNORECASE)
# A line that starts like a header but failed _HEADER_RE
_HEADER_LIKE_RE = re.compile(r"^\s*Wordle\b", re.IGNORECASE)

_VARIATION_SELECTOR = "\ufe0f"
# ⬛ / ⬜ miss, 🟨 wrong spot, 🟩 correct; each may carry U+FE0F
_SQUARE_LINE_RE = re.compile("^(?:[\u2b1b\u2b1c\U0001F7E8\U0001F7E9]\ufe0f?)+$")


# ---------------------------------------------------------------------------
# Result type
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ParsedShare:
    puzzle_number: int
    score: int  # 1-6, or FAILED_SCORE
    grid: str   # newline-joined rows, may be empty

    @property
    def rows(self) -> list[str]:
        return self.grid.split("\n") if self.grid else []


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _normalize(text: str) -> str:
    return re.sub(r"\r\n?", "\n", text).strip()


def _parse_puzzle_number(raw: str, line: str) -> int:
    digits = raw.replace(",", "")
    if not digits:
        raise GarbledHeaderError(line)
    return int(digits)


def _parse_score(raw: str) -> int:
    return FAILED_SCORE if raw.upper() == "X" else int(raw)


def _extract_grid(lines: list[str]) -> str:
    rows: list[str] = []
    for line in lines:
        row = line.strip()
        if not row:
            continue
        if not _SQUARE_LINE_RE.match(row):
            break
        rows.append(row.replace(_VARIATION_SELECTOR, ""))
    return "\n".join(rows)


# ---------------------------------------------------------------------------
# Public
# ---------------------------------------------------------------------------

def parse_share_text(text: str) -> ParsedShare:
    """
    Parse pasted share text.

    Raises MissingHeaderError when no line looks like a Wordle header and
    GarbledHeaderError when a line starts with "Wordle" but its number or
    score cannot be read. Nothing is returned on failure.
    """
    lines = _normalize(text or "").split("\n")

    header_index = None
    match = None
    for i, line in enumerate(lines):
        match = _HEADER_RE.search(line)
        if match:
            header_index = i
            break

    if header_index is None:
        garbled = next((line for line in lines if _HEADER_LIKE_RE.match(line)), None)
        if garbled is not None:
            raise GarbledHeaderError(garbled.strip())
        raise MissingHeaderError()

    header_line = lines[header_index].strip()
    puzzle_number = _parse_puzzle_number(match.group(1), header_line)
    score = _parse_score(match.group(2))

    return ParsedShare(
        puzzle_number=puzzle_number,
        score=score,
        grid=_extract_grid(lines[header_index + 1:]),
    )
