# topmark:header:start
#
#   project      : TokSwap
#   file         : engine.py
#   file_relpath : src/tokswap/pipeline/engine.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Occurrence engine: literal, case-sensitive, non-overlapping matching.

All functions here are pure. A scan runs left to right and resumes after the
end of each match, so ``"aaa"`` holds one ``"aa"`` and ``"devmodedevmode"``
holds two ``"devmode"``. Replacement is a single pass: text spliced in is
never rescanned, even when the replacement contains the token.

An empty token matches nothing (count 0, text unchanged).
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class LineRecord:
    """Result of transforming one line.

    Attributes:
        number (int): One-based line number.
        original (str): Line text as read (terminator stripped).
        transformed (str): Line text with every match replaced.
        occurrences (int): Number of non-overlapping matches in ``original``.
    """

    number: int
    original: str
    transformed: str
    occurrences: int

    @property
    def matched(self) -> bool:
        """Return True if the line contained at least one match."""
        return self.occurrences > 0


def count_non_overlapping(text: str, token: str) -> int:
    """Count non-overlapping occurrences of ``token`` in ``text``.

    Args:
        text (str): Text to scan.
        token (str): Literal token. Empty tokens count as zero matches.

    Returns:
        int: Number of matches.
    """
    if not token:
        return 0
    count: int = 0
    pos: int = text.find(token)
    while pos != -1:
        count += 1
        pos = text.find(token, pos + len(token))
    return count


def replace_all(text: str, token: str, replacement: str) -> str:
    """Replace every non-overlapping occurrence of ``token`` in ``text``.

    Args:
        text (str): Text to rewrite.
        token (str): Literal token. Empty tokens leave ``text`` unchanged.
        replacement (str): Literal text spliced in for each match.

    Returns:
        str: The rewritten text; unmatched text is preserved in order.
    """
    if not token:
        return text
    parts: list[str] = []
    start: int = 0
    pos: int = text.find(token)
    while pos != -1:
        parts.append(text[start:pos])
        parts.append(replacement)
        start = pos + len(token)
        pos = text.find(token, start)
    if not parts:
        return text
    parts.append(text[start:])
    return "".join(parts)


def transform_line(number: int, text: str, token: str, replacement: str) -> LineRecord:
    """Count and replace ``token`` in one line.

    Args:
        number (int): One-based line number.
        text (str): Line text without its terminator.
        token (str): Literal token to replace.
        replacement (str): Literal replacement.

    Returns:
        LineRecord: The per-line result.
    """
    occurrences: int = count_non_overlapping(text, token)
    transformed: str = replace_all(text, token, replacement) if occurrences else text
    return LineRecord(
        number=number,
        original=text,
        transformed=transformed,
        occurrences=occurrences,
    )
