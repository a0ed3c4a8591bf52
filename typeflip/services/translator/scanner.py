"""
Bracket-aware text scanning.

These helpers only locate substring boundaries: matching brackets,
top-level separators and keyword offsets. Text is never parsed as a type
or expression grammar. String literals, template literals and comments
are skipped as atomic units.
"""
import re
from typing import Iterator, List, Optional, Tuple

OPENERS = {"(": ")", "[": "]", "{": "}", "<": ">"}
CLOSERS = {")": "(", "]": "[", "}": "{", ">": "<"}
QUOTES = ('"', "'", "`")

_IDENT_CHAR = re.compile(r"[\w$]")


def is_ident_char(ch: str) -> bool:
    return bool(ch) and bool(_IDENT_CHAR.match(ch))


def skip_literal(text: str, index: int) -> int:
    """
    Skip a string literal or comment starting at ``index``.

    Returns the index just past it, or ``index`` itself when no literal
    starts there. Unterminated literals run to the end of the text.
    """
    ch = text[index]
    if ch in QUOTES:
        i = index + 1
        while i < len(text):
            if text[i] == "\\":
                i += 2
                continue
            if text[i] == ch:
                return i + 1
            i += 1
        return len(text)
    if text.startswith("//", index):
        end = text.find("\n", index)
        return len(text) if end < 0 else end
    if text.startswith("/*", index):
        end = text.find("*/", index + 2)
        return len(text) if end < 0 else end + 2
    return index


def is_arrow(text: str, index: int) -> bool:
    """True when the ``>`` at ``index`` belongs to ``=>``"""
    return text[index] == ">" and index > 0 and text[index - 1] == "="


def scan(text: str, start: int = 0) -> Iterator[Tuple[int, str, int]]:
    """
    Yield ``(index, char, depth)`` for every character outside literals.

    A bracket reports the depth it sits at, so an opener and its matching
    closer carry the same depth. Depth may go negative on a stray closer;
    callers decide what that means.
    """
    depth = 0
    i = start
    n = len(text)
    while i < n:
        skipped = skip_literal(text, i)
        if skipped != i:
            i = skipped
            continue
        ch = text[i]
        if ch in OPENERS:
            yield i, ch, depth
            depth += 1
        elif ch in CLOSERS and not is_arrow(text, i):
            depth -= 1
            yield i, ch, depth
        else:
            yield i, ch, depth
        i += 1


def find_matching(text: str, open_index: int) -> int:
    """Index of the bracket closing the one at ``open_index``, or -1"""
    for i, ch, depth in scan(text, open_index):
        if i > open_index and depth == 0 and ch in CLOSERS and not is_arrow(text, i):
            return i
    return -1


def find_top_level(text: str, char: str, start: int = 0) -> int:
    for i, ch, depth in scan(text, start):
        if depth == 0 and ch == char:
            return i
    return -1


def is_keyword_at(text: str, index: int, keyword: str) -> bool:
    if not text.startswith(keyword, index):
        return False
    before = text[index - 1] if index > 0 else ""
    end = index + len(keyword)
    after = text[end] if end < len(text) else ""
    return not is_ident_char(before) and not is_ident_char(after)


def find_keyword(text: str, keyword: str, start: int = 0, top_level: bool = True) -> int:
    for i, ch, depth in scan(text, start):
        if top_level and depth != 0:
            continue
        if ch == keyword[0] and is_keyword_at(text, i, keyword):
            return i
    return -1


def split_top_level(text: str, separators: str = ",") -> List[str]:
    """Split ``text`` on separators that sit outside every bracket pair"""
    pieces = []
    last = 0
    for i, ch, depth in scan(text):
        if depth == 0 and ch in separators:
            pieces.append(text[last:i])
            last = i + 1
    pieces.append(text[last:])
    return pieces


def top_level_groups(text: str) -> Iterator[Tuple[int, int]]:
    """Yield ``(open, close)`` indices of each outermost bracket pair"""
    for i, ch, depth in scan(text):
        if depth == 0 and ch in OPENERS:
            close = find_matching(text, i)
            if close > i:
                yield i, close


def is_wrapped(text: str) -> bool:
    """True when the stripped ``text`` is exactly one parenthesized group"""
    return text.startswith("(") and find_matching(text, 0) == len(text) - 1


def unbalanced_index(text: str) -> Optional[int]:
    """Index of the first bracket without a partner, or None when balanced"""
    stack = []
    for i, ch, _ in scan(text):
        if ch in OPENERS:
            stack.append(i)
        elif ch in CLOSERS and not is_arrow(text, i):
            if not stack:
                return i
            stack.pop()
    return stack[0] if stack else None


def line_of(text: str, index: int, first_line: int = 1) -> int:
    return first_line + text.count("\n", 0, index)
