"""
Opaque-text protector.

Branch-form source carries type syntax in three places a JavaScript
parser cannot read: ``if (...)`` conditions, ``return ...`` expressions
and the function's parameter list. Before parsing, each such region is
swapped for a placeholder (a string literal for expressions, an
identifier for parameters) and recorded in a ``PlaceholderTable``.

Conditions and returns are captured by the same bracket-balance scan, so
a region may span any number of lines. Each replacement is padded with
the newlines of the text it replaced, keeping line numbers of the
protected code equal to those of the source.
"""
import logging
import re
from dataclasses import dataclass
from typing import List, Tuple

from .errors import NoFunctionFound, UnclosedOpaqueRegion
from .scanner import (
    CLOSERS,
    OPENERS,
    find_matching,
    is_arrow,
    is_keyword_at,
    line_of,
    skip_literal,
    split_top_level,
)
from .types import PlaceholderTable

logger = logging.getLogger(__name__)

HEADER_PATTERN = re.compile(r"\bfunction\s+([A-Za-z_$][\w$]*)\s*\(")

# Next line starting with one of these continues a return expression
_CONTINUATION_START = tuple("|&?:.,=>[(")
# Current line ending with one of these continues a return expression
_CONTINUATION_END = tuple("|&?:,=(")


@dataclass
class ProtectedSource:
    """
    Source with every opaque region replaced.

    Attributes:
        code: Parseable JavaScript
        table: Placeholder token -> original text
        name: Function name
        parameters: Parameter placeholder tokens, in order
    """
    code: str
    table: PlaceholderTable
    name: str
    parameters: List[str]


def _padding(region: str) -> str:
    return "\n" * region.count("\n")


def _continues(text: str, newline: int) -> bool:
    """Whether a return expression goes on past the newline at ``newline``"""
    line_start = text.rfind("\n", 0, newline) + 1
    if text[line_start:newline].rstrip().endswith(_CONTINUATION_END):
        return True
    rest = text[newline + 1:].lstrip()
    return rest.startswith(_CONTINUATION_START) and not rest.startswith("//")


def return_region_end(text: str, start: int) -> int:
    """
    End index (exclusive) of a return expression starting at ``start``.

    The expression ends at the first ``;`` outside brackets, at a closer
    belonging to the enclosing block, or at a balanced line end that is
    not continued on the next line.

    Raises:
        UnclosedOpaqueRegion: input ends while brackets are still open
    """
    depth = 0
    i = start
    # A trailing line comment stays outside the region
    code_end = start
    n = len(text)
    while i < n:
        skipped = skip_literal(text, i)
        if skipped != i:
            if text[i] in "\"'`" or depth > 0:
                code_end = skipped
            i = skipped
            continue
        ch = text[i]
        if ch in OPENERS:
            depth += 1
        elif ch in CLOSERS and not is_arrow(text, i):
            if depth == 0:
                return i
            depth -= 1
        elif depth == 0 and ch == ";":
            return i
        elif depth == 0 and ch == "\n" and not _continues(text, i):
            return code_end
        if not ch.isspace():
            code_end = i + 1
        i += 1
    if depth > 0:
        raise UnclosedOpaqueRegion(
            "Return expression never closes its brackets",
            line=line_of(text, start),
            snippet=text[start:].strip(),
        )
    return code_end


def _protect_header(text: str, table: PlaceholderTable) -> Tuple[str, int, str, List[str]]:
    match = HEADER_PATTERN.search(text)
    if not match:
        raise NoFunctionFound(
            "No valid function was found. A function has to look something like this:\n"
            "function A(B extends string, C) {\n\n}",
            line=1,
        )
    open_index = match.end() - 1
    close = find_matching(text, open_index)
    if close < 0:
        raise UnclosedOpaqueRegion(
            "Parameter list is never closed",
            line=line_of(text, open_index),
            snippet=text[match.start():].split("\n", 1)[0],
        )

    raw = text[open_index + 1:close]
    tokens = []
    for parameter in split_top_level(raw, ","):
        if parameter.strip():
            tokens.append(table.add(parameter.strip(), line_of(text, open_index), prefix="param"))
    header = text[:open_index + 1] + ", ".join(tokens) + _padding(raw) + ")"
    return header, close + 1, match.group(1), tokens


def protect(text: str) -> ProtectedSource:
    """
    Replace conditions, returns and parameters of one function with placeholders.

    Raises:
        NoFunctionFound: no ``function Name(`` header in ``text``
        UnclosedOpaqueRegion: a region never reaches bracket balance
    """
    table = PlaceholderTable()
    header, i, name, parameters = _protect_header(text, table)
    out = [header]
    last = i
    n = len(text)

    while i < n:
        skipped = skip_literal(text, i)
        if skipped != i:
            i = skipped
            continue

        if is_keyword_at(text, i, "if"):
            paren = i + 2
            while paren < n and text[paren].isspace():
                paren += 1
            if paren < n and text[paren] == "(":
                close = find_matching(text, paren)
                if close < 0:
                    raise UnclosedOpaqueRegion(
                        "Condition is never closed",
                        line=line_of(text, i),
                        snippet=text[i:].split("\n", 1)[0],
                    )
                region = text[paren + 1:close]
                token = table.add(region.strip(), line_of(text, paren + 1))
                out.append(text[last:paren + 1])
                out.append(f'"{token}"{_padding(region)}')
                last = i = close
                continue

        elif is_keyword_at(text, i, "return"):
            start = i + len("return")
            while start < n and text[start] in " \t":
                start += 1
            if start < n and text[start] not in ";}\n\r":
                end = return_region_end(text, start)
                region = text[start:end]
                if region.strip():
                    token = table.add(region.strip(), line_of(text, start))
                    out.append(text[last:start])
                    out.append(f'"{token}"{_padding(region)}')
                    last = i = end
                    continue

        i += 1

    out.append(text[last:])
    logger.debug(f"Protected {len(table)} region(s) in function {name}")
    return ProtectedSource(code="".join(out), table=table, name=name, parameters=parameters)
