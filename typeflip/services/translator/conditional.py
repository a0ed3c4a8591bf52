"""
Conditional type tree builder.

Splits a conditional type into ``check extends test ? then : else`` by
bracket depth alone and recurses into the two result positions. The four
pieces stay opaque text; only their boundaries are located.
"""
import logging
import re
from typing import Optional, Tuple, Union

from .errors import MalformedGrouping
from .scanner import (
    find_keyword,
    find_top_level,
    is_wrapped,
    scan,
    split_top_level,
    top_level_groups,
    unbalanced_index,
    line_of,
)
from .types import ConditionalNode, OpaqueText

logger = logging.getLogger(__name__)

_EXTENDS = "extends"

# ``name:`` / ``name?:`` in front of an object member type
_MEMBER_LABEL = re.compile(r"^\s*(?:readonly\s+)?[\w$]+\??\s*:")

ConditionalTree = Union[ConditionalNode, OpaqueText]


def split_conditional(text: str) -> Optional[Tuple[str, str, str, str]]:
    """
    Locate the four parts of a top-level conditional type.

    Returns:
        ``(check, extends, then, otherwise)`` raw slices, or None when
        ``text`` is not a conditional at its top level
    """
    ext = find_keyword(text, _EXTENDS)
    if ext < 0:
        return None
    question = find_top_level(text, "?", ext + len(_EXTENDS))
    if question < 0:
        return None

    # Nested conditionals in the true branch bring their own ``?``/``:`` pairs
    pending = 0
    colon = -1
    for i, ch, depth in scan(text, question + 1):
        if depth != 0:
            continue
        if ch == "?":
            pending += 1
        elif ch == ":":
            if pending == 0:
                colon = i
                break
            pending -= 1
    if colon < 0:
        return None

    return (
        text[:ext],
        text[ext + len(_EXTENDS):question],
        text[question + 1:colon],
        text[colon + 1:],
    )


def unwrap_grouping(text: str, line: Optional[int] = None) -> str:
    """
    Strip every layer of parentheses that wraps a whole conditional.

    A group around a plain type is a value in its own right and is kept.
    """
    stripped = text.strip()
    bad = unbalanced_index(stripped)
    if bad is not None:
        raise MalformedGrouping(
            f"Unbalanced '{stripped[bad]}' in type",
            line=None if line is None else line_of(stripped, bad, line),
            snippet=stripped,
        )
    inner = stripped
    while is_wrapped(inner):
        inner = inner[1:-1].strip()
        if not inner:
            raise MalformedGrouping("Empty parenthesized type", line=line, snippet=stripped)
    if split_conditional(inner) is None:
        return stripped
    return inner


def build_conditional(text: str, line: Optional[int] = None) -> ConditionalTree:
    """Build a conditional tree from type text; plain types become leaves"""
    body = unwrap_grouping(text, line)
    parts = split_conditional(body)
    if parts is None:
        return OpaqueText(body, line)

    check, extends, then, otherwise = parts
    offsets = [0, len(check) + len(_EXTENDS), len(check) + len(_EXTENDS) + len(extends) + 1]
    offsets.append(offsets[2] + len(then) + 1)

    def at(offset: int) -> Optional[int]:
        return None if line is None else line_of(body, offset, line)

    return ConditionalNode(
        check=OpaqueText(check.strip(), at(offsets[0])),
        extends=OpaqueText(extends.strip(), at(offsets[1])),
        then=build_conditional(then, at(offsets[2])),
        otherwise=build_conditional(otherwise, at(offsets[3])),
    )


def _member_types(inner: str, bracket: str):
    for piece in split_top_level(inner, ",;"):
        if bracket == "{":
            piece = _MEMBER_LABEL.sub("", piece, count=1)
        yield piece


def find_nested_conditional(text: str) -> Optional[str]:
    """
    Leftmost outermost conditional inside a non-conditional type, e.g. the
    argument of ``Wrap<T extends X ? A : B>``.
    """
    for start, close in top_level_groups(text):
        inner = text[start + 1:close]
        for piece in _member_types(inner, text[start]):
            candidate = piece.strip()
            if not candidate:
                continue
            if split_conditional(candidate) is not None:
                return candidate
            if is_wrapped(candidate):
                unwrapped = candidate[1:-1].strip()
                if split_conditional(unwrapped) is not None:
                    return unwrapped
            nested = find_nested_conditional(candidate)
            if nested is not None:
                return nested
    return None


def has_conditional(text: str) -> bool:
    """True when ``text`` holds a conditional type at any bracket depth"""
    stripped = text.strip()
    if unbalanced_index(stripped) is not None:
        # Still worth reporting: translation will name the bad bracket
        return find_keyword(stripped, _EXTENDS, top_level=False) >= 0 and "?" in stripped
    if split_conditional(stripped) is not None:
        return True
    return find_nested_conditional(stripped) is not None


def root_conditional(text: str, line: Optional[int] = None) -> ConditionalTree:
    """
    Conditional tree for a type alias body.

    When the body is not itself conditional, the first conditional nested
    inside it is used and the surrounding type is left out.
    """
    tree = build_conditional(text, line)
    if isinstance(tree, ConditionalNode):
        return tree
    nested = find_nested_conditional(tree.text)
    if nested is None:
        return tree
    logger.warning(f"Only the nested conditional of '{tree.text}' is translated")
    return build_conditional(nested, line)


__all__ = [
    "split_conditional",
    "unwrap_grouping",
    "build_conditional",
    "find_nested_conditional",
    "has_conditional",
    "root_conditional",
]
