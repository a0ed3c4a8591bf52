"""
Declaration parser and splitter.

- Expression direction: finds top-level ``type Name<Params> = Body``
  aliases whose body holds a conditional type.
- Branch direction: cuts source into one chunk per ``function`` header.

Both are structural filters only; bodies are handed on as raw text.
"""
import logging
import re
from dataclasses import dataclass
from typing import List, Optional, Tuple

from .conditional import has_conditional
from .scanner import find_matching, is_ident_char, line_of, scan, split_top_level

logger = logging.getLogger(__name__)

TYPE_ALIAS_PATTERN = re.compile(r"(?:(?:export|declare)\s+)*type\s+([A-Za-z_$][\w$]*)\s*")

FUNCTION_HEADER_PATTERN = re.compile(r"^\s*(?:export\s+)?(?:async\s+)?function\b")
FUNCTION_NAME_PATTERN = re.compile(r"function\s+([A-Za-z_$][\w$]*)")

# A line starting like this after a newline ends a body that has no semicolon
_STATEMENT_START = re.compile(
    r"\s*(?:export|declare|type|interface|function|const|let|var|class|import|enum|namespace|module|abstract)\b"
)


@dataclass(frozen=True)
class TypeAliasUnit:
    """
    A type alias as it appears in the source.

    Attributes:
        name: Alias name
        parameters: Type parameter texts, trimmed, in order
        body: Raw text right of ``=``
        text: The whole declaration, byte-for-byte
        line: 1-based line of the declaration start
    """
    name: str
    parameters: Tuple[str, ...]
    body: str
    text: str
    line: int
    body_line: int

    @property
    def has_conditional(self) -> bool:
        return has_conditional(self.body)


@dataclass(frozen=True)
class FunctionUnit:
    """
    One function chunk of branch-form source.

    ``line_map[i]`` is the original source line of chunk line ``i + 1``;
    blank lines are not part of the chunk.
    """
    text: str
    line_map: Tuple[int, ...]

    @property
    def name(self) -> str:
        match = FUNCTION_NAME_PATTERN.search(self.text)
        return match.group(1) if match else "<anonymous>"

    @property
    def line(self) -> int:
        return self.line_map[0] if self.line_map else 1

    def source_line(self, chunk_line: Optional[int]) -> Optional[int]:
        """Original source line for a 1-based chunk line"""
        if chunk_line is None:
            return None
        if 1 <= chunk_line <= len(self.line_map):
            return self.line_map[chunk_line - 1]
        return self.line_map[-1] if self.line_map else chunk_line

    def snippet(self, first: int, last: Optional[int] = None) -> str:
        """Chunk text for 1-based chunk lines ``first``..``last``"""
        lines = self.text.split("\n")
        last = first if last is None else last
        return "\n".join(lines[max(first - 1, 0):last])


def split_parameters(text: str) -> Tuple[str, ...]:
    """Split a parameter list on top-level commas, trimmed, empties dropped"""
    return tuple(p.strip() for p in split_top_level(text, ",") if p.strip())


def _at_statement_start(source: str, index: int) -> bool:
    if index > 0 and is_ident_char(source[index - 1]):
        return False
    line_start = source.rfind("\n", 0, index) + 1
    before = source[line_start:index].strip()
    return not before or before.endswith(";") or before.endswith("}")


def _body_end(source: str, start: int) -> Tuple[int, int]:
    """``(body_end, declaration_end)`` for a body starting at ``start``"""
    for i, ch, depth in scan(source, start):
        if depth < 0:
            return i, i
        if depth != 0:
            continue
        if ch == ";":
            return i, i + 1
        if ch == "\n" and _STATEMENT_START.match(source, i + 1) and source[start:i].strip():
            return i, i
    end = len(source.rstrip())
    return end, end


def _read_alias(source: str, match: "re.Match") -> Tuple[Optional[TypeAliasUnit], int]:
    i = match.end()
    parameters: Tuple[str, ...] = ()
    if source.startswith("<", i):
        close = find_matching(source, i)
        if close < 0:
            return None, match.end()
        parameters = split_parameters(source[i + 1:close])
        i = close + 1
    while i < len(source) and source[i].isspace():
        i += 1
    if not source.startswith("=", i) or source.startswith("=>", i):
        return None, match.end()

    body_start = i + 1
    body_end, decl_end = _body_end(source, body_start)
    body = source[body_start:body_end]
    unit = TypeAliasUnit(
        name=match.group(1),
        parameters=parameters,
        body=body.strip(),
        text=source[match.start():decl_end].strip(),
        line=line_of(source, match.start()),
        body_line=line_of(source, body_start + len(body) - len(body.lstrip())),
    )
    return unit, max(decl_end, body_start)


def parse_type_aliases(source: str) -> List[TypeAliasUnit]:
    """All top-level type aliases in ``source``, in source order"""
    units: List[TypeAliasUnit] = []
    pos = 0
    while pos < len(source):
        match = None
        for i, ch, depth in scan(source, pos):
            if depth == 0 and ch in "edt" and _at_statement_start(source, i):
                match = TYPE_ALIAS_PATTERN.match(source, i)
                if match:
                    break
        if match is None:
            break
        unit, pos = _read_alias(source, match)
        if unit is not None:
            units.append(unit)
    return units


def find_conditional_aliases(source: str) -> List[TypeAliasUnit]:
    """Type aliases whose body holds a conditional; others are ignored"""
    units = [unit for unit in parse_type_aliases(source) if unit.has_conditional]
    logger.debug(f"Found {len(units)} conditional type alias(es)")
    return units


def split_functions(source: str) -> List[FunctionUnit]:
    """
    Cut ``source`` into one chunk per function header line.

    A chunk runs from its header to the line before the next header.
    Lines ahead of the first header belong to no chunk.
    """
    chunks: List[FunctionUnit] = []
    current: List[Tuple[int, str]] = []
    skipped = 0

    def flush():
        if current:
            chunks.append(FunctionUnit(
                text="\n".join(text for _, text in current),
                line_map=tuple(number for number, _ in current),
            ))

    for number, line in enumerate(source.split("\n"), start=1):
        if not line.strip():
            continue
        if FUNCTION_HEADER_PATTERN.match(line):
            flush()
            current = [(number, line)]
        elif current:
            current.append((number, line))
        else:
            skipped += 1
    flush()

    if skipped:
        logger.debug(f"Ignored {skipped} line(s) before the first function header")
    return chunks
