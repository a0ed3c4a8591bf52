"""
Data model for the translator.

Both tree shapes are immutable: nodes are built once by a parser/walker and
only read afterwards. Leaves are ``OpaqueText`` values which are copied
verbatim and never inspected.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Optional, Tuple, Union


# Else value used when an if statement has no else and nothing follows it
BOTTOM_SENTINEL = "never"


class TranslationMode(str, Enum):
    """How batch entry points treat a failing declaration"""
    STRICT = "strict"      # Raise on the first failing declaration
    TOLERANT = "tolerant"  # Replace the failing declaration with an error comment


@dataclass(frozen=True)
class OpaqueText:
    """
    An unparsed piece of source text.

    Attributes:
        text: The exact text, stripped of surrounding whitespace
        line: Source line the text starts on, when known
    """
    text: str
    line: Optional[int] = None

    def __str__(self) -> str:
        return self.text


@dataclass(frozen=True)
class ConditionalNode:
    """``check extends extends ? then : otherwise``"""
    check: OpaqueText
    extends: OpaqueText
    then: Union["ConditionalNode", OpaqueText]
    otherwise: Union["ConditionalNode", OpaqueText]

    @property
    def is_else_if(self) -> bool:
        return isinstance(self.otherwise, ConditionalNode)


@dataclass(frozen=True)
class BranchNode:
    """
    ``if (condition) { then } else { otherwise }``

    ``implicit_else`` is set when the source had no else clause and the
    else value came from a trailing return or the bottom sentinel.
    """
    condition: OpaqueText
    then: Union["BranchNode", OpaqueText]
    otherwise: Union["BranchNode", OpaqueText]
    implicit_else: bool = False

    @property
    def is_else_if(self) -> bool:
        return isinstance(self.otherwise, BranchNode)


@dataclass(frozen=True)
class Declaration:
    """A named, parameterized declaration with a conditional or branch body"""
    name: str
    parameters: Tuple[str, ...]
    body: Union[ConditionalNode, BranchNode, OpaqueText]
    line: Optional[int] = None


@dataclass
class PlaceholderTable:
    """
    Ordered mapping from synthetic tokens to the text they stand in for.

    Tokens come from a per-table counter, so two regions never share a
    token no matter where they sit in the source. A table lives for the
    translation of one declaration.
    """
    entries: Dict[str, OpaqueText] = field(default_factory=dict)
    _next: int = 0

    def add(self, text: str, line: Optional[int] = None, prefix: str = "opaque") -> str:
        token = f"__{prefix}_{self._next}__"
        self._next += 1
        self.entries[token] = OpaqueText(text, line)
        return token

    def lookup(self, token: str) -> Optional[OpaqueText]:
        return self.entries.get(token)

    def restore(self, text: str) -> str:
        """Put original text back in place of any token (quoted or bare) in ``text``"""
        for token, original in self.entries.items():
            text = text.replace(f'"{token}"', original.text).replace(token, original.text)
        return text

    def __len__(self) -> int:
        return len(self.entries)
