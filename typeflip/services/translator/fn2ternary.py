"""
Branch function to conditional type converter.

Protects the opaque regions of a function, parses it with esprima, walks
the if/else statements into a ``BranchNode`` tree and renders the tree as
a nested conditional type alias.

Shape rules enforced by the walk:
- a then/else branch is exactly one return or one nested if, either bare
  or as the only statement of a block
- an if without else takes its else value from a single trailing return,
  or the bottom sentinel when nothing follows it; for an else-if chain this
  applies to the last test of the chain
"""
import logging
from typing import Any, Dict, List, Optional, Sequence, Union

from .declarations import FunctionUnit
from .errors import (
    InvalidBranchBody,
    NoFunctionFound,
    NoTopLevelBranch,
    TranslationError,
    UnsupportedTrailingShape,
)
from .parser import JSParser
from .protector import ProtectedSource, protect
from .types import BOTTOM_SENTINEL, BranchNode, Declaration, OpaqueText

logger = logging.getLogger(__name__)

BranchTree = Union[BranchNode, OpaqueText]

SINGLE_STATEMENT_MESSAGE = (
    "There needs to be EXACTLY ONE return inside of if, else if or else blocks. NOTHING else."
)


class BranchWalker:
    """
    Walks the esprima AST of one protected function.

    Lines in raised errors are lines of the original source, and snippets
    echo the original (unprotected) text.
    """

    def __init__(self, protected: ProtectedSource, unit: FunctionUnit, bottom: str = BOTTOM_SENTINEL):
        self.protected = protected
        self.unit = unit
        self.bottom = bottom

    def walk(self, function: Dict[str, Any]) -> Declaration:
        statements = JSParser.get_statements(function.get('body'))
        first_if = next(
            (k for k, stmt in enumerate(statements) if stmt.get('type') == 'IfStatement'),
            None,
        )
        if first_if is None:
            raise NoTopLevelBranch("No if statement found.", **self._where(function))
        if first_if > 0:
            raise InvalidBranchBody(
                "Only an if statement (and one trailing return) may appear in the function body.",
                **self._where(statements[0]),
            )

        body = self._if(statements[0], statements[1:])
        parameters = tuple(self._parameter(p) for p in function.get('params') or [])
        return Declaration(
            name=self.protected.name,
            parameters=parameters,
            body=body,
            line=self.unit.line,
        )

    def _if(self, node: Dict[str, Any], siblings: Sequence[Dict[str, Any]] = ()) -> BranchNode:
        condition = self._opaque(node['test'])
        then = self._reduce(node['consequent'])
        alternate = node.get('alternate')

        if alternate is None:
            return BranchNode(condition, then, self._implicit_else(node, siblings), implicit_else=True)

        if alternate.get('type') == 'IfStatement':
            # The last test of an else-if chain may take a trailing return as its else
            return BranchNode(condition, then, self._if(alternate, siblings))

        if siblings:
            raise UnsupportedTrailingShape(
                "Nothing may follow an if statement that has an else branch.",
                **self._where(siblings[0]),
            )
        return BranchNode(condition, then, self._reduce(alternate))

    def _implicit_else(self, node: Dict[str, Any], siblings: Sequence[Dict[str, Any]]) -> OpaqueText:
        if not siblings:
            return OpaqueText(self.bottom)
        sibling = siblings[0]
        if len(siblings) == 1 and sibling.get('type') == 'ReturnStatement' and sibling.get('argument'):
            return self._opaque(sibling['argument'])
        raise UnsupportedTrailingShape(
            "An if statement without else may only be followed by EXACTLY ONE return.",
            line=self.unit.source_line(JSParser.end_line(node)),
            snippet=self._snippet(node, siblings[-1]),
        )

    def _reduce(self, statement: Dict[str, Any]) -> BranchTree:
        """Reduce a then/else branch to its single return value or nested if"""
        kind = statement.get('type')
        if kind == 'BlockStatement':
            inner = JSParser.get_statements(statement)
            if len(inner) != 1:
                raise InvalidBranchBody(SINGLE_STATEMENT_MESSAGE, **self._where(statement))
            only = inner[0]
            if only.get('type') not in ('ReturnStatement', 'IfStatement'):
                raise InvalidBranchBody(
                    "Expected a single return or a nested if in the block.",
                    **self._where(statement),
                )
            return self._reduce(only)
        if kind == 'ReturnStatement':
            argument = statement.get('argument')
            if argument is None:
                raise InvalidBranchBody("A return needs a value.", **self._where(statement))
            return self._opaque(argument)
        if kind == 'IfStatement':
            return self._if(statement)
        raise InvalidBranchBody(SINGLE_STATEMENT_MESSAGE, **self._where(statement))

    def _opaque(self, node: Dict[str, Any]) -> OpaqueText:
        value = node.get('value')
        if node.get('type') == 'Literal' and isinstance(value, str):
            original = self.protected.table.lookup(value)
            if original is not None:
                return OpaqueText(original.text, self.unit.source_line(original.line))
        text = self.protected.table.restore(JSParser.source_of(node, self.protected.code))
        return OpaqueText(text.strip(), self.unit.source_line(JSParser.start_line(node)))

    def _parameter(self, node: Dict[str, Any]) -> str:
        if node.get('type') == 'Identifier':
            original = self.protected.table.lookup(node.get('name', ''))
            if original is not None:
                return original.text
        return self.protected.table.restore(JSParser.source_of(node, self.protected.code)).strip()

    def _snippet(self, first: Dict[str, Any], last: Optional[Dict[str, Any]] = None) -> str:
        last = first if last is None else last
        return self.unit.snippet(JSParser.start_line(first) or 1, JSParser.end_line(last))

    def _where(self, node: Dict[str, Any]) -> Dict[str, Any]:
        return {
            'line': self.unit.source_line(JSParser.start_line(node)),
            'snippet': self._snippet(node),
        }


def render_conditional(node: BranchTree, depth: int = 0, indent_size: int = 2) -> str:
    """
    Render a branch tree as ``cond\\n? then\\n: else``.

    Nested conditions, in either result position, sit one level deeper.
    """
    if isinstance(node, OpaqueText):
        return node.text
    indentation = " " * (indent_size * (depth + 1))
    then = render_conditional(node.then, depth + 1, indent_size)
    otherwise = render_conditional(node.otherwise, depth + 1, indent_size)
    return f"{node.condition.text}\n{indentation}? {then}\n{indentation}: {otherwise}"


def render_type_alias(declaration: Declaration, indent_size: int = 2) -> str:
    parameters = ", ".join(declaration.parameters)
    head = f"type {declaration.name}<{parameters}>" if parameters else f"type {declaration.name}"
    return f"{head} = {render_conditional(declaration.body, 0, indent_size)};"


class Fn2TernaryConverter:
    """
    Converts function-like branch code back to conditional type aliases.

    Example:
        converter = Fn2TernaryConverter()
        converter.convert(split_functions(code)[0])
        # type B<T> = T extends string
        #   ? 1
        #   : 2;
    """

    def __init__(self, bottom: str = BOTTOM_SENTINEL, indent_size: int = 2):
        self.bottom = bottom
        self.indent_size = indent_size

    def to_tree(self, unit: FunctionUnit) -> Declaration:
        """Protect, parse and walk one function chunk"""
        try:
            protected = protect(unit.text)
            ast = JSParser.parse(protected.code)
        except TranslationError as e:
            # Protector and parser count chunk lines
            e.line = unit.source_line(e.line)
            if e.snippet is None and e.line is not None:
                e.snippet = _source_line(unit, e.line)
            raise

        function = JSParser.find_function(ast)
        if function is None:
            raise NoFunctionFound("No valid function was found.", line=unit.line)
        extra = [n for n in JSParser.get_statements(ast) if n is not function]
        if extra:
            logger.warning(f"Ignoring {len(extra)} statement(s) after function {protected.name}")
        return BranchWalker(protected, unit, self.bottom).walk(function)

    def convert(self, unit: FunctionUnit) -> str:
        return render_type_alias(self.to_tree(unit), self.indent_size)


def _source_line(unit: FunctionUnit, line: int) -> Optional[str]:
    for k, number in enumerate(unit.line_map):
        if number == line:
            return unit.text.split("\n")[k]
    return None


__all__ = [
    "BranchWalker",
    "Fn2TernaryConverter",
    "render_conditional",
    "render_type_alias",
]
