"""
JavaScript parser wrapper using esprima.

Parses protected branch-form source to an ESTree-compatible AST made of
plain dictionaries.
"""
from typing import Dict, Any, List, Optional
import esprima

from .errors import BranchSyntaxError


class JSParser:
    """
    JavaScript parser that converts protected branch code to an AST.

    Every opaque region has been replaced before parsing, so the input is
    plain JavaScript: a function whose body holds if/else statements and
    returns of string literals.
    """

    @staticmethod
    def parse(code: str) -> Dict[str, Any]:
        """
        Parse JavaScript code to AST.

        Args:
            code: JavaScript code to parse

        Returns:
            AST as a dictionary, with ``loc`` and ``range`` on every node

        Raises:
            BranchSyntaxError: If parsing fails
        """
        options = {
            'tolerant': False,
            'range': True,
            'loc': True,
        }

        try:
            ast = esprima.parseScript(code, options=options)
        except esprima.Error as e:
            raise BranchSyntaxError(
                getattr(e, 'description', None) or str(e),
                line=getattr(e, 'lineNumber', None),
            )
        return JSParser._node_to_dict(ast)

    @staticmethod
    def _node_to_dict(node: Any) -> Any:
        """
        Convert esprima node to dictionary.

        Args:
            node: Esprima AST node

        Returns:
            Dictionary representation of the node
        """
        if node is None:
            return None

        if isinstance(node, list):
            return [JSParser._node_to_dict(item) for item in node]

        if not hasattr(node, '__dict__'):
            return node

        result = {}
        for key, value in node.__dict__.items():
            if key.startswith('_'):
                continue
            if isinstance(value, list):
                result[key] = [JSParser._node_to_dict(item) for item in value]
            elif hasattr(value, '__dict__'):
                result[key] = JSParser._node_to_dict(value)
            else:
                result[key] = value

        return result

    @staticmethod
    def get_statements(node: Dict[str, Any]) -> List[Dict[str, Any]]:
        """Statements of a Program or BlockStatement node"""
        return node.get('body', []) if node else []

    @staticmethod
    def start_line(node: Dict[str, Any]) -> Optional[int]:
        loc = node.get('loc') or {}
        return (loc.get('start') or {}).get('line')

    @staticmethod
    def end_line(node: Dict[str, Any]) -> Optional[int]:
        loc = node.get('loc') or {}
        return (loc.get('end') or {}).get('line')

    @staticmethod
    def source_of(node: Dict[str, Any], code: str) -> str:
        """Exact source slice a node was parsed from"""
        start, end = node.get('range') or (0, 0)
        return code[start:end]

    @staticmethod
    def find_function(ast: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """First top-level function declaration of a program"""
        for node in JSParser.get_statements(ast):
            if node.get('type') == 'FunctionDeclaration':
                return node
        return None
