"""
Conditional type to branch function converter.

Walks a conditional tree and emits the equivalent chain of
``if``/``else if``/``else`` statements, one ``return`` per terminal
branch. Emission is line-oriented and unindented; ``indent_lines``
produces the final layout.
"""
from typing import List, Union

from .reindent import indent_lines
from .types import ConditionalNode, Declaration, OpaqueText


class Ternary2FnConverter:
    """
    Converts conditional type declarations to function-like branch code.

    Example:
        converter = Ternary2FnConverter()
        converter.convert(Declaration("A", ("T",), tree))
        # function A(T) {
        #   if (T extends string) {
        #     return true;
        #   } else {
        #     return false;
        #   }
        # }
    """

    def __init__(self, indent_size: int = 2):
        self.indent_size = indent_size

    def convert(self, declaration: Declaration) -> str:
        store: List[str] = [f"function {declaration.name}({', '.join(declaration.parameters)}) {{\n"]
        self._traverse(declaration.body, store)
        store.append("\n}")
        lines = "".join(store).split("\n")
        return "\n".join(indent_lines(lines, "{", "}", self.indent_size))

    def _traverse(self, node: Union[ConditionalNode, OpaqueText], store: List[str]):
        if isinstance(node, ConditionalNode):
            store.append(f"if ({node.check.text} extends {node.extends.text}) {{\n")
            self._traverse(node.then, store)
            if node.is_else_if:
                # Shares the closing brace with the whole chain
                store.append("\n} else ")
                self._traverse(node.otherwise, store)
            else:
                store.append(f"\n}} else {{\nreturn {node.otherwise.text};\n}}")
        else:
            store.append(f"return {node.text};")
