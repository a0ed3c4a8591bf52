"""
Line re-indenter for emitted branch code.

Purely textual: a line that starts with the closing marker is dedented
before it is printed, a line that ends with the opening marker indents
the lines after it. Emitters only put braces at line boundaries, which
is what makes this safe.
"""
from typing import List, Sequence


def indent_lines(
    lines: Sequence[str],
    open: str = "{",
    close: str = "}",
    indent_size: int = 2,
) -> List[str]:
    """
    Re-indent ``lines`` by brace depth.

    Args:
        lines: Lines to re-indent, with or without existing indentation
        open: Marker that increases depth when it ends a line
        close: Marker that decreases depth when it starts a line
        indent_size: Spaces per depth level

    Returns:
        New list of lines; blank lines stay empty
    """
    indent_level = 0
    indented: List[str] = []

    for line in lines:
        trimmed = line.strip()

        if trimmed.startswith(close):
            indent_level = max(0, indent_level - 1)

        indented.append(" " * (indent_level * indent_size) + trimmed if trimmed else "")

        if trimmed.endswith(open):
            indent_level += 1

    return indented


def reindent(text: str, open: str = "{", close: str = "}", indent_size: int = 2) -> str:
    return "\n".join(indent_lines(text.split("\n"), open, close, indent_size))
