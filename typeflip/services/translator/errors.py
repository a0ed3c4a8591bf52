"""
Translation errors.

Every error is terminal for the declaration being translated. ``str(error)``
is the user-facing message: the CLI prints it and the preview panes show it
as-is, so it carries the source line and, where useful, the offending
snippet.
"""
from typing import Optional


class TranslationError(Exception):
    """Base class for all errors raised while translating a declaration"""

    def __init__(
        self,
        message: str,
        line: Optional[int] = None,
        snippet: Optional[str] = None,
        declaration: Optional[str] = None,
    ):
        self.message = message
        self.line = line
        self.snippet = snippet
        self.declaration = declaration
        super().__init__(message)

    @property
    def kind(self) -> str:
        return type(self).__name__

    def __str__(self) -> str:
        parts = []
        if self.declaration:
            parts.append(f"In declaration '{self.declaration}':")
        parts.append(self.message)
        if self.line is not None:
            parts.append(f"Line: {self.line}")
        if self.snippet:
            parts.append(self.snippet)
        return "\n".join(parts)


class MalformedGrouping(TranslationError):
    """A parenthesized wrapper does not hold a well-formed nested type"""


class NoTopLevelBranch(TranslationError):
    """A function body contains no if statement"""


class InvalidBranchBody(TranslationError):
    """A then/else branch is not exactly one return or one nested if"""


class UnsupportedTrailingShape(TranslationError):
    """Statements follow an if statement in a shape that cannot become an else value"""


class UnclosedOpaqueRegion(TranslationError):
    """A condition or return expression never reaches bracket balance"""


class NoDeclarationFound(TranslationError):
    """The input holds no type alias with a conditional type"""


class NoFunctionFound(TranslationError):
    """The input holds no function declaration"""


class BranchSyntaxError(TranslationError):
    """The branch form could not be parsed as JavaScript after protection"""
