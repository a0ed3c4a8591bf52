"""
Conditional Type <-> Branch Function Translator (Bidirectional)

Translates between TypeScript conditional type aliases and function-like
if/else code that spells out the same decisions:

    type A<T> = T extends string ? true : false;

    function A(T) {
      if (T extends string) {
        return true;
      } else {
        return false;
      }
    }

- Ternary2FnConverter: conditional type alias -> branch function
- Fn2TernaryConverter: branch function -> conditional type alias
- TernaryTranslator: batch entry points for both directions

Key Assumption: conditions, return values and parameters are opaque text.
They are copied verbatim and never type-checked or evaluated.
"""

from .converter import (
    TernaryTranslator,
    annotate_failure,
    branches_to_expression_list,
    branches_to_expressions,
    expression_to_branches,
    extract_conditional_declarations,
)
from .errors import (
    BranchSyntaxError,
    InvalidBranchBody,
    MalformedGrouping,
    NoDeclarationFound,
    NoFunctionFound,
    NoTopLevelBranch,
    TranslationError,
    UnclosedOpaqueRegion,
    UnsupportedTrailingShape,
)
from .fn2ternary import Fn2TernaryConverter
from .reindent import indent_lines
from .ternary2fn import Ternary2FnConverter
from .types import (
    BOTTOM_SENTINEL,
    BranchNode,
    ConditionalNode,
    Declaration,
    OpaqueText,
    PlaceholderTable,
    TranslationMode,
)

__all__ = [
    "TernaryTranslator",
    "Ternary2FnConverter",
    "Fn2TernaryConverter",
    "annotate_failure",
    "extract_conditional_declarations",
    "expression_to_branches",
    "branches_to_expressions",
    "branches_to_expression_list",
    "indent_lines",
    "TranslationError",
    "MalformedGrouping",
    "NoTopLevelBranch",
    "InvalidBranchBody",
    "UnsupportedTrailingShape",
    "UnclosedOpaqueRegion",
    "NoDeclarationFound",
    "NoFunctionFound",
    "BranchSyntaxError",
    "BOTTOM_SENTINEL",
    "BranchNode",
    "ConditionalNode",
    "Declaration",
    "OpaqueText",
    "PlaceholderTable",
    "TranslationMode",
]

__version__ = "1.0.0"
