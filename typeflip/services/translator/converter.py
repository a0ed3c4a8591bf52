"""
Translator entry points.

Ties the declaration parser/splitter to the two walkers and applies the
batch failure policy: in strict mode the first failing declaration
raises, in tolerant mode it is replaced by a comment holding the error.
Declarations are always translated independently of each other.
"""
import logging
from typing import Callable, List, TypeVar, Union

from .conditional import root_conditional
from .declarations import (
    FunctionUnit,
    TypeAliasUnit,
    find_conditional_aliases,
    parse_type_aliases,
    split_functions,
)
from .errors import NoDeclarationFound, NoFunctionFound, TranslationError
from .fn2ternary import Fn2TernaryConverter
from .ternary2fn import Ternary2FnConverter
from .types import BOTTOM_SENTINEL, Declaration, TranslationMode

logger = logging.getLogger(__name__)

Unit = TypeVar("Unit", TypeAliasUnit, FunctionUnit)


def annotate_failure(error: Exception) -> str:
    """Render an error as a ``//`` comment block standing in for a declaration"""
    return "\n".join(f"// {line}" if line else "//" for line in str(error).split("\n"))


class TernaryTranslator:
    """
    Bidirectional translator between conditional type aliases and
    function-like if/else code.

    Example:
        translator = TernaryTranslator()
        translator.expression_to_branches("type A<T> = T extends string ? true : false;")
        translator.branches_to_expressions(
            "function B(T) { if (T extends string) { return 1; } return 2; }"
        )
    """

    def __init__(self, bottom_sentinel: str = BOTTOM_SENTINEL, indent_size: int = 2):
        self.bottom_sentinel = bottom_sentinel
        self.indent_size = indent_size
        self.ternary2fn = Ternary2FnConverter(indent_size=indent_size)
        self.fn2ternary = Fn2TernaryConverter(bottom=bottom_sentinel, indent_size=indent_size)

    # ------------------------------------------------------------------ #
    # Expression direction
    # ------------------------------------------------------------------ #

    def extract_conditional_declarations(self, source: str) -> List[str]:
        """Raw text of every type alias holding a conditional type, in source order"""
        return [unit.text for unit in find_conditional_aliases(source)]

    def type_alias_tree(self, unit: TypeAliasUnit) -> Declaration:
        return Declaration(
            name=unit.name,
            parameters=unit.parameters,
            body=root_conditional(unit.body, unit.body_line),
            line=unit.line,
        )

    def translate_type_alias(self, unit: Union[TypeAliasUnit, str]) -> str:
        """
        Translate one type alias to branch form.

        Raises:
            NoDeclarationFound: ``unit`` is text without any type alias
        """
        if isinstance(unit, str):
            units = parse_type_aliases(unit)
            if not units:
                raise NoDeclarationFound("No type alias was found.", line=1)
            unit = units[0]
        return self.ternary2fn.convert(self.type_alias_tree(unit))

    def expression_to_branches(
        self,
        source: str,
        mode: TranslationMode = TranslationMode.STRICT,
    ) -> List[str]:
        """Translate every conditional type alias in ``source`` to branch form"""
        units = find_conditional_aliases(source)
        return self._batch(units, self.translate_type_alias, mode)

    # ------------------------------------------------------------------ #
    # Branch direction
    # ------------------------------------------------------------------ #

    def translate_function(self, unit: Union[FunctionUnit, str]) -> str:
        """
        Translate one function to a conditional type alias.

        Raises:
            NoFunctionFound: ``unit`` is text without any function header
        """
        if isinstance(unit, str):
            units = split_functions(unit)
            if not units:
                raise NoFunctionFound("No valid function was found.", line=1)
            unit = units[0]
        return self.fn2ternary.convert(unit)

    def branches_to_expression_list(
        self,
        source: str,
        mode: TranslationMode = TranslationMode.STRICT,
    ) -> List[str]:
        """Translate every function in ``source``; one entry per function"""
        return self._batch(split_functions(source), self.translate_function, mode)

    def branches_to_expressions(
        self,
        source: str,
        mode: TranslationMode = TranslationMode.STRICT,
    ) -> str:
        """Translate every function in ``source``, joined with blank lines"""
        return "\n\n".join(self.branches_to_expression_list(source, mode))

    # ------------------------------------------------------------------ #

    def _batch(
        self,
        units: List[Unit],
        translate: Callable[[Unit], str],
        mode: TranslationMode,
    ) -> List[str]:
        results: List[str] = []
        for unit in units:
            try:
                results.append(translate(unit))
            except TranslationError as e:
                if e.declaration is None:
                    e.declaration = unit.name
                if TranslationMode(mode) == TranslationMode.STRICT:
                    raise
                logger.warning(f"Translation of {unit.name} failed: {e.message}")
                results.append(annotate_failure(e))
        return results


_default_translator = TernaryTranslator()


def extract_conditional_declarations(source: str) -> List[str]:
    return _default_translator.extract_conditional_declarations(source)


def expression_to_branches(source: str, mode: TranslationMode = TranslationMode.STRICT) -> List[str]:
    return _default_translator.expression_to_branches(source, mode)


def branches_to_expression_list(source: str, mode: TranslationMode = TranslationMode.STRICT) -> List[str]:
    return _default_translator.branches_to_expression_list(source, mode)


def branches_to_expressions(source: str, mode: TranslationMode = TranslationMode.STRICT) -> str:
    return _default_translator.branches_to_expressions(source, mode)
