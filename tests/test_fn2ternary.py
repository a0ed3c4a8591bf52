import pytest

from typeflip.services.translator import (
    BranchNode,
    BranchSyntaxError,
    Fn2TernaryConverter,
    InvalidBranchBody,
    NoTopLevelBranch,
    OpaqueText,
    UnclosedOpaqueRegion,
    UnsupportedTrailingShape,
)
from typeflip.services.translator.declarations import split_functions


def to_tree(source, bottom="never"):
    return Fn2TernaryConverter(bottom=bottom).to_tree(split_functions(source)[0])


def convert(source, bottom="never"):
    return Fn2TernaryConverter(bottom=bottom).convert(split_functions(source)[0])


class TestShapes:

    def test_trailing_return_becomes_else(self):
        source = "function B(T) { if (T extends string) { return 1; } return 2; }"
        assert convert(source) == "type B<T> = T extends string\n  ? 1\n  : 2;"

    def test_trailing_return_is_consumed(self):
        declaration = to_tree("function B(T) { if (T extends string) { return 1; } return 2; }")
        assert declaration.body.implicit_else
        assert declaration.body.otherwise == OpaqueText("2", 1)

    def test_missing_else_uses_bottom_sentinel(self):
        source = "function C(T) {\n  if (T extends string) {\n    return 1;\n  }\n}"
        assert convert(source) == "type C<T> = T extends string\n  ? 1\n  : never;"
        assert convert(source, bottom="unknown").endswith(": unknown;")

    def test_explicit_else(self):
        source = (
            "function A(T) {\n"
            "  if (T extends string) {\n"
            "    return true;\n"
            "  } else {\n"
            "    return false;\n"
            "  }\n"
            "}"
        )
        declaration = to_tree(source)
        assert declaration.name == "A"
        assert declaration.parameters == ("T",)
        assert not declaration.body.implicit_else
        assert convert(source) == "type A<T> = T extends string\n  ? true\n  : false;"

    def test_else_chain_nests_deeper(self):
        source = (
            "function D(T) {\n"
            "  if (T extends string) {\n"
            "    return 1;\n"
            "  } else if (T extends number) {\n"
            "    return 2;\n"
            "  } else {\n"
            "    return 3;\n"
            "  }\n"
            "}"
        )
        assert convert(source) == (
            "type D<T> = T extends string\n"
            "  ? 1\n"
            "  : T extends number\n"
            "    ? 2\n"
            "    : 3;"
        )

    def test_nested_if_in_then_branch(self):
        source = (
            "function N(T, U) {\n"
            "  if (T extends string) {\n"
            "    if (U extends 1) {\n"
            "      return 'a';\n"
            "    }\n"
            "  } else {\n"
            "    return never;\n"
            "  }\n"
            "}"
        )
        declaration = to_tree(source)
        assert isinstance(declaration.body.then, BranchNode)
        assert declaration.body.then.implicit_else
        assert convert(source) == (
            "type N<T, U> = T extends string\n"
            "  ? U extends 1\n"
            "    ? 'a'\n"
            "    : never\n"
            "  : never;"
        )

    def test_trailing_return_closes_else_chain(self):
        source = (
            "function F(T) {\n"
            "  if (T extends string) {\n"
            "    return 1;\n"
            "  } else if (T extends number) {\n"
            "    return 2;\n"
            "  }\n"
            "  return 3;\n"
            "}"
        )
        declaration = to_tree(source)
        assert not declaration.body.implicit_else
        assert declaration.body.otherwise.implicit_else
        assert declaration.body.otherwise.otherwise.text == "3"
        assert convert(source) == (
            "type F<T> = T extends string\n"
            "  ? 1\n"
            "  : T extends number\n"
            "    ? 2\n"
            "    : 3;"
        )

    def test_else_chain_without_trailing_return_ends_in_bottom(self):
        source = "function F(T) { if (T extends 1) { return 1; } else if (T extends 2) { return 2; } }"
        assert convert(source) == "type F<T> = T extends 1\n  ? 1\n  : T extends 2\n    ? 2\n    : never;"

    def test_unbraced_branches(self):
        source = "function U(T) {\n  if (T extends 1) return 'one';\n  else return 'other';\n}"
        assert convert(source) == "type U<T> = T extends 1\n  ? 'one'\n  : 'other';"

    def test_parameterless_function(self):
        source = "function P() {\n  if (string extends X) {\n    return 1;\n  }\n  return 2;\n}"
        assert convert(source).startswith("type P = string extends X\n")

    def test_parameters_keep_constraint_syntax(self):
        source = (
            "function G(T extends Record<string, number> = {}, U = [1, 2]) {\n"
            "  if (T extends U) {\n"
            "    return 1;\n"
            "  }\n"
            "}"
        )
        assert convert(source).startswith("type G<T extends Record<string, number> = {}, U = [1, 2]> = ")

    def test_multi_line_return(self):
        source = (
            "function M(T) {\n"
            "  if (T extends string) {\n"
            "    return {\n"
            "      a: T;\n"
            "      b: [T, T];\n"
            "    };\n"
            "  }\n"
            "  return never;\n"
            "}"
        )
        declaration = to_tree(source)
        assert declaration.body.then.text == "{\n      a: T;\n      b: [T, T];\n    }"
        assert declaration.body.otherwise.text == "never"


class TestShapeErrors:

    def test_two_statements_in_then_block(self):
        source = (
            "function F(T) {\n"
            "\n"
            "  if (T extends string) {\n"
            "    const x = 1;\n"
            "    return 1;\n"
            "  }\n"
            "}"
        )
        with pytest.raises(InvalidBranchBody) as info:
            to_tree(source)
        assert info.value.line == 3
        assert "const x = 1;" in info.value.snippet
        assert "Line: 3" in str(info.value)

    def test_empty_block(self):
        with pytest.raises(InvalidBranchBody):
            to_tree("function F(T) {\n  if (T extends string) {\n  }\n}")

    def test_bare_return(self):
        with pytest.raises(InvalidBranchBody):
            to_tree("function F(T) {\n  if (T extends string) {\n    return;\n  }\n}")

    def test_statement_before_the_if(self):
        with pytest.raises(InvalidBranchBody) as info:
            to_tree("function F(T) {\n  let y = 2;\n  if (T extends string) {\n    return 1;\n  }\n}")
        assert info.value.line == 2

    def test_no_if(self):
        with pytest.raises(NoTopLevelBranch):
            to_tree("function F(T) {\n  return 1;\n}")

    def test_two_trailing_returns(self):
        source = (
            "function F(T) {\n"
            "  if (T extends string) {\n"
            "    return 1;\n"
            "  }\n"
            "  return 2;\n"
            "  return 3;\n"
            "}"
        )
        with pytest.raises(UnsupportedTrailingShape):
            to_tree(source)

    def test_trailing_statement_is_not_a_return(self):
        source = "function F(T) {\n  if (T extends string) {\n    return 1;\n  }\n  let z = 1;\n}"
        with pytest.raises(UnsupportedTrailingShape):
            to_tree(source)

    def test_statement_after_else_chain_with_final_else(self):
        source = (
            "function F(T) {\n"
            "  if (T extends 1) {\n"
            "    return 1;\n"
            "  } else if (T extends 2) {\n"
            "    return 2;\n"
            "  } else {\n"
            "    return 3;\n"
            "  }\n"
            "  return 4;\n"
            "}"
        )
        with pytest.raises(UnsupportedTrailingShape) as info:
            to_tree(source)
        assert info.value.line == 9

    def test_statement_after_if_with_else(self):
        source = (
            "function F(T) {\n"
            "  if (T extends string) {\n"
            "    return 1;\n"
            "  } else {\n"
            "    return 2;\n"
            "  }\n"
            "  return 3;\n"
            "}"
        )
        with pytest.raises(UnsupportedTrailingShape) as info:
            to_tree(source)
        assert info.value.line == 7

    def test_syntax_error(self):
        with pytest.raises(BranchSyntaxError):
            to_tree("function F(T) {\n  if (T extends string) {\n    return 1;\n}")

    def test_unclosed_region_reports_source_line(self):
        source = "\nfunction F(T) {\n\n  if (T extends string) {\n    return Foo<[(T;\n  }\n}"
        with pytest.raises(UnclosedOpaqueRegion) as info:
            to_tree(source)
        assert info.value.line == 5
