import logging

import pytest

from typeflip.services.translator import ConditionalNode, MalformedGrouping, OpaqueText
from typeflip.services.translator.conditional import (
    build_conditional,
    find_nested_conditional,
    has_conditional,
    root_conditional,
    split_conditional,
    unwrap_grouping,
)


class TestSplitConditional:

    def test_four_parts(self):
        assert split_conditional("T extends string ? 1 : 2") == ("T ", " string ", " 1 ", " 2")

    def test_nested_true_branch_keeps_its_colon(self):
        check, extends, then, otherwise = split_conditional("T extends A ? U extends B ? 1 : 2 : 3")
        assert then.strip() == "U extends B ? 1 : 2"
        assert otherwise.strip() == "3"

    def test_optional_member_is_not_a_branch(self):
        parts = split_conditional("T extends { a?: string } ? 1 : 2")
        assert parts[1].strip() == "{ a?: string }"

    @pytest.mark.parametrize("text", ["string | number", "T extends U", "Wrap<T extends A ? 1 : 2>"])
    def test_not_conditional_at_top_level(self, text):
        assert split_conditional(text) is None


class TestBuildConditional:

    def test_leaves_are_opaque_text(self):
        tree = build_conditional("T extends string ? true : false")
        assert isinstance(tree, ConditionalNode)
        assert tree.check.text == "T"
        assert tree.extends.text == "string"
        assert tree.then == OpaqueText("true")
        assert tree.otherwise == OpaqueText("false")

    def test_else_chain(self):
        tree = build_conditional("T extends A ? 1 : T extends B ? 2 : 3")
        assert tree.is_else_if
        assert tree.otherwise.extends.text == "B"
        assert not tree.otherwise.is_else_if

    def test_lines_follow_the_text(self):
        tree = build_conditional("T extends string\n  ? 1\n  : 2", line=5)
        assert tree.check.line == 5
        assert tree.then.line == 6
        assert tree.otherwise.line == 7

    def test_grouped_nested_conditional_is_unwrapped(self):
        tree = build_conditional("T extends A ? (T extends B ? 1 : 2) : 3")
        assert isinstance(tree.then, ConditionalNode)
        assert tree.then.extends.text == "B"

    def test_double_wrapped_nested_conditional_is_unwrapped(self):
        tree = build_conditional("T extends X ? ((T extends Y ? 1 : 2)) : 3")
        assert isinstance(tree.then, ConditionalNode)
        assert tree.then.extends.text == "Y"
        assert tree.then.otherwise == OpaqueText("2")

    def test_grouped_plain_type_stays_a_leaf(self):
        tree = build_conditional("T extends A ? (1 | 2) : 3")
        assert tree.then == OpaqueText("(1 | 2)")


class TestUnwrapGrouping:

    def test_strips_every_layer_around_a_conditional(self):
        assert unwrap_grouping("((T extends A ? 1 : 2))") == "T extends A ? 1 : 2"

    def test_keeps_group_around_plain_type(self):
        assert unwrap_grouping(" (A | B) ") == "(A | B)"

    def test_keeps_every_layer_around_plain_type(self):
        assert unwrap_grouping("((A | B))") == "((A | B))"

    def test_empty_group_inside_a_group(self):
        with pytest.raises(MalformedGrouping):
            unwrap_grouping("(( ))")

    def test_empty_group(self):
        with pytest.raises(MalformedGrouping):
            unwrap_grouping("()", line=4)

    def test_unbalanced_group_reports_line(self):
        with pytest.raises(MalformedGrouping) as info:
            unwrap_grouping("(T extends A\n ? 1 : 2", line=3)
        assert info.value.line == 3
        assert "(" in info.value.message


class TestNestedConditionals:

    def test_found_inside_type_arguments(self):
        assert find_nested_conditional("Wrap<T extends A ? 1 : 2>") == "T extends A ? 1 : 2"

    def test_found_inside_object_member(self):
        assert find_nested_conditional("{ a: T extends A ? 1 : 2; b: string }") == "T extends A ? 1 : 2"

    def test_has_conditional(self):
        assert has_conditional("T extends A ? 1 : 2")
        assert has_conditional("Promise<{ a: T extends A ? 1 : 2 }>")
        assert not has_conditional("string")
        assert not has_conditional("T extends A")

    def test_root_conditional_logs_dropped_wrapper(self, caplog):
        with caplog.at_level(logging.WARNING):
            tree = root_conditional("Wrap<T extends A ? 1 : 2>")
        assert isinstance(tree, ConditionalNode)
        assert tree.check.text == "T"
        assert "Wrap<" in caplog.text

    def test_root_conditional_without_any_conditional(self):
        assert root_conditional("string") == OpaqueText("string")
