import pytest

from typeflip.services.translator.scanner import (
    find_keyword,
    find_matching,
    is_arrow,
    is_keyword_at,
    is_wrapped,
    line_of,
    split_top_level,
    unbalanced_index,
)


@pytest.mark.parametrize("text,expected", [
    ("(a)", 2),
    ("(a (b) c)", 8),
    ("(')' )", 5),
    ("(/* ) */ x)", 10),
    ("<A<B>>", 5),
    ("((x) => y)", 9),
    ("(a", -1),
])
def test_find_matching(text, expected):
    assert find_matching(text, 0) == expected


def test_arrow_is_not_a_closer():
    text = "(x) => y"
    assert is_arrow(text, text.index(">"))
    assert unbalanced_index(text) is None


def test_split_top_level_respects_brackets():
    assert split_top_level("A<B, C>, { a: 1, b: 2 }, D") == ["A<B, C>", " { a: 1, b: 2 }", " D"]


def test_split_top_level_skips_strings():
    assert split_top_level("'a,b', c") == ["'a,b'", " c"]


def test_keyword_boundaries():
    assert is_keyword_at("if (x)", 0, "if")
    assert not is_keyword_at("ifx", 0, "if")
    assert not is_keyword_at("elif", 2, "if")


def test_find_keyword_top_level_only():
    text = "Wrap<T extends U> extends V"
    assert find_keyword(text, "extends") == text.rindex("extends")
    assert find_keyword(text, "extends", top_level=False) == text.index("extends")


def test_is_wrapped():
    assert is_wrapped("(A | B)")
    assert not is_wrapped("(A) | (B)")


def test_unbalanced_index_points_at_offender():
    assert unbalanced_index("A<(B") == 1
    assert unbalanced_index("A)") == 1


def test_line_of():
    assert line_of("a\nb\nc", 4) == 3
    assert line_of("a\nb", 2, first_line=10) == 11
