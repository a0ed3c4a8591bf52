from typeflip.services.translator.declarations import (
    find_conditional_aliases,
    parse_type_aliases,
    split_functions,
    split_parameters,
)

TYPES_SOURCE = '''import { X } from "x";

export type A<T> = T extends string ? true : false;
type Plain = string;
declare type B<T, U = T[]> = T extends U
  ? 1
  : 2
interface I { type: string }
const f = (x: number) => x;
'''


def test_parse_type_aliases_in_source_order():
    units = parse_type_aliases(TYPES_SOURCE)
    assert [unit.name for unit in units] == ["A", "Plain", "B"]


def test_alias_text_is_verbatim():
    a, _, b = parse_type_aliases(TYPES_SOURCE)
    assert a.text == "export type A<T> = T extends string ? true : false;"
    assert a.line == 3
    assert b.text == "declare type B<T, U = T[]> = T extends U\n  ? 1\n  : 2"
    assert b.parameters == ("T", "U = T[]")
    assert b.line == 5


def test_only_conditional_aliases_qualify():
    assert [unit.name for unit in find_conditional_aliases(TYPES_SOURCE)] == ["A", "B"]


def test_no_aliases():
    assert find_conditional_aliases("const x = 1;\n") == []


def test_type_inside_a_string_is_ignored():
    assert parse_type_aliases('const s = "type A = 1;";\n') == []


def test_split_parameters():
    assert split_parameters(" T extends Record<string, number>, U = [1, 2] ,") == (
        "T extends Record<string, number>",
        "U = [1, 2]",
    )


BRANCH_SOURCE = '''// notes above the first function

function A(T) {
  if (T extends string) {

    return 1;
  }
}

export function B() {
  return 2;
}
'''


def test_split_functions_drops_blank_lines_and_preamble():
    a, b = split_functions(BRANCH_SOURCE)
    assert a.name == "A"
    assert b.name == "B"
    assert a.text.split("\n")[0] == "function A(T) {"
    assert "" not in a.text.split("\n")
    assert "notes" not in a.text


def test_function_unit_keeps_source_lines():
    a, b = split_functions(BRANCH_SOURCE)
    assert a.line_map == (3, 4, 6, 7, 8)
    assert a.source_line(3) == 6
    assert b.line == 10


def test_no_functions():
    assert split_functions("const x = 1;\n") == []
