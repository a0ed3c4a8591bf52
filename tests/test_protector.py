import pytest

from typeflip.services.translator import NoFunctionFound, UnclosedOpaqueRegion
from typeflip.services.translator.protector import protect, return_region_end


class TestReturnRegion:

    @pytest.mark.parametrize("text,expected", [
        ("a | b;\nx", "a | b"),
        ("a\n  | b\n}", "a\n  | b"),
        ("{\n  a: 1\n}\n}", "{\n  a: 1\n}"),
        ("x // note\n", "x"),
        ("1 }", "1 "),
        ("Fn<(a: A) => B>;", "Fn<(a: A) => B>"),
        ("'a;b';", "'a;b'"),
    ])
    def test_region_end(self, text, expected):
        assert text[:return_region_end(text, 0)] == expected

    def test_unclosed_region(self):
        with pytest.raises(UnclosedOpaqueRegion) as info:
            return_region_end("x;\nFoo<[Bar", 3)
        assert info.value.line == 2


class TestProtect:

    SOURCE = (
        "function A(T, U extends string) {\n"
        "  if (T extends U) {\n"
        "    return [T];\n"
        "  }\n"
        "  return never;\n"
        "}"
    )

    def test_every_region_is_recorded_in_order(self):
        protected = protect(self.SOURCE)
        assert [entry.text for entry in protected.table.entries.values()] == [
            "T", "U extends string", "T extends U", "[T]", "never",
        ]
        assert protected.name == "A"
        assert protected.parameters == ["__param_0__", "__param_1__"]

    def test_protected_code_is_plain_javascript(self):
        code = protect(self.SOURCE).code
        assert code.startswith("function A(__param_0__, __param_1__) {")
        assert 'if ("__opaque_2__")' in code
        assert 'return "__opaque_3__";' in code
        assert "extends" not in code

    def test_line_numbers_are_preserved(self):
        source = (
            "function A(T) {\n"
            "  if (\n"
            "    T extends string\n"
            "  ) {\n"
            "    return {\n"
            "      a: 1\n"
            "    };\n"
            "  }\n"
            "}"
        )
        protected = protect(source)
        assert protected.code.count("\n") == source.count("\n")
        assert protected.table.lookup("__opaque_1__").line == 2
        assert protected.table.lookup("__opaque_2__").text == "{\n      a: 1\n    }"
        assert protected.table.lookup("__opaque_2__").line == 5

    def test_keywords_inside_comments_are_ignored(self):
        protected = protect("function A(T) {\n  // return later\n  if (T) { return 1; }\n}")
        assert [entry.text for entry in protected.table.entries.values()] == ["T", "T", "1"]

    def test_missing_header(self):
        with pytest.raises(NoFunctionFound):
            protect("const x = 1;")

    def test_unclosed_condition(self):
        with pytest.raises(UnclosedOpaqueRegion) as info:
            protect("function A(T) {\n  if (T extends Array<string {\n    return 1;\n  }\n}")
        assert info.value.line == 2
