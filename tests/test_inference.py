"""Tests for usage, initializer and name inference."""

import pytest

from tsnarrow.analysis.inference import (
    FUNCTION_TYPE,
    RECORD_TYPE,
    UNKNOWN_ARRAY,
    infer_from_initializer,
    infer_from_name,
    infer_parameter_type,
    is_numeric_literal,
)
from tsnarrow.parsing.nodes import walk


def _param_guess(parse, source: str, name: str = "x"):
    unit = parse(source)
    param = next(
        n for n in walk(unit.root)
        if n.type in ("required_parameter", "optional_parameter")
    )
    return infer_parameter_type(param, name)


def _initializer_guess(parse, source: str):
    unit = parse(source)
    declarator = next(n for n in walk(unit.root) if n.type == "variable_declarator")
    return infer_from_initializer(declarator.child_by_field_name("value"))


class TestParameterInference:
    @pytest.mark.parametrize(
        "body, expected",
        [
            ("if (x === true) { return 1; }", "boolean"),
            ("if (x != false) { return 1; }", "boolean"),
            ("return x === 42;", "number"),
            ("return 0x1f == x;", "number"),
            ("return x === 'ready';", "string"),
            ("return x * 2;", "number"),
            ("return x - y;", "number"),
            ("return 'id: ' + x;", "string"),
            ("return x + 1;", "number"),
            ("return x.name;", RECORD_TYPE),
            ("return x[0];", UNKNOWN_ARRAY),
            ("return x['key'];", RECORD_TYPE),
            ("return x(1, 2);", FUNCTION_TYPE),
        ],
    )
    def test_usage_tests(self, parse, body, expected):
        source = f"function f(x: any, y: number) {{ {body} }}"
        assert _param_guess(parse, source) == expected

    def test_first_match_wins(self, parse):
        # Concatenation comes first in source order, so the later
        # property access does not change the guess.
        source = "function f(x: any) { const s = 'v' + x; return x.length; }"
        assert _param_guess(parse, source) == "string"

    def test_no_usage(self, parse):
        assert _param_guess(parse, "function f(x: any) { return 1; }") is None

    def test_other_names_ignored(self, parse):
        source = "function f(x: any) { return other.name + 1; }"
        assert _param_guess(parse, source) is None

    def test_arrow_expression_body(self, parse):
        assert _param_guess(parse, "const f = (x: any) => x.id;") == RECORD_TYPE

    def test_optional_parameter(self, parse):
        assert _param_guess(parse, "function f(x?: any) { return x();}") == FUNCTION_TYPE


class TestInitializerInference:
    @pytest.mark.parametrize(
        "source, expected",
        [
            ("let v: any = 5;", "number"),
            ("let v: any = -1.5;", "number"),
            ("let v: any = 'x';", "string"),
            ("let v: any = `t`;", "string"),
            ("let v: any = true;", "boolean"),
            ("let v: any = [];", UNKNOWN_ARRAY),
            ("let v: any = {};", RECORD_TYPE),
            ("let v: any = () => 1;", FUNCTION_TYPE),
            ("let v: any = compute();", None),
        ],
    )
    def test_literals(self, parse, source, expected):
        assert _initializer_guess(parse, source) == expected

    def test_missing_initializer(self):
        assert infer_from_initializer(None) is None


class TestNameHeuristics:
    @pytest.mark.parametrize(
        "name, expected",
        [
            ("id", "string"),
            ("userId", "string"),
            ("apiKey", "string"),
            ("apikey", "string"),
            ("weird-key", "string"),
            ("data-id", "string"),
            ("uuid", "string"),
            ("guid", "string"),
            ("isOpen", "boolean"),
            ("hasError", "boolean"),
            ("visible", "boolean"),
            ("isValid", "boolean"),
            ("userCount", "number"),
            ("pageSize", "number"),
            ("createdAt", "Date | string"),
            ("startDate", "Date | string"),
            ("items", UNKNOWN_ARRAY),
            ("rows", UNKNOWN_ARRAY),
            ("onClick", FUNCTION_TYPE),
            ("errorHandler", FUNCTION_TYPE),
            ("settings", RECORD_TYPE),
            ("metadata", UNKNOWN_ARRAY),
            ("title", None),
        ],
    )
    def test_vocabulary(self, name, expected):
        assert infer_from_name(name) == expected

    def test_lowercase_id_suffix_is_not_an_id(self):
        assert infer_from_name("valid") is None
        assert infer_from_name("grid") is None

    def test_prefixes_are_case_sensitive(self):
        # 'island' and 'online' only look like prefixed names.
        assert infer_from_name("island") is None
        assert infer_from_name("online") is None


class TestNumericLiteral:
    @pytest.mark.parametrize("text", ["0", "42", "3.14", ".5", "1e10", "0xff", "0b101", "-7"])
    def test_numeric(self, text):
        assert is_numeric_literal(text)

    @pytest.mark.parametrize("text", ["'1'", "x", "true", "1px", ""])
    def test_not_numeric(self, text):
        assert not is_numeric_literal(text)
