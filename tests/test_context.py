"""Tests for the usage-context classifier."""

import pytest

from tsnarrow.analysis.context import CONTEXT_TESTS, classify


def _classify_first(parse, any_nodes, source: str, name: str = "sample.ts") -> str:
    unit = parse(source, name)
    nodes = any_nodes(unit)
    assert nodes, "sample has no 'any' annotation"
    return classify(nodes[0])


class TestClassify:
    def test_function_parameter(self, parse, any_nodes):
        assert _classify_first(parse, any_nodes, "function f(x: any) {}") == "function"

    def test_arrow_parameter(self, parse, any_nodes):
        assert _classify_first(parse, any_nodes, "const f = (x: any) => x;") == "function"

    def test_interface_member(self, parse, any_nodes):
        source = "interface P { count: any; }"
        assert _classify_first(parse, any_nodes, source) == "object"

    def test_type_literal_member(self, parse, any_nodes):
        source = "type P = { count: any };"
        assert _classify_first(parse, any_nodes, source) == "object"

    def test_top_level_array(self, parse, any_nodes):
        assert _classify_first(parse, any_nodes, "let xs: any[] = [];") == "array"

    def test_jsx_attribute(self, parse, any_nodes):
        source = "const el = <Foo value={x as any} />;"
        assert _classify_first(parse, any_nodes, source, "sample.tsx") == "jsx"

    def test_jsx_wins_over_function(self, parse, any_nodes):
        source = """\
            function C() {
              return <div onClick={(e: any) => e} />;
            }
        """
        assert _classify_first(parse, any_nodes, source, "sample.tsx") == "jsx"

    def test_comparison(self, parse, any_nodes):
        assert _classify_first(parse, any_nodes, "const ok = (y as any) === 1;") == "comparison"

    def test_arithmetic(self, parse, any_nodes):
        assert _classify_first(parse, any_nodes, "const n = (y as any) + 1;") == "arithmetic"

    def test_dom_reference(self, parse, any_nodes):
        source = "const el = (document.body as any).dataset;"
        assert _classify_first(parse, any_nodes, source) == "dom"

    def test_unknown_fallback(self, parse, any_nodes):
        assert _classify_first(parse, any_nodes, "type T = any;") == "unknown"


class TestClassifierContract:
    def test_fixed_priority_order(self):
        tags = [tag for tag, _ in CONTEXT_TESTS]
        assert tags == ["jsx", "comparison", "arithmetic", "function", "dom", "array", "object"]

    @pytest.mark.parametrize(
        "source",
        [
            "function f(a: any, b: any[]) { return (a as any) + 1; }",
            "interface I { x: any; y: Array<any>; }",
            "let v: any = document.title;",
        ],
    )
    def test_exactly_one_known_tag(self, parse, any_nodes, source):
        valid = {tag for tag, _ in CONTEXT_TESTS} | {"unknown"}
        for node in any_nodes(parse(source)):
            assert classify(node) in valid
