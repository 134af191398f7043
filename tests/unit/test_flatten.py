"""
Unit tests for flattening a schema into leaf property paths.
"""

import pytest

from zeusgen.errors import ResolutionError
from zeusgen.model import flatten, flat_name, prop_by_path

FILTER_ZEUS = """
enum Status { OPEN; DONE; }
struct Page { int32 offset; int32 limit; }
struct Item { string sku; }
struct Filter {
  string q;
  Page page;
  Status status;
  string[] tags;
  Item[] items;
}
"""


class TestFlatten:

    def test_leaf_paths_in_declaration_order(self, build_zeus_def, make_context):
        definition, _ = build_zeus_def(FILTER_ZEUS)
        ctx = make_context(definition)

        assert flatten(ctx, ctx.get_type("Filter")) == [
            ["q"],
            ["page", "offset"],
            ["page", "limit"],
            ["status"],
            ["tags"],
            ["items"],
        ]

    def test_every_leaf_is_primitive_array_or_enum(self, build_zeus_def, make_context):
        definition, _ = build_zeus_def(FILTER_ZEUS)
        ctx = make_context(definition)
        schema = ctx.get_type("Filter")

        paths = flatten(ctx, schema)
        assert paths
        for path in paths:
            leaf = prop_by_path(ctx, schema, path)
            assert leaf.is_primitive or ctx.get_type(leaf.type).is_enum

    def test_self_reference_is_skipped(self, build_zeus_def, make_context):
        definition, _ = build_zeus_def("struct Node { string value; Node next; }")
        ctx = make_context(definition)

        assert flatten(ctx, ctx.get_type("Node")) == [["value"]]

    def test_only_self_reference_flattens_to_nothing(self, build_zeus_def, make_context):
        definition, _ = build_zeus_def("struct Node { Node next; }")
        ctx = make_context(definition)

        assert flatten(ctx, ctx.get_type("Node")) == []

    def test_mutual_reference_stops_at_ancestor(self, build_zeus_def, make_context):
        definition, _ = build_zeus_def("""
            struct A { B b; string a; }
            struct B { A back; string x; }
        """)
        ctx = make_context(definition)

        assert flatten(ctx, ctx.get_type("A")) == [["b", "x"], ["a"]]

    def test_same_type_twice_is_not_a_cycle(self, build_zeus_def, make_context):
        definition, _ = build_zeus_def("""
            struct Range { int32 from; int32 to; }
            struct Query { Range created; Range updated; }
        """)
        ctx = make_context(definition)

        assert flatten(ctx, ctx.get_type("Query")) == [
            ["created", "from"],
            ["created", "to"],
            ["updated", "from"],
            ["updated", "to"],
        ]

    def test_unknown_type_is_fatal(self, build_zeus_def, make_context):
        definition, _ = build_zeus_def("struct A { Missing m; }")
        ctx = make_context(definition)

        with pytest.raises(ResolutionError):
            flatten(ctx, ctx.get_type("A"))

    def test_empty_schema(self, build_zeus_def, make_context):
        definition, _ = build_zeus_def("struct Empty { }")
        ctx = make_context(definition)

        assert flatten(ctx, ctx.get_type("Empty")) == []


class TestFlatName:

    def test_camel_joins_segments(self):
        assert flat_name(["page", "offset"]) == "pageOffset"
        assert flat_name(["q"]) == "q"
