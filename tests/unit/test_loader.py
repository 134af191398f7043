"""
Unit tests for YAML definitions, the global config and glob loading.
"""

import pytest

from zeusgen.errors import ValidationError
from zeusgen.ir.raw import GConfig
from zeusgen.loader import load_gconfig, load_def_from_yaml, load_defs_from_globs, load_definition
from zeusgen.pipeline import build_context

USER_YAML = """
types:
  Role:
    enum:
      - {name: ADMIN, value: 0}
      - {name: GUEST, value: 1}
  User:
    properties:
      id: {type: string, required: true}
      role: {type: Role}
    gen:
      general-entity: true
schemas:
  Paging:
    properties:
      offset: {type: int32}
usecases:
  Users:
    gen:
      rest: {apiPrefix: /users}
    rules:
      - pattern: "^get"
        method:
          gen:
            rest: {method: get}
    methods:
      getUser:
        req:
          properties:
            id: {type: string}
        res:
          type: User
"""


class TestYamlDefinition:

    def test_definition_from_yaml(self, temp_output_dir):
        path = temp_output_dir / "users.yaml"
        path.write_text(USER_YAML)

        definition = load_def_from_yaml(path)
        assert [t.name for t in definition.types] == ["Role", "User"]
        assert [s.name for s in definition.schemas] == ["Paging"]

        user = definition.get_type("User")
        assert user.get_prop("id").required is True
        assert user.get_prop("meta").type == "GeneralObjectMeta"

        method = definition.get_usecase("Users").get_method("getUser")
        assert method.gen["rest"] == {"method": "get"}
        assert method.res.type == "User"

    def test_non_mapping_document_is_rejected(self, temp_output_dir):
        path = temp_output_dir / "bad.yaml"
        path.write_text("- a\n- b\n")
        with pytest.raises(ValidationError, match="expected a mapping"):
            load_def_from_yaml(path)


class TestGlobalConfig:

    def test_load_gconfig(self, temp_output_dir):
        path = temp_output_dir / "zeus.yaml"
        path.write_text(
            "defs:\n  - defs/*.zeus\ngenerators:\n  ts:\n    output: types.ts\n"
        )
        gconfig = load_gconfig(path)
        assert gconfig.defs == ["defs/*.zeus"]
        assert gconfig.generators == {"ts": {"output": "types.ts"}}

    def test_empty_config(self, temp_output_dir):
        path = temp_output_dir / "empty.yaml"
        path.write_text("")
        assert load_gconfig(path) == GConfig()


class TestGlobLoading:

    def test_globs_load_by_suffix_in_sorted_order(self, temp_output_dir, write_zeus_file):
        write_zeus_file("struct B { string b; }", "defs/b.zeus")
        write_zeus_file('@ts.output("types.ts");\nstruct A { string a; }', "defs/a.zeus")
        (temp_output_dir / "defs" / "c.yaml").write_text("types:\n  C:\n    properties:\n      c: {type: string}\n")

        gconfig = GConfig()
        definitions = load_defs_from_globs(["defs/*.zeus", "defs/*.yaml"], temp_output_dir, gconfig=gconfig)

        assert [[t.name for t in d.types] for d in definitions] == [["A", "B"], ["C"]]
        assert definitions[0].name == "a"
        assert gconfig.generators == {"ts": {"output": "types.ts"}}

    def test_import_shared_with_globbed_file_contributes_once(self, temp_output_dir, write_zeus_file):
        write_zeus_file("struct Page { string cursor; }", "defs/common.zeus")
        write_zeus_file('import "common.zeus";\nstruct A { Page p; }', "defs/a.zeus")

        gconfig = GConfig()
        definitions = load_defs_from_globs(["defs/*.zeus"], temp_output_dir, gconfig=gconfig)

        assert [t.name for t in definitions[0].types] == ["Page", "A"]
        ctx = build_context(gconfig, definitions)
        assert sorted(ctx.types) == ["A", "Page"]

    def test_struct_consumed_across_globbed_files(self, temp_output_dir, write_zeus_file):
        write_zeus_file("struct GetReq { string id; }", "defs/a.zeus")
        write_zeus_file("service Users { get(GetReq); }", "defs/b.zeus")

        definitions = load_defs_from_globs(["defs/*.zeus"], temp_output_dir)

        assert len(definitions) == 1
        assert definitions[0].types == []
        method = definitions[0].get_usecase("Users").methods[0]
        assert [p.name for p in method.req.properties] == ["id"]

    def test_same_file_matched_twice_loads_once(self, temp_output_dir, write_zeus_file):
        write_zeus_file("struct A { string a; }", "defs/a.zeus")
        definitions = load_defs_from_globs(["defs/*.zeus", "defs/a.*"], temp_output_dir)
        assert len(definitions) == 1

    def test_unsupported_suffix(self, temp_output_dir):
        path = temp_output_dir / "api.proto"
        path.write_text("syntax = \"proto3\";\n")
        with pytest.raises(ValidationError, match="unsupported definition file"):
            load_definition(path)
