"""
Unit tests for the bundled backends (ts, gql, sql, rest_client).
"""

import pytest

from zeusgen.errors import ResolutionError, ValidationError
from zeusgen.generators import default_registry
from zeusgen.model.definition import Definition
from zeusgen.output import render_file


@pytest.fixture
def run_generator(build_zeus_def, make_context):
    """Build `source`, run one generator over it and return the context."""
    def _run(source: str, generator_id: str, config: dict = None):
        definition, gconfig = build_zeus_def(source)
        ctx = make_context(definition, gconfig=gconfig)
        config = config or {"output": "out"}
        default_registry().run(ctx, generator_id, config, [definition])
        return ctx
    return _run


class TestTypescriptGenerator:

    def test_types_enums_and_usecases(self, run_generator, todo_zeus):
        ctx = run_generator(todo_zeus, "ts", {"output": "types.ts"})
        out = ctx.get_output("types.ts")

        assert "export enum Status {\n  OPEN = 0,\n  DONE = 5,\n  ARCHIVED = 6,\n}" in out
        assert (
            "export interface Todo {\n"
            "  id: string;\n"
            "  title?: string;\n"
            "  status?: Status;\n"
            "  tags?: string[];\n"
            "  meta?: GeneralObjectMeta;\n"
            "}"
        ) in out
        assert "export interface CreateTodoRequest {\n  title?: string;\n  status?: Status;\n}" in out
        assert "export interface PingRequest {\n}" in out
        assert "  createTodo(request: CreateTodoRequest): Promise<CreateTodoResponse>;" in out
        assert "export const TODO_SERVICE = Symbol('TODO_SERVICE');" in out

    def test_heritage_and_type_override(self, run_generator):
        ctx = run_generator("""
            struct Base { string id; }
            struct User extends Base { @ts({"type": "Date"}) string createdAt; }
        """, "ts")
        assert "export interface User extends Base {\n  createdAt?: Date;\n}" in ctx.get_output("out")

    def test_type_reference_body_is_aliased(self, make_context):
        definition = Definition.from_raw({
            "types": {"User": {"properties": {"id": {"type": "string"}}}},
            "usecases": {"Users": {"methods": {
                "getUser": {"req": {"properties": {"id": {"type": "string"}}}, "res": {"type": "User"}},
                "listUsers": {"res": {"type": "array", "items": {"type": "User"}}},
            }}},
        }, "users.yaml", "users")
        ctx = make_context(definition)
        default_registry().run(ctx, "ts", {"output": "types.ts"}, [definition])
        out = ctx.get_output("types.ts")

        assert "export type GetUserResponse = User;\n" in out
        assert "export type ListUsersResponse = User[];\n" in out
        assert "export interface GetUserRequest {\n  id?: string;\n}" in out


class TestGraphQLSchemaGenerator:

    def test_types_and_root_fields(self, run_generator, todo_zeus):
        ctx = run_generator(todo_zeus, "gql", {"output": "schema.graphql"})
        out = ctx.get_output("schema.graphql")

        assert "enum Status {\n  OPEN\n  DONE\n  ARCHIVED\n}" in out
        assert "type Todo {\n  id: String\n  title: String\n  status: Status\n  tags: [String]\n  meta: GeneralObjectMeta\n}" in out
        assert "input CreateTodoRequest {\n  title: String\n  status: Status\n}" in out
        assert "type Query {\n  getTodo(request: GetTodoRequest!): GetTodoResponse\n}" in out
        assert "type Mutation {\n  createTodo(request: CreateTodoRequest!): CreateTodoResponse\n}" in out
        # roots are emitted last, after every definition
        assert out.rstrip().endswith("}") and out.index("type Query") > out.index("type Todo")

    def test_referenced_types_get_input_variants(self, run_generator):
        ctx = run_generator("""
            struct Address { string city; Country country; }
            struct Country { string code; }
            service Places {
              @gql({"type": "mutation"})
              save({ Address address; Address[] more; }): { string id; };
            }
        """, "gql")
        out = ctx.get_output("out")

        assert "input SaveRequest {\n  address: AddressInput\n  more: [AddressInput]\n}" in out
        assert "input AddressInput {\n  city: String\n  country: CountryInput\n}" in out
        assert "input CountryInput {\n  code: String\n}" in out
        assert out.count("input AddressInput") == 1
        assert ctx.ext["gql"]["type_to_input"] == []
        assert ctx.ext["gql"]["inputs_done"] == {"Address", "Country"}


class TestSQLGenerator:

    def test_tables_for_sql_types(self, run_generator, todo_zeus):
        ctx = run_generator(todo_zeus, "sql", {"output": "schema.sql"})
        out = ctx.get_output("schema.sql")

        assert (
            "CREATE TABLE todos (\n"
            "  id text PRIMARY KEY,\n"
            "  title text,\n"
            "  status smallint,\n"
            "  tags text[],\n"
            "  meta_id uuid\n"
            ");"
        ) in out
        # the referenced struct gets its own table, once, before its user
        assert out.count("CREATE TABLE general_object_meta") == 1
        assert out.index("general_object_meta") < out.index("CREATE TABLE todos")
        assert ctx.ext["sql"]["generated_tables"] == {"todos", "general_object_meta"}

    def test_struct_arrays_get_join_tables(self, run_generator):
        ctx = run_generator("""
            struct Tag { string label; }
            @sql
            struct Post { string id; Tag[] tags; Post parent; }
        """, "sql", {"output": "out", "defaultIDType": "bigint"})
        out = ctx.get_output("out")

        assert "CREATE TABLE post_tags (\n  post_id bigint,\n  tag_id bigint\n);" in out
        assert "CREATE TABLE post (\n  id text,\n  parent_id bigint\n);" in out
        assert out.count("CREATE TABLE post (") == 1

    def test_types_without_sql_option_are_skipped(self, run_generator):
        ctx = run_generator("struct Plain { string a; }", "sql")
        assert ctx.get_output("out") == ""


class TestRestClientGenerator:

    def test_client_and_imports(self, run_generator, todo_zeus):
        ctx = run_generator(todo_zeus, "rest_client", {"output": "client.ts"})
        rendered = render_file("client.ts", ctx.files["client.ts"])

        assert rendered.startswith(
            "import { CreateTodoRequest, CreateTodoResponse, GetTodoRequest, GetTodoResponse } from './types';\n"
            "import { ZeusHttpClient } from './http';\n"
        )
        assert "export class TodoServiceClient {" in rendered
        assert "      method: 'POST',\n      path: `/api/todos`,\n      body: req,\n" in rendered
        assert "      method: 'GET',\n      path: `/api/todos/${req.id}`,\n    });" in rendered
        # methods without a rest option are not exposed
        assert "ping(" not in rendered

    def test_get_request_is_flattened_to_query(self, run_generator):
        ctx = run_generator("""
            struct Page { int32 offset; int32 limit; }
            service Search {
              @rest({"method": "get", "path": "/search/{scope}"})
              @rest.extraImports._0({"from": "./extra", "names": ["Extra"]})
              search({ string scope; string q; Page page; }): { string r; };
            }
        """, "rest_client", {"output": "out", "tsTypeImport": "./models"})
        out_file = ctx.files["out"]

        assert "        q: req?.q,\n        pageOffset: req?.page?.offset,\n        pageLimit: req?.page?.limit,\n" in out_file.content
        assert "scope: req" not in out_file.content
        assert "path: `/search/${req.scope}`" in out_file.content
        assert out_file.imports == {
            "./models": ["SearchRequest", "SearchResponse"],
            "./extra": ["Extra"],
            "./http": ["ZeusHttpClient"],
        }

    def test_explicit_query_list(self, run_generator):
        ctx = run_generator("""
            service S {
              @rest({"method": "delete", "path": "/x", "query": ["force"]})
              drop({ bool force; string reason; });
            }
        """, "rest_client")
        assert "      query: {\n        force: req.force,\n      },\n" in ctx.get_output("out")

    def test_unknown_query_type_is_fatal(self, run_generator):
        with pytest.raises(ResolutionError):
            run_generator("""
                service S {
                  @rest({"method": "get"})
                  find({ Missing m; });
                }
            """, "rest_client")

    def test_malformed_extra_import_names_the_method(self, run_generator):
        with pytest.raises(ValidationError, match="S.find"):
            run_generator("""
                service S {
                  @rest({"method": "get"})
                  @rest.extraImports._0("x")
                  find({ string q; });
                }
            """, "rest_client")

    def test_extra_import_without_names(self, run_generator):
        ctx = run_generator("""
            service S {
              @rest({"method": "post"})
              @rest.extraImports._0({"from": "./polyfill"})
              send({ string q; });
            }
        """, "rest_client")
        rendered = render_file("client.ts", ctx.files["out"])
        assert "import './polyfill';\n" in rendered
