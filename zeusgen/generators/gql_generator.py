"""
GraphQL SDL.

Request schemas become `input` types; any named type they reference needs an
input variant too. Those names are collected in the scratch slot while
definitions are generated and drained in `after`, together with the Query
and Mutation root types.
"""

from zeusgen.generators.base import Generator

GQL_SCALARS = {
    "string": "String",
    "number": "Float",
    "float": "Float",
    "integer": "Int",
    "int32": "Int",
    "i32": "Int",
    "bigint": "String",
    "bool": "Boolean",
    "boolean": "Boolean",
}


class GraphQLSchemaGenerator(Generator):
    generator_id = "gql"

    def before(self, ctx) -> None:
        ctx.ext[self.generator_id] = {
            "queries": [],
            "mutations": [],
            # types referenced from inputs, which need an input variant
            "type_to_input": [],
            "inputs_done": set(),
        }

    def after(self, ctx) -> None:
        state = self.state(ctx)
        while state["type_to_input"]:
            type_name = state["type_to_input"].pop(0)
            if type_name in state["inputs_done"]:
                continue
            state["inputs_done"].add(type_name)
            schema = ctx.get_type(type_name)
            if schema.is_enum:
                continue
            self._object(ctx, schema, self.input_type_name(type_name), "input")

        if state["queries"]:
            ctx.append_output(self.output, self.render("root.graphql.jinja", name="Query", fields=state["queries"]))
        if state["mutations"]:
            ctx.append_output(self.output, self.render("root.graphql.jinja", name="Mutation", fields=state["mutations"]))

    def generate_definition(self, ctx, definition) -> None:
        for schema in definition.types:
            if schema.is_enum:
                ctx.append_output(self.output, self.render("enum.graphql.jinja", name=schema.name, members=schema.enum))
            else:
                self._object(ctx, schema, schema.name, "type")

        state = self.state(ctx)
        for method in definition.methods:
            gql = method.gen.get("gql")
            if not isinstance(gql, dict):
                continue
            field = self._root_field(ctx, method)
            if gql.get("type") == "mutation":
                state["mutations"].append(field)
            else:
                state["queries"].append(field)

    @staticmethod
    def input_type_name(type_name: str) -> str:
        return f"{type_name}Input"

    def _object(self, ctx, schema, name: str, kind: str) -> None:
        fields = []
        for prop in schema.properties:
            if kind == "input":
                self._queue_input(ctx, prop)
            fields.append({"name": prop.name, "type": self.gql_type(ctx, prop, kind == "input")})
        ctx.append_output(self.output, self.render("type.graphql.jinja", kind=kind, name=name, fields=fields))

    def _queue_input(self, ctx, prop) -> None:
        leaf = prop.items if prop.is_array else prop
        if leaf is None or leaf.is_primitive:
            return
        type_name = self.split_namespace(leaf.type)[1]
        if ctx.get_type(type_name).is_enum:
            return
        state = self.state(ctx)
        if type_name not in state["type_to_input"] and type_name not in state["inputs_done"]:
            state["type_to_input"].append(type_name)

    def _root_field(self, ctx, method) -> str:
        res_name = self.response_type_name(method)
        if method.res is not None:
            self._object(ctx, method.res, res_name, "type")
        else:
            res_name = "Boolean"
        if method.req is None or not method.req.properties:
            return f"{method.name}: {res_name}"
        req_name = self.request_type_name(method)
        self._object(ctx, method.req, req_name, "input")
        return f"{method.name}(request: {req_name}!): {res_name}"

    def gql_type(self, ctx, schema, is_input: bool) -> str:
        gql = schema.gen.get("gql")
        if isinstance(gql, dict) and gql.get("type"):
            return gql["type"]
        if schema.is_array:
            return f"[{self.gql_type(ctx, schema.items, is_input)}]"
        if schema.type in GQL_SCALARS:
            return GQL_SCALARS[schema.type]
        type_name = self.split_namespace(schema.type)[1]
        # Enums are valid in inputs as-is
        if is_input and not ctx.get_type(type_name).is_enum:
            return self.input_type_name(type_name)
        return type_name
