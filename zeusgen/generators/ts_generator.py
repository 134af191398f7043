"""TypeScript declarations: interfaces, enums, usecase interfaces and DI tokens."""

from zeusgen.generators.base import Generator

TS_KEYWORD_TYPES = {
    "string": "string",
    "number": "number",
    "float": "number",
    "integer": "number",
    "int32": "number",
    "i32": "number",
    "bigint": "bigint",
    "bool": "boolean",
    "boolean": "boolean",
}


def ts_type(schema) -> str:
    """Map a property schema onto a TypeScript type expression."""
    gen_ts = schema.gen.get("ts") if isinstance(schema.gen.get("ts"), dict) else {}
    if gen_ts.get("type"):
        return gen_ts["type"]
    if schema.type == "array":
        return f"{ts_type(schema.items)}[]"
    if schema.type in TS_KEYWORD_TYPES:
        return TS_KEYWORD_TYPES[schema.type]
    return Generator.split_namespace(schema.type)[1]


class TypescriptGenerator(Generator):
    generator_id = "ts"

    def generate_definition(self, ctx, definition) -> None:
        for usecase in definition.usecases:
            self._usecase(ctx, usecase)
        for schema in definition.types:
            self._schema(ctx, schema, schema.name)

    def _usecase(self, ctx, usecase) -> None:
        methods = []
        for method in usecase.methods:
            req_name = self.request_type_name(method)
            res_name = self.response_type_name(method)
            self._schema(ctx, method.req, req_name)
            self._schema(ctx, method.res, res_name)
            methods.append({"name": method.name, "req": req_name, "res": res_name})

        ctx.append_output(
            self.output,
            self.render(
                "usecase.ts.jinja",
                name=self.usecase_type_name(usecase),
                token=self.usecase_token_name(usecase),
                methods=methods,
            ),
        )

    def _schema(self, ctx, schema, name: str) -> None:
        if schema is None:
            ctx.append_output(self.output, self.render("interface.ts.jinja", name=name, heritage=[], props=[]))
            return
        if schema.is_enum:
            ctx.append_output(self.output, self.render("enum.ts.jinja", name=name, members=schema.enum))
            return
        if not schema.properties and schema.type not in (None, "object"):
            # A method body given as a type reference aliases that type
            ctx.append_output(self.output, self.render("alias.ts.jinja", name=name, type=ts_type(schema)))
            self.logger.debug(f"  [GEN] ts alias {name}")
            return
        props = [
            {"name": p.name, "optional": not p.required, "type": ts_type(p)}
            for p in schema.properties
        ]
        heritage = [self.split_namespace(n)[1] for n in (schema.extends or {})]
        ctx.append_output(
            self.output,
            self.render("interface.ts.jinja", name=name, heritage=heritage, props=props),
        )
        self.logger.debug(f"  [GEN] ts interface {name}")
