"""
SQL DDL for schemas carrying a `sql` option.

Referenced struct types get their own table and an id column; arrays of
structs get a join table. Generated tables are tracked in the scratch slot so
each table is emitted once per run.
"""

from zeusgen.generators.base import Generator
from zeusgen.utils import snake_case

SQL_TYPES = {
    "string": "text",
    "number": "double precision",
    "float": "real",
    "integer": "integer",
    "int32": "integer",
    "i32": "integer",
    "bigint": "bigint",
    "bool": "boolean",
    "boolean": "boolean",
}


def sql_type(type_name: str) -> str:
    return SQL_TYPES.get(type_name, "text")


def table_name(schema) -> str:
    sql = schema.gen.get("sql")
    if isinstance(sql, dict) and sql.get("table"):
        return sql["table"]
    return snake_case(schema.name)


class SQLGenerator(Generator):
    generator_id = "sql"

    @property
    def id_type(self) -> str:
        return self.config.get("defaultIDType") or "uuid"

    def before(self, ctx) -> None:
        ctx.ext[self.generator_id] = {"generated_tables": set()}

    def generate_definition(self, ctx, definition) -> None:
        for schema in definition.types:
            if schema.gen.get("sql") is not None and not schema.is_enum:
                self.generate_table(ctx, schema)

    def generate_table(self, ctx, schema) -> None:
        generated = self.state(ctx)["generated_tables"]
        name = table_name(schema)
        if name in generated:
            return
        # Marked before descending so self-references terminate
        generated.add(name)

        columns = []
        for prop in schema.properties:
            column = self._column(ctx, schema, name, prop)
            if column is not None:
                columns.append(column)

        ctx.append_output(self.output, self.render("table.sql.jinja", table=name, columns=columns))
        self.logger.debug(f"  [GEN] sql table {name}")

    def _column(self, ctx, owner, owner_table: str, prop):
        sql = prop.gen.get("sql") if isinstance(prop.gen.get("sql"), dict) else {}

        if prop.is_primitive and not prop.is_array:
            if sql.get("ref"):
                self.generate_table(ctx, ctx.get_type(sql["ref"]["type"]))
                column_type = self.id_type
            else:
                column_type = sql.get("type") or sql_type(prop.type)
            return {"name": prop.name, "type": column_type, "primary": bool(sql.get("primary"))}

        if prop.is_array:
            item_type = self.split_namespace(prop.items.type)[1]
            if prop.items.is_primitive:
                return {"name": prop.name, "type": f"{sql_type(item_type)}[]", "primary": False}
            target = ctx.get_type(item_type)
            if target.is_enum:
                return {"name": prop.name, "type": "smallint[]", "primary": False}
            target_table = table_name(target)
            self.generate_table(ctx, target)
            ctx.append_output(
                self.output,
                self.render(
                    "table.sql.jinja",
                    table=f"{owner_table}_{target_table}s",
                    columns=[
                        {"name": f"{owner_table}_id", "type": self.id_type, "primary": False},
                        {"name": f"{target_table}_id", "type": self.id_type, "primary": False},
                    ],
                ),
            )
            return None

        target = ctx.get_type(self.split_namespace(prop.type)[1])
        if target.is_enum:
            return {"name": prop.name, "type": "smallint", "primary": False}
        self.generate_table(ctx, target)
        return {"name": f"{prop.name}_id", "type": self.id_type, "primary": False}
