"""
TypeScript REST client: one class per usecase exposing every method that
carries a `rest` option.

    @rest({"method": "get", "path": "/todos/:id"})
    getTodo(GetTodoRequest): Todo;

Path variables (`:id` or `{id}`) are taken from the request; for `get` and
`delete` the remaining request leaves (see `flatten`) become query
parameters unless `rest.query` lists them explicitly.
"""

import re

from zeusgen.errors import ValidationError
from zeusgen.generators.base import Generator
from zeusgen.model.flatten import flatten, flat_name

PATH_VAR = re.compile(r":([A-Za-z_]\w*)|\{([A-Za-z_]\w*)\}")
BODYLESS_METHODS = ("get", "delete")


def path_vars(path: str) -> list:
    return [m.group(1) or m.group(2) for m in PATH_VAR.finditer(path)]


def path_template(path: str) -> str:
    """/todos/:id -> /todos/${req.id}"""
    return PATH_VAR.sub(lambda m: "${req." + (m.group(1) or m.group(2)) + "}", path)


class RestClientGenerator(Generator):
    generator_id = "rest_client"

    @property
    def types_import(self) -> str:
        return self.config.get("tsTypeImport") or "./types"

    @property
    def http_import(self) -> str:
        return self.config.get("httpClientImport") or "./http"

    def generate_definition(self, ctx, definition) -> None:
        for usecase in definition.usecases:
            methods = [m for m in usecase.methods if isinstance(m.gen.get("rest"), dict)]
            if not methods:
                continue
            self._client(ctx, usecase, methods)

    def _client(self, ctx, usecase, methods) -> None:
        prefix = ""
        usecase_rest = usecase.gen.get("rest")
        if isinstance(usecase_rest, dict):
            prefix = (usecase_rest.get("apiPrefix") or "").rstrip("/")

        rendered = []
        for method in methods:
            rest = method.gen["rest"]
            req_name = self.request_type_name(method)
            res_name = self.response_type_name(method)
            ctx.append_imports(self.output, self.types_import, [req_name, res_name])
            for source, names in self._extra_imports(usecase, method, rest):
                ctx.append_imports(self.output, source, names)

            http_method = (rest.get("method") or "get").lower()
            path = prefix + (rest.get("path") or "/" + method.name)
            in_path = path_vars(path)
            query = self._query(ctx, method, rest, http_method, in_path)

            rendered.append(
                {
                    "name": method.name,
                    "req": req_name,
                    "res": res_name,
                    "http_method": http_method,
                    "path": path_template(path),
                    "query": query,
                    "has_body": http_method not in BODYLESS_METHODS,
                }
            )

        ctx.append_imports(self.output, self.http_import, ["ZeusHttpClient"])
        ctx.append_output(
            self.output,
            self.render("client.ts.jinja", name=self.usecase_type_name(usecase) + "Client", methods=rendered),
        )
        self.logger.debug(f"  [GEN] rest client {usecase.name} ({len(rendered)} method(s))")

    @staticmethod
    def _extra_imports(usecase, method, rest) -> list:
        """`extraImports` entries are `{"from": "<module>", "names": [...]}` objects."""
        imports = []
        for extra in rest.get("extraImports") or ():
            names = extra.get("names") if isinstance(extra, dict) else None
            if (
                not isinstance(extra, dict)
                or not isinstance(extra.get("from"), str)
                or not isinstance(names or [], list)
            ):
                raise ValidationError(
                    f"invalid rest.extraImports entry {extra!r} on '{usecase.name}.{method.name}', "
                    'expected {"from": "<module>", "names": [...]}'
                )
            imports.append((extra["from"], names or []))
        return imports

    def _query(self, ctx, method, rest, http_method: str, in_path) -> list:
        """Return [{"name": query key, "expr": request accessor}]."""
        if rest.get("query") is not None:
            return [{"name": q, "expr": f"req.{q}"} for q in rest["query"]]
        if http_method not in BODYLESS_METHODS or method.req is None:
            return []
        query = []
        for leaf in flatten(ctx, method.req):
            if len(leaf) == 1 and leaf[0] in in_path:
                continue
            query.append({"name": flat_name(leaf), "expr": "req?." + "?.".join(leaf)})
        return query
