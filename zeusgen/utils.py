import re

from rich.console import Console
from rich.tree import Tree


def upper_first(text: str) -> str:
    return text[:1].upper() + text[1:]


def _words(text: str) -> list:
    # "createTodoItem" / "create_todo-item" / "HTTPServer" -> word list
    text = re.sub(r"[^0-9A-Za-z]+", " ", text)
    return re.findall(r"[A-Z]+(?=[A-Z][a-z]|\d|\b)|[A-Z]?[a-z]+|[A-Z]+|\d+", text)


def camel_case(text: str) -> str:
    words = _words(text)
    if not words:
        return ""
    return words[0].lower() + "".join(w.capitalize() for w in words[1:])


def snake_case(text: str) -> str:
    return "_".join(w.lower() for w in _words(text))


def _schema_label(schema) -> str:
    if schema is None:
        return "void"
    if schema.enum is not None:
        return "enum " + ", ".join(f"{e['name']}={e.get('value')}" for e in schema.enum)
    if schema.type == "array" and schema.items is not None:
        return f"{schema.items.type}[]"
    if schema.type:
        return schema.type
    return "{ " + ", ".join(p.name for p in schema.properties) + " }"


def print_definition_debug(definitions, import_graph=None, console: Console = None):
    """Pretty-print definitions (types, usecases, methods, options) as a tree."""
    console = console or Console()
    for definition in definitions:
        root = Tree(f"[bold]{definition.src}[/bold]")

        types = root.add("types")
        for schema in definition.types:
            node = types.add(f"{schema.name}: {_schema_label(schema)}")
            if schema.extends:
                node.add(f"extends {', '.join(schema.extends)}")
            for prop in schema.properties:
                node.add(f"{prop.name}: {_schema_label(prop)}")
            if schema.gen:
                node.add(f"[dim]gen {schema.gen}[/dim]")

        usecases = root.add("usecases")
        for usecase in definition.usecases:
            u_node = usecases.add(usecase.name)
            if usecase.rules:
                u_node.add(f"[dim]{len(usecase.rules)} rule(s)[/dim]")
            for method in usecase.methods:
                m_node = u_node.add(
                    f"{method.name}({_schema_label(method.req)}): {_schema_label(method.res)}"
                )
                if method.gen:
                    m_node.add(f"[dim]gen {method.gen}[/dim]")

        console.print(root)

    if import_graph is not None and import_graph.number_of_edges():
        graph = Tree("[bold]imports[/bold]")
        for importer, imported in import_graph.edges():
            graph.add(f"{importer} -> {imported}")
        console.print(graph)
