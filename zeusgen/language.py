"""
Grammar and parser entry points for the Zeus IDL.

The textX metamodel is built from grammar/zeus.tx. Parsing produces a flat
declaration list of plain dicts (one per top-level statement) which the raw IR
assembler folds into a RawDefinition:

    {"kind": "import",  "path": ...}
    {"kind": "option",  "name": ..., "value": ...}
    {"kind": "enum",    "name": ..., "options": [...], "members": [...]}
    {"kind": "struct",  "name": ..., "options": [...], "extends": [...], "fields": [...]}
    {"kind": "service", "name": ..., "options": [...], "methods": [...], "rules": [...]}
"""

import json
from os.path import join, dirname, abspath
from pathlib import Path

from textx import metamodel_from_file, get_location, TextXSyntaxError

from zeusgen.errors import ParseError


# ------------------------------------------------------------------------------
# Constants
THIS_DIR = dirname(abspath(__file__))
GRAMMAR_DIR = join(THIS_DIR, "grammar")


# ------------------------------------------------------------------------------
# Metamodel creation

def get_metamodel(debug: bool = False):
    """Load the textX metamodel from grammar/zeus.tx."""
    return metamodel_from_file(
        join(GRAMMAR_DIR, "zeus.tx"),
        autokwd=True,
        auto_init_attributes=False,
        debug=debug,
    )


ZeusMetaModel = get_metamodel(debug=False)


# ------------------------------------------------------------------------------
# Public parse functions

def parse_str(source: str, filename: str = None) -> list:
    """Parse IDL source text into a declaration list."""
    try:
        model = ZeusMetaModel.model_from_str(source, file_name=filename)
    except TextXSyntaxError as e:
        raise ParseError(
            getattr(e, "message", str(e)),
            filename=filename or getattr(e, "filename", None),
            line=e.line,
            col=e.col,
        ) from e
    return [_declaration(d) for d in model.declarations]


def parse_file(path) -> list:
    """Parse an IDL file into a declaration list."""
    path = Path(path)
    return parse_str(path.read_text(encoding="utf-8"), filename=str(path))


# ------------------------------------------------------------------------------
# textX model -> declaration dicts

def _declaration(node) -> dict:
    kind = node.__class__.__name__
    if kind == "ImportDef":
        return {"kind": "import", "path": node.path}
    if kind == "GlobalOptionDef":
        option = _option(node.option)
        return {"kind": "option", "name": option["name"], "value": option["value"]}
    if kind == "EnumDef":
        return _enum(node)
    if kind == "StructDef":
        return _struct(node)
    if kind == "ServiceDef":
        return _service(node)
    raise ParseError(f"unexpected declaration '{kind}'", **_location(node))


def _location(node) -> dict:
    loc = get_location(node)
    return {"filename": loc.get("filename"), "line": loc.get("line"), "col": loc.get("col")}


def _option(node) -> dict:
    # A bare `@flag` carries true
    value = True if node.value is None else _json_value(node.value, node)
    return {"name": node.name, "value": value}


def _options(prefix, body=()) -> list:
    """Options written before a declaration come first, then body-level ones."""
    return [_option(o) for o in prefix] + [_option(b.option) for b in body]


def _enum(node) -> dict:
    return {
        "kind": "enum",
        "name": node.name,
        "line": _location(node)["line"],
        "options": _options(node.options, node.body_options),
        "members": [
            {"name": m.name, "value": m.value, "options": _options(m.options)}
            for m in node.members
        ],
    }


def _fields(fields) -> list:
    return [
        {"name": f.name, "type": f.type, "options": _options(f.options)}
        for f in fields
    ]


def _struct(node) -> dict:
    return {
        "kind": "struct",
        "name": node.name,
        "line": _location(node)["line"],
        "options": _options(node.options, node.body_options),
        "extends": list(node.extends),
        "fields": _fields(node.fields),
    }


def _method_body(body):
    """
    A method body is either a struct name (str), an inline field list, or None
    when the method has no request/response.
    """
    if body is None:
        return None
    if body.ref:
        return body.ref
    return _fields(body.fields)


def _service(node) -> dict:
    methods = [
        {
            "name": m.name,
            "options": _options(m.options),
            "req": _method_body(m.request),
            "res": _method_body(m.response),
        }
        for m in node.methods
    ]
    rules = [
        {
            "pattern": r.pattern,
            "options": _options((), r.body_options),
            "req": _fields(r.request.fields) if r.request is not None else None,
            "res": _fields(r.response.fields) if r.response is not None else None,
        }
        for r in node.rules
    ]
    return {
        "kind": "service",
        "name": node.name,
        "line": _location(node)["line"],
        "options": _options(node.options, node.body_options),
        "methods": methods,
        "rules": rules,
    }


def _load_scalar(text: str, owner):
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        # The grammar admits any escape and raw control characters; JSON does not
        raise ParseError(f"invalid option literal {text}: {e.msg}", **_location(owner)) from e


def _json_value(node, owner):
    """
    Convert a parsed JSON literal into plain Python data.

    Scalars come back from the grammar as their raw source text, so the json
    module handles escapes, numbers and keywords. `owner` is the closest model
    object, used to locate errors in bare scalars.
    """
    if isinstance(node, str):
        return _load_scalar(node, owner)
    kind = node.__class__.__name__
    if kind == "JsonObject":
        return {_load_scalar(m.key, m): _json_value(m.value, m) for m in node.members}
    if kind == "JsonArray":
        return [_json_value(v, node) for v in node.items]
    raise ParseError(f"unexpected option value '{kind}'", **_location(node))
