"""
Raw IR assembler.

Folds a flat, import-expanded declaration list into the RawDefinition maps and
the global configuration. Enums and structs are folded first, then services,
so a method may name any struct of the import tree as its request/response.
"""

import copy

from zeusgen.errors import ResolutionError, ValidationError
from zeusgen.gen_logging import get_logger
from zeusgen.ir.options import assign_by_path, options_to_bag
from zeusgen.ir.raw import RawDefinition, GConfig

logger = get_logger(__name__)


def assemble(declarations, raw_def: RawDefinition = None, gconfig: GConfig = None):
    """
    Fold `declarations` into (RawDefinition, GConfig).

    Existing `raw_def` / `gconfig` objects are extended in place when given.
    """
    raw_def = raw_def if raw_def is not None else RawDefinition()
    gconfig = gconfig if gconfig is not None else GConfig()

    by_kind = {"enum": [], "struct": [], "service": [], "option": []}
    for decl in declarations:
        if decl["kind"] in by_kind:
            by_kind[decl["kind"]].append(decl)

    for decl in by_kind["enum"]:
        _add_type(raw_def, decl, _enum_schema(decl))

    for decl in by_kind["struct"]:
        _add_type(raw_def, decl, _struct_schema(decl))

    # Structs referenced directly by a method are moved out of `types`
    consumed = {}
    for decl in by_kind["service"]:
        if decl["name"] in raw_def.usecases:
            raise ValidationError(
                f"found duplicated service '{decl['name']}' in '{_src(decl)}'"
            )
        raw_def.usecases[decl["name"]] = _usecase(decl, raw_def, consumed)

    for decl in by_kind["option"]:
        assign_by_path(gconfig.generators, decl["name"], decl["value"])

    return raw_def, gconfig


def _src(decl) -> str:
    return decl.get("src") or "<string>"


def _add_type(raw_def: RawDefinition, decl: dict, schema: dict) -> None:
    name = decl["name"]
    if name in raw_def.types:
        raise ValidationError(f"found duplicated type '{name}' in '{_src(decl)}'")
    raw_def.types[name] = schema


# ------------------------------------------------------------------------------
# Types

def _enum_schema(decl: dict) -> dict:
    members = []
    next_value = 0
    seen = set()
    for member in decl["members"]:
        if member["name"] in seen:
            raise ValidationError(
                f"found duplicated member '{member['name']}' in enum '{decl['name']}' ({_src(decl)})"
            )
        seen.add(member["name"])
        value = member["value"] if member["value"] is not None else next_value
        next_value = value + 1
        item = {"name": member["name"], "value": value}
        gen = options_to_bag(member["options"])
        if gen:
            item["gen"] = gen
        members.append(item)
    return {"enum": members, "gen": options_to_bag(decl["options"])}


def _extends_map(names) -> dict:
    """`ns.Base` -> {"Base": "ns"}, `Base` -> {"Base": None}"""
    heritage = {}
    for name in names:
        source, _, type_name = name.rpartition(".")
        heritage[type_name] = source or None
    return heritage


def _struct_schema(decl: dict) -> dict:
    schema = {
        "properties": _properties(decl["fields"], decl["name"], decl),
        "gen": options_to_bag(decl["options"]),
    }
    if decl.get("extends"):
        schema["extends"] = _extends_map(decl["extends"])
    return schema


def field_schema(field: dict) -> dict:
    """`T[]` desugars to {"type": "array", "items": {"type": T}}."""
    type_ref = field["type"]
    if type_ref.endswith("[]"):
        schema = {"type": "array", "items": {"type": type_ref[:-2]}}
    else:
        schema = {"type": type_ref}
    gen = options_to_bag(field["options"])
    if "required" in gen:
        schema["required"] = bool(gen.pop("required"))
    schema["gen"] = gen
    return schema


def _properties(fields, owner: str, decl: dict) -> dict:
    properties = {}
    for field in fields:
        if field["name"] in properties:
            raise ValidationError(
                f"found duplicated property '{field['name']}' in type '{owner}' ({_src(decl)})"
            )
        properties[field["name"]] = field_schema(field)
    return properties


# ------------------------------------------------------------------------------
# Services

def _method_schema(body, raw_def: RawDefinition, consumed: dict, owner: str, decl: dict):
    if body is None:
        return None
    if isinstance(body, str):
        if body in raw_def.types:
            schema = raw_def.types.pop(body)
            consumed[body] = schema
            logger.debug(f"  [CONSUME] '{body}' is now private to '{owner}'")
            return schema
        if body in consumed:
            return copy.deepcopy(consumed[body])
        raise ResolutionError(
            f"cannot find struct '{body}' referenced by method '{owner}' ({_src(decl)})"
        )
    return {"properties": _properties(body, owner, decl)}


def _usecase(decl: dict, raw_def: RawDefinition, consumed: dict) -> dict:
    usecase = {
        "methods": {},
        "rules": [],
        "gen": options_to_bag(decl["options"]),
    }

    for rule in decl.get("rules") or ():
        method = {"gen": options_to_bag(rule["options"])}
        owner = f"{decl['name']}.rule({rule['pattern']})"
        if rule["req"] is not None:
            method["req"] = {"properties": _properties(rule["req"], owner, decl)}
        if rule["res"] is not None:
            method["res"] = {"properties": _properties(rule["res"], owner, decl)}
        usecase["rules"].append({"pattern": rule["pattern"], "method": method})

    for m in decl["methods"]:
        if m["name"] in usecase["methods"]:
            raise ValidationError(
                f"found duplicated method '{m['name']}' in service '{decl['name']}' ({_src(decl)})"
            )
        owner = f"{decl['name']}.{m['name']}"
        method = {"gen": options_to_bag(m["options"])}
        req = _method_schema(m["req"], raw_def, consumed, owner, decl)
        res = _method_schema(m["res"], raw_def, consumed, owner, decl)
        if req is not None:
            method["req"] = req
        if res is not None:
            method["res"] = res
        usecase["methods"][m["name"]] = method

    return usecase
