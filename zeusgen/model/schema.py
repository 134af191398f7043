"""
Semantic schema: a resolved RawSchema that knows its source, name and parent.

Property types stay opaque strings after construction; resolution against the
context's type registry happens lazily through `resolve_type` because sibling
definitions may not be registered yet when a schema is built.
"""

import copy

from zeusgen.errors import ResolutionError, ValidationError

PRIMITIVE_TYPES = (
    "string",
    "number",
    "bigint",
    "boolean",
    "bool",
    "integer",
    "array",
    "float",
    "int32",
    "i32",
)

# Managed entities get a `meta` property of the sentinel metadata type
MANAGED_ENTITY_OPTION = "general-entity"
META_PROPERTY = "meta"
META_TYPE = "GeneralObjectMeta"


def is_primitive_type(type_name) -> bool:
    return type_name in PRIMITIVE_TYPES


def normalize_heritage(value):
    """`extends` may be given as a name, a list of names or a name -> source map."""
    if value is None:
        return None
    if isinstance(value, str):
        return {value: None}
    if isinstance(value, dict):
        return dict(value)
    return {name: None for name in value}


class DefComponent:
    """Common identity of every semantic element."""

    def __init__(self, src: str, name: str = "", parent=None):
        self.src = src
        self.name = name or ""
        self.parent = parent

    def __repr__(self):
        return f"<{self.__class__.__name__} {self.name or '(anonymous)'} from {self.src}>"


class Schema(DefComponent):
    def __init__(self, src: str, name: str = "", parent=None):
        super().__init__(src, name, parent)
        self.type = None
        self.items = None
        self.properties = []
        self.required = False
        self.namespace = None
        self.gen = {}
        self.enum = None
        self.extends = None
        self.flat_extends = None

    # --------------------------------------------------------------------------
    # Construction

    @classmethod
    def from_raw(cls, raw: dict, src: str, name: str = "", parent=None) -> "Schema":
        raw = raw or {}
        schema = cls(src, name, parent)
        schema.type = raw.get("type")
        schema.required = bool(raw.get("required", False))
        schema.namespace = raw.get("namespace")
        schema.gen = copy.deepcopy(raw.get("gen") or {})
        schema.enum = copy.deepcopy(raw["enum"]) if raw.get("enum") is not None else None
        schema.extends = normalize_heritage(raw.get("extends"))
        schema.flat_extends = normalize_heritage(raw.get("flatExtends"))

        properties = raw.get("properties") or {}
        schema._check_shape(properties)

        if raw.get("items") is not None:
            schema.items = cls.from_raw(raw["items"], src, "", parent=schema)

        for prop_name, prop_raw in properties.items():
            schema.properties.append(cls.from_raw(prop_raw, src, prop_name, parent=schema))

        schema._auto_complete_meta()
        return schema

    def _check_shape(self, properties) -> None:
        label = self.qualified_name
        if self.enum is not None and properties:
            raise ValidationError(
                f"type '{label}' cannot declare both 'enum' and 'properties' ({self.src})"
            )
        if self.parent is not None:
            if self.enum is not None:
                raise ValidationError(
                    f"anonymous enum (defined in properties of a type) is not allowed: '{label}' ({self.src})"
                )
            if properties or self.type == "object":
                raise ValidationError(
                    f"anonymous object declaration is not allowed: '{label}' ({self.src})"
                )

    def _auto_complete_meta(self) -> None:
        if MANAGED_ENTITY_OPTION not in self.gen:
            return
        meta = self.get_prop(META_PROPERTY, allow_missing=True)
        if meta is None:
            auto = Schema(self.src, META_PROPERTY, parent=self)
            auto.type = META_TYPE
            self.properties.append(auto)
        elif meta.type != META_TYPE:
            raise ValidationError(
                f"type of '{META_PROPERTY}' in type '{self.name}' expected to be "
                f"'{META_TYPE}', found '{meta.type}' ({self.src})"
            )

    def inherit_from_raw(self, raw: dict) -> None:
        """
        Append the properties of `raw` to this schema and record its heritage.
        A property name that already exists is a fatal duplicate.
        """
        if raw.get("extends") is not None:
            self.extends = {**(self.extends or {}), **normalize_heritage(raw["extends"])}
        if raw.get("flatExtends") is not None:
            self.flat_extends = {**(self.flat_extends or {}), **normalize_heritage(raw["flatExtends"])}

        for prop_name, prop_raw in (raw.get("properties") or {}).items():
            if self.get_prop(prop_name, allow_missing=True) is not None:
                raise ValidationError(
                    f"found duplicated property '{prop_name}' in type '{self.qualified_name}' ({self.src})"
                )
            self.properties.append(Schema.from_raw(prop_raw, self.src, prop_name, parent=self))

    # --------------------------------------------------------------------------
    # Queries

    @property
    def qualified_name(self) -> str:
        if self.parent is not None and getattr(self.parent, "name", ""):
            return f"{self.parent.name}.{self.name}"
        return self.name or "(anonymous)"

    @property
    def is_enum(self) -> bool:
        return self.enum is not None

    @property
    def is_primitive(self) -> bool:
        return is_primitive_type(self.type)

    @property
    def is_array(self) -> bool:
        return self.type == "array"

    def get_prop(self, name: str, allow_missing: bool = False):
        for prop in self.properties:
            if prop.name == name:
                return prop
        if allow_missing:
            return None
        raise ResolutionError(f"cannot find '{name}' in properties of type '{self.name}'")

    def resolve_type(self, ctx):
        """
        Resolve `type` on demand:
        - a primitive tag (including "array"; see `items`)
        - this schema itself when it is an inline object or enum
        - otherwise the named schema from the context registry
        """
        if self.type is None:
            return self
        if is_primitive_type(self.type):
            return self.type
        # `core.User` lives in the registry as `User`
        return ctx.get_type(self.type.rpartition(".")[2])

    def get_extended(self, ctx) -> list:
        """Resolve the recorded `extends` heritage against the registry."""
        return [ctx.get_type(name) for name in (self.extends or {})]
