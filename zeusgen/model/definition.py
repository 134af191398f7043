"""Semantic definition: the top-level schemas and usecases of one source."""

from zeusgen.errors import ResolutionError
from zeusgen.ir.raw import RawDefinition
from zeusgen.model.schema import DefComponent, Schema
from zeusgen.model.usecase import Usecase


class Definition(DefComponent):
    def __init__(self, src: str, name: str = ""):
        super().__init__(src, name)
        self.types = []
        self.usecases = []
        self.schemas = []

    @classmethod
    def from_raw(cls, raw, src: str, name: str = "") -> "Definition":
        """Build schemas first, then usecases (whose methods may apply rules)."""
        if isinstance(raw, dict):
            raw = RawDefinition.from_dict(raw)
        definition = cls(src, name)
        for type_name, raw_schema in raw.types.items():
            definition.types.append(Schema.from_raw(raw_schema, src, type_name))
        for schema_name, raw_schema in raw.schemas.items():
            definition.schemas.append(Schema.from_raw(raw_schema, src, schema_name))
        for usecase_name, raw_usecase in raw.usecases.items():
            definition.usecases.append(Usecase.from_raw(raw_usecase, src, usecase_name))
        return definition

    def get_type(self, name: str, allow_missing: bool = False):
        for schema in self.types:
            if schema.name == name:
                return schema
        if allow_missing:
            return None
        raise ResolutionError(f"cannot find type '{name}' in '{self.src}'")

    def get_usecase(self, name: str) -> Usecase:
        for usecase in self.usecases:
            if usecase.name == name:
                return usecase
        raise ResolutionError(f"cannot find usecase '{name}' in '{self.src}'")

    @property
    def methods(self) -> list:
        return [m for u in self.usecases for m in u.methods]
