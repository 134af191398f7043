"""
Raw intermediate representation.

Raw schemas, methods and usecases are plain dicts, exactly as they come out of
the assembler or a YAML definition file:

    RawSchema  : {"type", "items", "properties", "enum", "required",
                  "namespace", "gen", "extends", "flatExtends"}
    RawMethod  : {"req": RawSchema, "res": RawSchema, "gen": {...}}
    RawUsecase : {"methods": {name: RawMethod},
                  "rules": [{"pattern": str, "method": RawMethod}],
                  "gen": {...}}

They live only for one parse -> assemble step and are then discarded.
"""

from dataclasses import dataclass, field


@dataclass
class RawDefinition:
    """Unresolved form of one parsed source (or one merged import tree)."""

    types: dict = field(default_factory=dict)
    usecases: dict = field(default_factory=dict)
    schemas: dict = field(default_factory=dict)

    @classmethod
    def from_dict(cls, raw: dict) -> "RawDefinition":
        raw = raw or {}
        return cls(
            types=dict(raw.get("types") or {}),
            usecases=dict(raw.get("usecases") or {}),
            schemas=dict(raw.get("schemas") or {}),
        )


@dataclass
class GConfig:
    """Global configuration: generator id -> backend config, plus definition globs."""

    generators: dict = field(default_factory=dict)
    defs: list = field(default_factory=list)

    @classmethod
    def from_dict(cls, raw: dict) -> "GConfig":
        raw = raw or {}
        return cls(
            generators=dict(raw.get("generators") or {}),
            defs=list(raw.get("defs") or []),
        )
