"""
Semantic model built from a RawDefinition.

Schemas are built before methods and methods before usecases; cross-type
references stay as names and are resolved lazily against the context.
"""

from zeusgen.model.schema import (
    Schema,
    DefComponent,
    PRIMITIVE_TYPES,
    MANAGED_ENTITY_OPTION,
    META_PROPERTY,
    META_TYPE,
    is_primitive_type,
)
from zeusgen.model.usecase import Usecase, Method
from zeusgen.model.definition import Definition
from zeusgen.model.rules import apply_rules, merge_generator_options
from zeusgen.model.flatten import flatten, flat_name, prop_by_path

__all__ = [
    "Schema",
    "DefComponent",
    "Usecase",
    "Method",
    "Definition",
    "PRIMITIVE_TYPES",
    "MANAGED_ENTITY_OPTION",
    "META_PROPERTY",
    "META_TYPE",
    "is_primitive_type",
    "apply_rules",
    "merge_generator_options",
    "flatten",
    "flat_name",
    "prop_by_path",
]
