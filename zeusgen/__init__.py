"""
zeusgen: schema-driven, multi-target code generator.

    definition, gconfig, _ = load_zeus_def("api.zeus")
    generate(gconfig, [definition], "generated")
"""

from zeusgen.errors import ZeusError, ParseError, ResolutionError, ValidationError, ImportNotFoundError
from zeusgen.loader import load_gconfig, load_def_from_yaml, load_defs_from_globs, load_zeus_def
from zeusgen.pipeline import generate

__version__ = "0.1.0"

__all__ = [
    "ZeusError",
    "ParseError",
    "ResolutionError",
    "ValidationError",
    "ImportNotFoundError",
    "load_gconfig",
    "load_def_from_yaml",
    "load_defs_from_globs",
    "load_zeus_def",
    "generate",
]
