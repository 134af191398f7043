"""
Raw IR: declaration folding, option-path merge and import resolution.
"""

from zeusgen.ir.raw import RawDefinition, GConfig
from zeusgen.ir.options import assign_by_path, options_to_bag, merge_value
from zeusgen.ir.assembler import assemble
from zeusgen.ir.resolver import ImportResolver, load

__all__ = [
    "RawDefinition",
    "GConfig",
    "assign_by_path",
    "options_to_bag",
    "merge_value",
    "assemble",
    "ImportResolver",
    "load",
]
