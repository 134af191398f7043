"""
Definition loading glue.

- `.zeus` files go through the import resolver and the IDL assembler
- `.yaml` / `.yml` files are RawDefinition documents read with PyYAML
- the global configuration (`defs` globs + `generators`) is YAML as well
"""

from pathlib import Path

import yaml

from zeusgen.errors import ValidationError
from zeusgen.gen_logging import get_logger
from zeusgen.ir.options import merge_value
from zeusgen.ir.raw import GConfig
from zeusgen.ir.resolver import ImportResolver
from zeusgen.model.definition import Definition

logger = get_logger(__name__)

ZEUS_SUFFIXES = (".zeus",)
YAML_SUFFIXES = (".yaml", ".yml")


def _read_yaml(path: Path) -> dict:
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValidationError(f"expected a mapping at the top of '{path}'")
    return data


def load_gconfig(path) -> GConfig:
    path = Path(path)
    gconfig = GConfig.from_dict(_read_yaml(path))
    logger.debug(f"[CONFIG] {path}: {len(gconfig.generators)} generator(s), {len(gconfig.defs)} def glob(s)")
    return gconfig


def load_def_from_yaml(path) -> Definition:
    path = Path(path).resolve()
    logger.debug(f"[IMPORT] Reading {path}")
    return Definition.from_raw(_read_yaml(path), str(path), path.stem)


def load_zeus_def(path, include_paths=()):
    """Return (Definition, GConfig, ImportResolver) for one entry IDL file."""
    return load_zeus_defs([path], include_paths)


def load_zeus_defs(paths, include_paths=()):
    """
    Assemble several entry IDL files into one Definition sharing a resolver.
    The Definition takes its source and name from the first entry.
    """
    resolver = ImportResolver(include_paths)
    raw_def, gconfig = resolver.load_many(paths)
    first = Path(paths[0])
    return Definition.from_raw(raw_def, str(first.resolve()), first.stem), gconfig, resolver


def _merge_generators(gconfig: GConfig, file_gconfig: GConfig):
    if gconfig is None:
        return
    for generator_id, options in file_gconfig.generators.items():
        gconfig.generators[generator_id] = merge_value(gconfig.generators.get(generator_id), options)


def load_definition(path, include_paths=(), gconfig: GConfig = None) -> Definition:
    """
    Load one definition file by suffix. Global options found in IDL files are
    merged into `gconfig.generators` when a config is given.
    """
    path = Path(path)
    suffix = path.suffix.lower()
    if suffix in ZEUS_SUFFIXES:
        definition, file_gconfig, _ = load_zeus_def(path, include_paths)
        _merge_generators(gconfig, file_gconfig)
        return definition
    if suffix in YAML_SUFFIXES:
        return load_def_from_yaml(path)
    raise ValidationError(f"unsupported definition file '{path}' (expected .zeus, .yaml or .yml)")


def load_defs_from_globs(globs, base_dir=".", include_paths=(), gconfig: GConfig = None) -> list:
    """
    Expand `globs` relative to `base_dir` (sorted per glob) and load every match.

    All matched IDL files are assembled together into a single Definition,
    placed where the first IDL match appears. Imports shared between them are
    therefore loaded once and structs may be referenced across files. YAML
    files stay one Definition each.
    """
    base_dir = Path(base_dir)
    matched = []
    seen = set()
    for pattern in globs:
        matches = sorted(base_dir.glob(pattern))
        if not matches:
            logger.warning(f"  [WARN] definition glob '{pattern}' matched nothing under {base_dir}")
        for match in matches:
            key = match.resolve()
            if key in seen or not match.is_file():
                continue
            seen.add(key)
            matched.append(match)

    zeus_paths = [m for m in matched if m.suffix.lower() in ZEUS_SUFFIXES]
    definitions = []
    for match in matched:
        if match.suffix.lower() not in ZEUS_SUFFIXES:
            definitions.append(load_definition(match, include_paths, gconfig))
        elif match is zeus_paths[0]:
            definition, file_gconfig, _ = load_zeus_defs(zeus_paths, include_paths)
            _merge_generators(gconfig, file_gconfig)
            definitions.append(definition)
    return definitions
