"""
Generation context: the single mutable accumulator of a generation run.

- `types`: global type registry (name -> Schema), write-once per name
- `files`: virtual output path -> OutputFile (content chunks + import table)
- `ext`: generator id -> scratch state carried across before/generate/after
"""

from dataclasses import dataclass, field

from zeusgen.errors import ResolutionError, ValidationError
from zeusgen.ir.raw import GConfig


@dataclass
class OutputFile:
    chunks: list = field(default_factory=list)
    # import source -> ordered unique symbols
    imports: dict = field(default_factory=dict)

    @property
    def content(self) -> str:
        return "".join(self.chunks)


class GenerationContext:
    def __init__(self, gconfig: GConfig = None):
        self.gconfig = gconfig if gconfig is not None else GConfig()
        self.types = {}
        self.files = {}
        self.ext = {}

    # --------------------------------------------------------------------------
    # Type registry

    def register_type(self, schema) -> None:
        existing = self.types.get(schema.name)
        if existing is not None:
            raise ValidationError(
                f"found duplicated type '{schema.name}' in '{existing.src}' and '{schema.src}'"
            )
        self.types[schema.name] = schema

    def add_types_from_def(self, definition) -> None:
        for schema in definition.types:
            self.register_type(schema)

    def get_type(self, name: str):
        if name not in self.types:
            raise ResolutionError(f"cannot find type '{name}'")
        return self.types[name]

    def has_type(self, name: str) -> bool:
        return name in self.types

    # --------------------------------------------------------------------------
    # Virtual output files

    def _file(self, path: str) -> OutputFile:
        if path not in self.files:
            self.files[path] = OutputFile()
        return self.files[path]

    def append_output(self, path: str, content: str) -> None:
        self._file(path).chunks.append(content)

    def append_imports(self, path: str, source: str, symbols) -> None:
        """Add `symbols` imported from `source` to `path`, keeping first-seen order."""
        table = self._file(path).imports
        existing = table.setdefault(source, [])
        for symbol in symbols or ():
            if symbol not in existing:
                existing.append(symbol)

    def get_output(self, path: str) -> str:
        return self.files[path].content if path in self.files else ""

    # --------------------------------------------------------------------------
    # Generator configuration / scratch state

    def get_generator_config(self, generator_id: str) -> dict:
        if generator_id not in self.gconfig.generators:
            raise ValidationError(f"missing generator '{generator_id}' in config")
        return self.gconfig.generators[generator_id]

    def get_output_by_generator_id(self, generator_id: str) -> str:
        return self.get_generator_config(generator_id).get("output")

    def ext_state(self, generator_id: str, factory=dict):
        if generator_id not in self.ext:
            self.ext[generator_id] = factory()
        return self.ext[generator_id]
