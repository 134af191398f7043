"""
Import resolver.

Recursively loads IDL files referenced by `import` statements and merges them
into a single declaration list. Every file is parsed exactly once (keyed by
its canonical absolute path) and imported declarations come before the
importing file's own declarations.

Import cycles are absorbed by the "already loaded" check; each one is still
reported as a warning using the recorded import graph.
"""

from pathlib import Path

import networkx as nx

from zeusgen.errors import ImportNotFoundError
from zeusgen.gen_logging import get_logger
from zeusgen.ir.assembler import assemble
from zeusgen.ir.raw import RawDefinition, GConfig
from zeusgen.language import parse_file

logger = get_logger(__name__)


class ImportResolver:
    """
    Loads an entry IDL file and everything it imports.

    Lookup order for a relative import: sibling of the including file, then
    each include path in the order given, then the working directory.
    """

    def __init__(self, include_paths=(), resolve_imports: bool = True):
        self.include_paths = [Path(p) for p in dict.fromkeys(include_paths)]
        self.resolve_imports = resolve_imports
        self.loaded = []
        self.graph = nx.DiGraph()

    def locate(self, file, from_file=None) -> Path:
        path = Path(file)
        candidates = []
        if path.is_absolute():
            candidates.append(path)
        else:
            if from_file is not None:
                candidates.append(Path(from_file).parent / path)
            candidates.extend(p / path for p in self.include_paths)
            candidates.append(path)

        for candidate in candidates:
            if candidate.is_file():
                return candidate.resolve()
        raise ImportNotFoundError(str(file), str(from_file) if from_file else None)

    def collect(self, file, from_file=None) -> list:
        """Return the import-expanded declaration list rooted at `file`."""
        path = self.locate(file, from_file)
        key = str(path)
        if from_file is not None:
            self.graph.add_edge(str(from_file), key)
        if key in self.graph and self.graph.nodes[key].get("loaded"):
            logger.debug(f"  [IMPORT] {path.name} already loaded, skipping")
            return []
        self.graph.add_node(key, loaded=True)
        self.loaded.append(path)

        logger.debug(f"[IMPORT] Parsing {path}")
        declarations = parse_file(path)
        for decl in declarations:
            decl["src"] = key

        expanded = []
        if self.resolve_imports:
            for decl in declarations:
                if decl["kind"] == "import":
                    expanded.extend(self.collect(decl["path"], path))
        expanded.extend(d for d in declarations if d["kind"] != "import")
        return expanded

    def cycles(self) -> list:
        return list(nx.simple_cycles(self.graph))

    def load(self, entry):
        """Load `entry` and its imports into (RawDefinition, GConfig)."""
        return self.load_many([entry])

    def load_many(self, entries):
        """
        Load several entry files into one (RawDefinition, GConfig).

        Entries share the loaded set, so a file imported by one entry and
        also listed as an entry contributes its declarations once.
        """
        declarations = []
        for entry in entries:
            declarations.extend(self.collect(entry))
        for cycle in self.cycles():
            names = " -> ".join(Path(p).name for p in cycle + cycle[:1])
            logger.warning(f"  [WARN] import cycle absorbed: {names}")
        return assemble(declarations, RawDefinition(), GConfig())


def load(entry, include_paths=()):
    """Shortcut for ImportResolver(include_paths).load(entry)."""
    return ImportResolver(include_paths).load(entry)
