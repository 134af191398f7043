"""
Flush a GenerationContext to the real filesystem.

Each virtual file is written under the output root with its import table
rendered as a header, chosen by file suffix.
"""

from pathlib import Path

from zeusgen.errors import ValidationError
from zeusgen.gen_logging import get_logger

logger = get_logger(__name__)


def _ts_imports(imports: dict) -> str:
    # A source with no symbols is a side-effect import
    return "".join(
        f"import {{ {', '.join(symbols)} }} from '{source}';\n" if symbols else f"import '{source}';\n"
        for source, symbols in imports.items()
    )


def _py_imports(imports: dict) -> str:
    return "".join(
        f"from {source} import {', '.join(symbols)}\n"
        for source, symbols in imports.items()
        if symbols
    )


IMPORT_RENDERERS = {
    ".ts": _ts_imports,
    ".py": _py_imports,
}


def render_file(path: str, output_file) -> str:
    renderer = IMPORT_RENDERERS.get(Path(path).suffix)
    header = renderer(output_file.imports) if renderer and output_file.imports else ""
    if header:
        header += "\n"
    return header + output_file.content


def _target(root: Path, rel_path: str) -> Path:
    target = (root / rel_path).resolve()
    if root != target and root not in target.parents:
        raise ValidationError(f"output path '{rel_path}' escapes the output directory '{root}'")
    return target


def write_output(ctx, root) -> list:
    """Write every virtual file of `ctx` below `root`; returns the written paths."""
    root = Path(root).resolve()
    # Validate every path before touching the disk
    targets = [(path, _target(root, path)) for path in ctx.files]

    written = []
    for rel_path, target in targets:
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(render_file(rel_path, ctx.files[rel_path]), encoding="utf-8")
        logger.debug(f"  [WRITE] {target}")
        written.append(target)
    logger.info(f"[WRITE] {len(written)} file(s) written to {root}")
    return written
