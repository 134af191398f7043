"""
One generation run:

    ctx = GenerationContext(gconfig)
    register the types of every definition
    for each configured generator (config order): before -> generate -> after
    flush ctx.files under the output directory

Any error aborts the run before the flush, so nothing is written.
"""

from zeusgen.context import GenerationContext
from zeusgen.gen_logging import get_logger
from zeusgen.generators.registry import default_registry
from zeusgen.output import write_output

logger = get_logger(__name__)


def build_context(gconfig, definitions, registry=None) -> GenerationContext:
    """Run every configured generator over `definitions` and return the filled context."""
    registry = registry or default_registry()
    ctx = GenerationContext(gconfig)
    for definition in definitions:
        ctx.add_types_from_def(definition)
    logger.debug(f"[GEN] {len(ctx.types)} type(s) registered from {len(definitions)} definition(s)")

    for generator_id, config in gconfig.generators.items():
        registry.run(ctx, generator_id, config or {}, definitions)
    return ctx


def generate(gconfig, definitions, out_dir, registry=None, dry_run: bool = False):
    """Generate every configured backend into `out_dir`. Returns the context."""
    definitions = list(definitions)
    ctx = build_context(gconfig, definitions, registry)
    if dry_run:
        for path in ctx.files:
            logger.info(f"[WRITE] (dry run) {path}")
        return ctx
    write_output(ctx, out_dir)
    return ctx
