from pathlib import Path

import click

from datetime import date
from rich.console import Console

from zeusgen.errors import ZeusError
from zeusgen.gen_logging import configure_gen_logging, get_logger
from zeusgen.ir.raw import GConfig
from zeusgen.loader import load_gconfig, load_defs_from_globs, load_definition, load_zeus_def
from zeusgen.pipeline import generate
from zeusgen.utils import print_definition_debug

console = Console()
logger = get_logger(__name__)


def _stamp() -> str:
    return f"[{date.today().strftime('%Y-%m-%d')}]"


def _report_failure(context, action: str, error: Exception):
    console.print(f"{_stamp()} {action} failed with error(s): {error}", style="red", markup=False)
    logger.debug(f"[{action.upper()}] failure details", exc_info=error)
    context.exit(1)


def _load_for_gen(config_path, zeus_path, include_paths):
    """Return (gconfig, definitions) from either a YAML config or a single IDL entry file."""
    if config_path:
        gconfig = load_gconfig(config_path)
        definitions = load_defs_from_globs(
            gconfig.defs, Path(config_path).parent, include_paths, gconfig
        )
        return gconfig, definitions

    definition, gconfig, _ = load_zeus_def(zeus_path, include_paths)
    return gconfig, [definition]


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Debug logging.")
@click.option("-q", "--quiet", is_flag=True, help="Only warnings and errors.")
@click.pass_context
def cli(context, verbose, quiet):
    context.ensure_object(dict)
    configure_gen_logging(verbose=verbose, quiet=quiet)


@cli.command("gen", help="Run every configured generator and write the outputs.")
@click.pass_context
@click.option("--config", "config_path", type=click.Path(exists=True, dir_okay=False), help="YAML global config.")
@click.option("--zeus", "zeus_path", type=click.Path(exists=True, dir_okay=False), help="Single IDL entry file.")
@click.option("-I", "--include", "include_paths", multiple=True, type=click.Path(file_okay=False), help="Import search path.")
@click.option("--out", "out_dir", default="generated", help="Output directory (default: ./generated)")
@click.option("--dry-run", is_flag=True, help="Generate without writing files.")
def gen(context, config_path, zeus_path, include_paths, out_dir, dry_run):
    if bool(config_path) == bool(zeus_path):
        raise click.UsageError("exactly one of --config or --zeus is required")
    try:
        gconfig, definitions = _load_for_gen(config_path, zeus_path, include_paths)
        if not gconfig.generators:
            console.print(f"{_stamp()} No generators configured, nothing to do.", style="yellow")
            context.exit(0)
        ctx = generate(gconfig, definitions, Path(out_dir).resolve(), dry_run=dry_run)
    except ZeusError as e:
        _report_failure(context, "Generate", e)
    else:
        where = "(dry run)" if dry_run else f"to: {Path(out_dir).resolve()}"
        console.print(f"{_stamp()} {len(ctx.files)} file(s) emitted {where}", style="green")
        context.exit(0)


@cli.command("validate", help="Parse and build a definition file without generating.")
@click.pass_context
@click.argument("def_path", type=click.Path(exists=True, dir_okay=False))
@click.option("-I", "--include", "include_paths", multiple=True, type=click.Path(file_okay=False))
def validate(context, def_path, include_paths):
    try:
        load_definition(def_path, include_paths, GConfig())
    except ZeusError as e:
        _report_failure(context, "Validation", e)
    else:
        console.print(f"{_stamp()} Definition validation success!", style="green")
        context.exit(0)


@cli.command("inspect", help="Print types, usecases, methods, options and imports of a definition.")
@click.pass_context
@click.argument("def_path", type=click.Path(exists=True, dir_okay=False))
@click.option("-I", "--include", "include_paths", multiple=True, type=click.Path(file_okay=False))
def inspect_cmd(context, def_path, include_paths):
    try:
        import_graph = None
        if Path(def_path).suffix.lower() == ".zeus":
            definition, _, resolver = load_zeus_def(def_path, include_paths)
            import_graph = resolver.graph
        else:
            definition = load_definition(def_path, include_paths)
        console.print(f"{_stamp()} Definition validation success!", style="green")
        print_definition_debug([definition], import_graph, console)
    except ZeusError as e:
        _report_failure(context, "Inspect", e)
    else:
        context.exit(0)


def main():
    cli(prog_name="zeusgen")


if __name__ == "__main__":
    main()
