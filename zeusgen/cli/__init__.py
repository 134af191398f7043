from zeusgen.cli.cli import cli, main

__all__ = ["cli", "main"]
