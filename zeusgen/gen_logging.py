"""
Logging for the zeusgen pipeline.

Modules log through `get_logger(__name__)`. The package prefix is swapped for
"zeus.gen", so "zeusgen.ir.resolver" logs as "zeus.gen.ir.resolver" and one
stage can be tuned on its own, e.g. `logging.getLogger("zeus.gen.generators")`.

Messages carry their own stage tags ("[IMPORT]", "[GEN]", "[WRITE]"), so the
console handler prints them bare. A record logged with `exc_info` also gets
its traceback, which is how `-v` shows the cause of a failed command.
"""

import logging
import sys

ROOT_LOGGER = "zeus.gen"
_PACKAGE = "zeusgen"


def get_logger(name: str = None) -> logging.Logger:
    """Return the zeus.gen logger for a module `__name__` (root logger for None)."""
    if not name or name in (ROOT_LOGGER, _PACKAGE):
        return logging.getLogger(ROOT_LOGGER)
    if name.startswith(_PACKAGE + "."):
        name = name[len(_PACKAGE) + 1:]
    return logging.getLogger(f"{ROOT_LOGGER}.{name}")


def configure_gen_logging(verbose: bool = False, quiet: bool = False, stream=None) -> logging.Handler:
    """
    Install the console handler on the zeus.gen logger and return it.

    Levels:
        --verbose / -v  -> DEBUG
        (default)       -> INFO
        --quiet / -q    -> WARNING

    A handler installed by an earlier call is replaced, so the latest level
    and stream win. Handlers attached by anything else are left alone.
    """
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.WARNING
    else:
        level = logging.INFO

    root_logger = logging.getLogger(ROOT_LOGGER)
    root_logger.setLevel(level)
    for handler in list(root_logger.handlers):
        if isinstance(handler, _ConsoleHandler):
            root_logger.removeHandler(handler)

    handler = _ConsoleHandler(stream if stream is not None else sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(_GenFormatter())
    root_logger.addHandler(handler)
    root_logger.propagate = False
    return handler


class _ConsoleHandler(logging.StreamHandler):
    """Marks the handler owned by configure_gen_logging."""


class _GenFormatter(logging.Formatter):
    """Bare message, plus the traceback when the record carries one."""

    def format(self, record: logging.LogRecord) -> str:
        message = record.getMessage()
        if record.exc_info:
            message = f"{message}\n{self.formatException(record.exc_info)}"
        return message
