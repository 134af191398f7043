"""
Generator plugin contract.

A generator is built from its backend config and run as

    gen.before(ctx)
    gen.generate(ctx, *definitions)     # definition order is preserved
    gen.after(ctx)

State that must survive between those stages lives in the context's
per-generator scratch slot (`self.state(ctx)`), never on module globals.
"""

from pathlib import Path

from jinja2 import Environment, FileSystemLoader, StrictUndefined

from zeusgen.errors import ValidationError
from zeusgen.gen_logging import get_logger
from zeusgen.utils import upper_first, camel_case, snake_case

TEMPLATES_DIR = Path(__file__).parent.parent / "templates"


class Generator:
    """Base class of every backend generator."""

    generator_id = None
    template_dir = None

    def __init__(self, config: dict = None):
        self.config = dict(config or {})
        self.logger = get_logger(self.__class__.__module__)
        self._env = None

    # --------------------------------------------------------------------------
    # Lifecycle

    def before(self, ctx) -> None:
        pass

    def generate(self, ctx, *definitions) -> None:
        for definition in definitions:
            self.generate_definition(ctx, definition)

    def generate_definition(self, ctx, definition) -> None:
        raise NotImplementedError(f"{self.__class__.__name__} must implement generate_definition()")

    def after(self, ctx) -> None:
        pass

    # --------------------------------------------------------------------------
    # Config / state

    @property
    def output(self) -> str:
        output = self.config.get("output")
        if not output:
            raise ValidationError(f"generator '{self.generator_id}' requires an 'output' path")
        return output

    def state(self, ctx):
        return ctx.ext_state(self.generator_id)

    # --------------------------------------------------------------------------
    # Templates

    @property
    def env(self) -> Environment:
        if self._env is None:
            self._env = Environment(
                loader=FileSystemLoader(str(TEMPLATES_DIR / (self.template_dir or self.generator_id))),
                trim_blocks=True,
                lstrip_blocks=True,
                keep_trailing_newline=True,
                undefined=StrictUndefined,
            )
        return self._env

    def render(self, template_name: str, **context) -> str:
        return self.env.get_template(template_name).render(**context)

    # --------------------------------------------------------------------------
    # Naming helpers

    @staticmethod
    def split_namespace(type_name: str):
        """
        User       => (None, "User")
        core.User  => ("core", "User")
        a.core.User => ("a.core", "User")
        """
        namespace, _, name = type_name.rpartition(".")
        return (namespace or None, name)

    @staticmethod
    def usecase_type_name(usecase) -> str:
        return upper_first(usecase.name)

    def usecase_instance_name(self, usecase) -> str:
        return camel_case(self.usecase_type_name(usecase))

    def usecase_token_name(self, usecase) -> str:
        return snake_case(self.usecase_type_name(usecase)).upper()

    @staticmethod
    def request_type_name(method) -> str:
        return upper_first(method.name) + "Request"

    @staticmethod
    def response_type_name(method) -> str:
        return upper_first(method.name) + "Response"
