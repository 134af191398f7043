"""
Generator registry: generator id -> generator class.

The bundled backends are listed explicitly in `default_registry()`; nothing is
registered as an import side effect.
"""

from zeusgen.errors import ValidationError
from zeusgen.gen_logging import get_logger
from zeusgen.generators.gql_generator import GraphQLSchemaGenerator
from zeusgen.generators.rest_client_generator import RestClientGenerator
from zeusgen.generators.sql_generator import SQLGenerator
from zeusgen.generators.ts_generator import TypescriptGenerator

logger = get_logger(__name__)


class GeneratorRegistry:
    def __init__(self, generators: dict = None):
        self._generators = {}
        for generator_id, generator_cls in (generators or {}).items():
            self.register(generator_id, generator_cls)

    def register(self, generator_id: str, generator_cls) -> None:
        if generator_id in self._generators:
            raise ValidationError(f"generator '{generator_id}' is already registered")
        self._generators[generator_id] = generator_cls

    def get(self, generator_id: str):
        if generator_id not in self._generators:
            raise ValidationError(f"cannot find generator with id '{generator_id}'")
        return self._generators[generator_id]

    def ids(self) -> list:
        return list(self._generators)

    def __contains__(self, generator_id) -> bool:
        return generator_id in self._generators

    def run(self, ctx, generator_id: str, config: dict, definitions) -> None:
        """Instantiate `generator_id` with `config` and run its full lifecycle."""
        generator = self.get(generator_id)(config)
        logger.info(f"[GEN] {generator_id}")
        generator.before(ctx)
        generator.generate(ctx, *definitions)
        generator.after(ctx)


def default_registry() -> GeneratorRegistry:
    return GeneratorRegistry(
        {
            TypescriptGenerator.generator_id: TypescriptGenerator,
            GraphQLSchemaGenerator.generator_id: GraphQLSchemaGenerator,
            SQLGenerator.generator_id: SQLGenerator,
            RestClientGenerator.generator_id: RestClientGenerator,
        }
    )
