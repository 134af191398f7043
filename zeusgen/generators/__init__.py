from zeusgen.generators.base import Generator
from zeusgen.generators.ts_generator import TypescriptGenerator
from zeusgen.generators.gql_generator import GraphQLSchemaGenerator
from zeusgen.generators.sql_generator import SQLGenerator
from zeusgen.generators.rest_client_generator import RestClientGenerator
from zeusgen.generators.registry import GeneratorRegistry, default_registry

__all__ = [
    "Generator",
    "TypescriptGenerator",
    "GraphQLSchemaGenerator",
    "SQLGenerator",
    "RestClientGenerator",
    "GeneratorRegistry",
    "default_registry",
]
