"""
Pytest configuration and shared fixtures for the zeusgen test suite.
"""

import logging
import shutil
import tempfile
from pathlib import Path

import pytest

from zeusgen.context import GenerationContext
from zeusgen.ir.raw import GConfig
from zeusgen.language import get_metamodel
from zeusgen.loader import load_zeus_def


@pytest.fixture(scope="session")
def project_root():
    """Return the project root directory."""
    return Path(__file__).parent.parent


@pytest.fixture
def temp_output_dir():
    """Create a temporary directory for IDL sources and generated output."""
    temp_dir = tempfile.mkdtemp(prefix="zeus_test_")
    yield Path(temp_dir)
    shutil.rmtree(temp_dir, ignore_errors=True)


@pytest.fixture(scope="session")
def zeus_metamodel():
    """Return the Zeus metamodel (cached for session)."""
    return get_metamodel()


@pytest.fixture
def write_zeus_file(temp_output_dir):
    """Factory fixture to write IDL content to a temporary file."""
    def _write(content: str, filename: str = "test.zeus") -> Path:
        file_path = temp_output_dir / filename
        file_path.parent.mkdir(parents=True, exist_ok=True)
        file_path.write_text(content)
        return file_path
    return _write


@pytest.fixture
def build_zeus_def(write_zeus_file):
    """Factory fixture returning (Definition, GConfig) built from IDL content."""
    def _build(content: str, filename: str = "test.zeus"):
        definition, gconfig, _ = load_zeus_def(write_zeus_file(content, filename))
        return definition, gconfig
    return _build


@pytest.fixture
def make_context():
    """Factory fixture: a GenerationContext with the types of `definitions` registered."""
    def _make(*definitions, gconfig: GConfig = None):
        ctx = GenerationContext(gconfig)
        for definition in definitions:
            ctx.add_types_from_def(definition)
        return ctx
    return _make


# Test data fixtures for common scenarios

@pytest.fixture
def todo_zeus():
    """IDL with enums, a managed entity, consumed structs, rules and inline bodies."""
    return """
@ts.output("types.ts");
@gql.output("schema.graphql");
@sql.output("schema.sql");
@rest_client.output("client.ts");

enum Status {
  OPEN;
  DONE = 5;
  ARCHIVED;
}

struct GeneralObjectMeta {
  string createdAt;
}

@general-entity
@sql({"table": "todos"})
struct Todo {
  @required @sql({"primary": true}) string id;
  string title;
  Status status;
  string[] tags;
}

struct CreateTodoRequest {
  string title;
  Status status;
}

struct CreateTodoResponse {
  Todo todo;
}

service TodoService {
  @rest({"apiPrefix": "/api"});

  rule "^create.*" {
    @rest({"method": "post", "path": "/todos"});
    @gql({"type": "mutation"});
  }

  createTodo(CreateTodoRequest): CreateTodoResponse;

  @rest({"method": "get", "path": "/todos/:id"})
  @gql({"type": "query"})
  getTodo({ string id; }): { Todo todo; };

  ping;
}
"""


@pytest.fixture(autouse=True)
def reset_gen_logging():
    """Drop handlers the CLI installs so later tests log through pytest again."""
    yield
    gen_logger = logging.getLogger("zeus.gen")
    for handler in list(gen_logger.handlers):
        gen_logger.removeHandler(handler)
    gen_logger.setLevel(logging.NOTSET)
    gen_logger.propagate = True
