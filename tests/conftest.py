"""Shared fixtures: in-memory database for store tests, file database for CLI runs."""

import pytest
from click.testing import CliRunner

from seeder.db.base import create_db_engine, init_db, make_session_factory
from seeder.main import cli


@pytest.fixture
def engine():
    engine = create_db_engine("sqlite://")
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session(engine):
    factory = make_session_factory(engine)
    with factory() as session:
        yield session


@pytest.fixture
def db_url(tmp_path):
    url = f"sqlite:///{tmp_path / 'seed.db'}"
    engine = create_db_engine(url)
    init_db(engine)
    engine.dispose()
    return url


@pytest.fixture
def db_session(db_url):
    """Session on the CLI database, for checking what a command wrote."""
    engine = create_db_engine(db_url)
    factory = make_session_factory(engine)
    with factory() as session:
        yield session
    engine.dispose()


@pytest.fixture
def run(db_url):
    runner = CliRunner()

    def invoke(*args, input=None):
        return runner.invoke(cli, ["--database-url", db_url, *args], input=input)

    return invoke
