"""
Pytest fixtures for the dependent filter tests.

Provides a temporary SQLite database wired into the global
``db_manager``, the demo data set, a clean resource registry per test
and a FastAPI ``TestClient``.
"""

import asyncio

import pytest
from fastapi.testclient import TestClient

from dependent_filter.core.database import db_manager
from dependent_filter.main import create_fastapi_app
from dependent_filter.models import Client, Project
from dependent_filter.models.seed import seed_demo_data
from dependent_filter.services.resources.registry import resource_registry


def run(coro):
    """Drive a coroutine from synchronous test code."""
    return asyncio.run(coro)


async def resolve(flt, manager, parent_values=None):
    async with manager.get_session() as session:
        return await flt.resolve_options(session, parent_values)


@pytest.fixture(autouse=True)
def clean_registry():
    resource_registry.clear()
    yield
    resource_registry.clear()


@pytest.fixture()
def db(tmp_path):
    """Empty schema in a throwaway SQLite file."""
    original = db_manager.url
    db_manager.configure(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
    run(db_manager.create_all())
    yield db_manager
    run(db_manager.close())
    db_manager.configure(original)


@pytest.fixture()
def demo_db(db):
    """Clients, projects, users and time entries of the demo resource."""
    run(seed_demo_data(db))
    return db


async def _seed_clients_and_projects(manager):
    async with manager.get_session() as session:
        session.add_all([
            Client(id=1, name="Acme"),
            Client(id=2, name="Globex"),
            Project(id=10, name="Acme Launch", client_id=1),
            Project(id=11, name="Globex Merger", client_id=2),
        ])


@pytest.fixture()
def acme_globex_db(db):
    """Two clients, one project each."""
    run(_seed_clients_and_projects(db))
    return db


@pytest.fixture()
def api(db):
    app = create_fastapi_app()
    with TestClient(app) as client:
        yield client
