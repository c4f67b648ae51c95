"""
Demo data for the ``time-entries`` resource.

    python run.py seed
"""

import logging

from sqlalchemy import func, select

from dependent_filter.core.database import DatabaseManager, db_manager
from dependent_filter.models.demo_models import Client, Project, TimeEntry, User

logger = logging.getLogger(__name__)


async def seed_demo_data(manager: DatabaseManager = db_manager) -> bool:
    """
    Create the schema and insert the demo rows.

    Returns ``False`` (and inserts nothing) when clients already exist.
    """
    await manager.create_all()

    async with manager.get_session() as session:
        existing = await session.scalar(select(func.count()).select_from(Client))
        if existing:
            logger.info(f"[Seed] {existing} clients already present, skipping")
            return False

        acme = Client(id=1, name="Acme")
        globex = Client(id=2, name="Globex")

        launch = Project(id=10, name="Acme Launch", code="ACM-L", client=acme)
        audit = Project(id=12, name="Acme Audit", code="ACM-A", client=acme)
        merger = Project(id=11, name="Globex Merger", code="GLX-M", client=globex)

        ana = User(id=100, name="Ana", projects=[launch, audit])
        bruno = User(id=101, name="Bruno", projects=[merger])
        carla = User(id=102, name="Carla", projects=[launch, merger])
        dario = User(id=103, name="Dario", is_active=False, projects=[launch])

        session.add_all([acme, globex, launch, audit, merger, ana, bruno, carla, dario])
        await session.flush()

        session.add_all([
            TimeEntry(description="Kickoff", hours=2, billable=True,
                      client_id=1, project_id=10, user_id=100),
            TimeEntry(description="Audit prep", hours=5, billable=False,
                      client_id=1, project_id=12, user_id=100),
            TimeEntry(description="Due diligence", hours=8, billable=True,
                      client_id=2, project_id=11, user_id=101),
            TimeEntry(description="Launch review", hours=3, billable=True,
                      client_id=1, project_id=10, user_id=102),
        ])

    logger.info("[Seed] Demo data inserted")
    return True
