"""ORM models — imported here so ``Base.metadata`` knows every table."""

from dependent_filter.models.demo_models import (
    Client,
    Project,
    TimeEntry,
    User,
    project_user,
)

__all__ = ["Client", "Project", "TimeEntry", "User", "project_user"]
