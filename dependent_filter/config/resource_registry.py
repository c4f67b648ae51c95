"""
Resource Registry Configuration.

Declares the resources exposed by the admin panel and their filters.
This is the single file to edit when adding a resource or a filter.

The ``time-entries`` resource shows the full cascade::

    Client ──foreign_key=client_id──▶ Project ──relationship=projects──▶ User

  - Picking a client narrows the project dropdown to that client.
  - Picking a project narrows the user dropdown to users assigned to it
    (active users only, via the scope).
  - Clearing a parent un-narrows its children.

To add a resource:
  1. Add (or reuse) its model in ``dependent_filter/models``.
  2. Write a ``build_*`` function returning a ``Resource``.
  3. Add it to ``RESOURCE_BUILDERS``.
"""

from typing import Callable, List

from dependent_filter.models import Client, Project, TimeEntry, User
from dependent_filter.services.filters.types import (
    BooleanFilter,
    DependentFilter,
)
from dependent_filter.services.resources.registry import (
    Resource,
    ResourceRegistry,
    resource_registry,
)


def build_time_entries() -> Resource:
    client = DependentFilter.make("Client", Client, "client_id")

    project = (
        DependentFilter.make("Project", Project, "project_id")
        .depends_on(client, foreign_key="client_id")
        .with_extra("code")
    )

    user = (
        DependentFilter.make("User", User, "user_id")
        .depends_on(project, relationship="projects")
        .scope(lambda stmt, parents: stmt.where(User.is_active.is_(True)))
    )

    billable = BooleanFilter.make("Billable", "billable")

    return Resource(
        key="time-entries",
        model=TimeEntry,
        filters=[client, project, user, billable],
        label="Time Entries",
    )


RESOURCE_BUILDERS: List[Callable[[], Resource]] = [
    build_time_entries,
]


def register_default_resources(registry: ResourceRegistry = resource_registry) -> None:
    """Register every declared resource not yet present in *registry*."""
    for build in RESOURCE_BUILDERS:
        resource = build()
        if resource.key not in registry:
            registry.register(resource)
