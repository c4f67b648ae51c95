"""
Demo models — clients, projects, users and the time entries they log.

Tables: client, project, app_user, project_user, time_entry.

``time_entry`` is the listing collection of the ``time-entries``
resource; the other tables back its cascading filters
(Client → Project → User).
"""

from typing import List, Optional

from sqlalchemy import Boolean, Column, ForeignKey, Integer, String, Table
from sqlalchemy.orm import Mapped, mapped_column, relationship

from dependent_filter.core.database import Base


project_user = Table(
    "project_user",
    Base.metadata,
    Column("project_id", ForeignKey("project.id"), primary_key=True),
    Column("user_id", ForeignKey("app_user.id"), primary_key=True),
)


class Client(Base):
    """Customer that owns projects."""
    __tablename__ = "client"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False)

    projects: Mapped[List["Project"]] = relationship(back_populates="client")


class Project(Base):
    """Project delivered for one client."""
    __tablename__ = "project"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    code: Mapped[Optional[str]] = mapped_column(String(20), nullable=True)
    client_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("client.id"), nullable=False
    )

    client: Mapped["Client"] = relationship(back_populates="projects")
    users: Mapped[List["User"]] = relationship(
        secondary=project_user, back_populates="projects"
    )


class User(Base):
    """Staff member assigned to projects."""
    __tablename__ = "app_user"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True)

    projects: Mapped[List["Project"]] = relationship(
        secondary=project_user, back_populates="users"
    )


class TimeEntry(Base):
    """Hours logged by a user against a project."""
    __tablename__ = "time_entry"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    description: Mapped[str] = mapped_column(String(200), nullable=False)
    hours: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    billable: Mapped[bool] = mapped_column(Boolean, default=True)
    client_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("client.id"), nullable=False
    )
    project_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("project.id"), nullable=False
    )
    user_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("app_user.id"), nullable=False
    )
