"""Declaration-time behaviour of DependentFilter and the plain filter types."""

import pytest
from sqlalchemy import select

from dependent_filter.core.exceptions import FilterDefinitionError
from dependent_filter.models import Client, Project, TimeEntry, User
from dependent_filter.services.filters.base import FilterOption, is_blank
from dependent_filter.services.filters.dependent import ForeignKeyLink, RelationshipLink
from dependent_filter.services.filters.types import BooleanFilter, DependentFilter, SelectFilter


@pytest.mark.parametrize("column", ["client_id", "project_id", "x"])
def test_key_is_derived_from_bound_column(column):
    flt = DependentFilter.make("Anything", Client, column)
    assert flt.key() == f"dependent-filter-{column}"


def test_empty_column_is_rejected():
    with pytest.raises(FilterDefinitionError):
        DependentFilter.make("Client", Client, "")


def test_defaults():
    flt = DependentFilter.make("Client", Client, "client_id")
    assert flt.name == "Client"
    assert flt.label_column == "name"
    assert flt.value_column == "id"
    assert flt.dependencies == []


def test_depends_on_builds_tagged_links_and_chains():
    client = DependentFilter.make("Client", Client, "client_id")
    project = DependentFilter.make("Project", Project, "project_id")
    user = DependentFilter.make("User", User, "user_id")

    assert project.depends_on(client, foreign_key="client_id") is project
    user.depends_on(project, relationship="projects")

    assert project.dependencies == [ForeignKeyLink("dependent-filter-client_id", "client_id")]
    assert user.dependencies == [RelationshipLink("dependent-filter-project_id", "projects")]


@pytest.mark.parametrize("kwargs", [{}, {"foreign_key": "client_id", "relationship": "client"}])
def test_depends_on_requires_exactly_one_mode(kwargs):
    client = DependentFilter.make("Client", Client, "client_id")
    project = DependentFilter.make("Project", Project, "project_id")
    with pytest.raises(FilterDefinitionError):
        project.depends_on(client, **kwargs)


def test_scope_last_write_wins():
    flt = DependentFilter.make("User", User, "user_id")
    flt.scope(lambda stmt, parents: stmt.where(User.name == "Ana"))
    flt.scope(lambda stmt, parents: stmt.where(User.is_active.is_(True)))

    sql = str(flt.build_query())
    assert "is_active" in sql
    assert "app_user.name =" not in sql


def test_label_and_value_overrides():
    flt = DependentFilter.make("Project", Project, "project_id").label("code").value("name")
    sql = str(flt.build_query())
    assert sql.startswith("SELECT project.code, project.name")
    assert "ORDER BY project.code ASC, project.name ASC" in sql


def test_limit_validation_and_effective_limit(monkeypatch):
    from dependent_filter.core.config import settings

    flt = DependentFilter.make("Client", Client, "client_id")
    monkeypatch.setattr(settings, "OPTIONS_MAX_RESULTS", 50)
    assert flt.effective_limit == 50

    flt.limit(0)
    assert flt.effective_limit == 0
    assert "LIMIT" not in str(flt.build_query())

    with pytest.raises(FilterDefinitionError):
        flt.limit(-1)


def test_to_dict_exposes_depends_on_map():
    client = DependentFilter.make("Client", Client, "client_id")
    project = DependentFilter.make("Project", Project, "project_id").depends_on(
        client, foreign_key="client_id"
    )

    meta = project.to_dict([FilterOption(label="Acme Launch", value=10)])

    assert meta["key"] == "dependent-filter-project_id"
    assert meta["component"] == "dependent-select-filter"
    assert meta["class"] == "DependentFilter"
    assert meta["dependsOn"] == {"dependent-filter-client_id": "dependent-filter-client_id"}
    assert meta["options"] == [{"label": "Acme Launch", "value": 10}]
    assert meta["currentValue"] == ""
    assert client.to_dict()["dependsOn"] == {}


def test_apply_constrains_listing_column():
    flt = DependentFilter.make("Project", Project, "project_id")
    stmt = flt.apply(select(TimeEntry), TimeEntry, 10)
    assert "WHERE time_entry.project_id = :project_id_1" in str(stmt)


def test_plain_filters_have_their_own_keys():
    assert SelectFilter.make("Status", "status").key() == "select-filter-status"
    assert BooleanFilter.make("Billable", "billable").key() == "boolean-filter-billable"


def test_select_filter_accepts_option_shapes():
    flt = SelectFilter.make(
        "Hours", "hours",
        [1, {"label": "Two", "value": 2, "hint": "x"}, FilterOption(label="Three", value=3)],
    )
    assert [o.to_dict() for o in flt.options] == [
        {"label": "1", "value": 1},
        {"label": "Two", "value": 2, "hint": "x"},
        {"label": "Three", "value": 3},
    ]


class TestFilterOption:

    def test_extra_fields_are_merged(self):
        opt = FilterOption(label="Acme Launch", value=10, extra={"code": "ACM-L"})
        assert opt.to_dict() == {"label": "Acme Launch", "value": 10, "code": "ACM-L"}

    def test_extra_never_overrides_label_or_value(self):
        opt = FilterOption(label="A", value=1, extra={"label": "B", "value": 2})
        assert opt.to_dict() == {"label": "A", "value": 1}

    @pytest.mark.parametrize("label", [None, ""])
    def test_missing_label_falls_back_to_value(self, label):
        assert FilterOption(label=label, value=7).to_dict() == {"label": "7", "value": 7}

    def test_non_string_label_is_kept(self):
        assert FilterOption(label=2024, value=1).to_dict() == {"label": 2024, "value": 1}


@pytest.mark.parametrize("value", [None, "", "0", 0, 0.0, False, [], {}])
def test_blank_values(value):
    assert is_blank(value)


@pytest.mark.parametrize("value", ["1", "abc", 5, True, [0], "00", "  ", " 0"])
def test_non_blank_values(value):
    assert not is_blank(value)
