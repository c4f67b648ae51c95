"""
Tests for ``GET /api/v1/dependent-filter-options``.
"""

import pytest

from dependent_filter.models import Client, Project, TimeEntry
from dependent_filter.services.filters.types import BooleanFilter, DependentFilter
from dependent_filter.services.resources.registry import Resource, resource_registry

URL = "/api/v1/dependent-filter-options"
CLIENT_KEY = "dependent-filter-client_id"
PROJECT_KEY = "dependent-filter-project_id"
USER_KEY = "dependent-filter-user_id"


@pytest.fixture()
def projects_resource():
    client = DependentFilter.make("Client", Client, "client_id")
    project = DependentFilter.make("Project", Project, "project_id").depends_on(
        client, foreign_key="client_id"
    )
    return resource_registry.register(
        Resource("projects", TimeEntry, [client, project, BooleanFilter.make("Billable", "billable")])
    )


# ── 404s ─────────────────────────────────────────────────────────

def test_unknown_resource_is_404_with_empty_array(api):
    resp = api.get(URL, params={"resource": "doesNotExist", "filter": "x"})
    assert resp.status_code == 404
    assert resp.json() == []


def test_missing_resource_param_is_404(api):
    resp = api.get(URL)
    assert resp.status_code == 404
    assert resp.json() == []


def test_unknown_filter_is_404_with_empty_array(api):
    resp = api.get(URL, params={"resource": "time-entries", "filter": "doesNotExist"})
    assert resp.status_code == 404
    assert resp.json() == []


def test_plain_filter_is_not_eligible(api):
    resp = api.get(URL, params={"resource": "time-entries", "filter": "boolean-filter-billable"})
    assert resp.status_code == 404
    assert resp.json() == []


# ── Resolution ───────────────────────────────────────────────────

def test_parent_value_narrows_child(api, acme_globex_db, projects_resource):
    resp = api.get(URL, params={
        "resource": "projects",
        "filter": PROJECT_KEY,
        CLIENT_KEY: "1",
    })
    assert resp.status_code == 200
    assert resp.json() == [{"label": "Acme Launch", "value": 10}]


def test_missing_parent_leaves_child_unconstrained(api, acme_globex_db, projects_resource):
    resp = api.get(URL, params={"resource": "projects", "filter": PROJECT_KEY})
    assert resp.status_code == 200
    assert resp.json() == [
        {"label": "Acme Launch", "value": 10},
        {"label": "Globex Merger", "value": 11},
    ]


def test_empty_parent_leaves_child_unconstrained(api, acme_globex_db, projects_resource):
    resp = api.get(URL, params={"resource": "projects", "filter": PROJECT_KEY, CLIENT_KEY: ""})
    assert [o["value"] for o in resp.json()] == [10, 11]


def test_parent_without_matches_returns_empty_list(api, acme_globex_db, projects_resource):
    resp = api.get(URL, params={"resource": "projects", "filter": PROJECT_KEY, CLIENT_KEY: "99"})
    assert resp.status_code == 200
    assert resp.json() == []


def test_root_filter_lists_everything(api, acme_globex_db, projects_resource):
    resp = api.get(URL, params={"resource": "projects", "filter": CLIENT_KEY})
    assert resp.json() == [
        {"label": "Acme", "value": 1},
        {"label": "Globex", "value": 2},
    ]


def test_identical_requests_return_identical_results(api, acme_globex_db, projects_resource):
    params = {"resource": "projects", "filter": PROJECT_KEY, CLIENT_KEY: "2"}
    first = api.get(URL, params=params).json()
    second = api.get(URL, params=params).json()
    assert first == second == [{"label": "Globex Merger", "value": 11}]


def test_relationship_cascade_on_demo_resource(api, demo_db):
    resp = api.get(URL, params={
        "resource": "time-entries",
        "filter": USER_KEY,
        PROJECT_KEY: "11",
    })
    assert resp.status_code == 200
    assert resp.json() == [
        {"label": "Bruno", "value": 101},
        {"label": "Carla", "value": 102},
    ]


def test_extra_fields_are_merged_into_options(api, demo_db):
    resp = api.get(URL, params={
        "resource": "time-entries",
        "filter": PROJECT_KEY,
        CLIENT_KEY: "2",
    })
    assert resp.json() == [{"label": "Globex Merger", "value": 11, "code": "GLX-M"}]
