"""
Tests for the resource metadata / listing endpoints and the app factory.
"""

from dependent_filter.services.resources.registry import resource_registry


def test_root_and_health(api):
    assert api.get("/").json()["status"] == "running"

    health = api.get("/api/v1/system/health").json()
    assert health["status"] == "ok"
    assert health["resources"] == 1


def test_startup_registers_default_resources(api):
    assert "time-entries" in resource_registry
    resp = api.get("/api/v1/resources")
    assert resp.json() == [{
        "key": "time-entries",
        "label": "Time Entries",
        "filters": [
            "dependent-filter-client_id",
            "dependent-filter-project_id",
            "dependent-filter-user_id",
            "boolean-filter-billable",
        ],
    }]


def test_filter_metadata(api, demo_db):
    resp = api.get("/api/v1/resources/time-entries/filters")
    assert resp.status_code == 200
    meta = {f["key"]: f for f in resp.json()}

    client = meta["dependent-filter-client_id"]
    assert client["dependsOn"] == {}
    assert client["options"] == [
        {"label": "Acme", "value": 1},
        {"label": "Globex", "value": 2},
    ]

    project = meta["dependent-filter-project_id"]
    assert project["component"] == "dependent-select-filter"
    assert project["dependsOn"] == {
        "dependent-filter-client_id": "dependent-filter-client_id",
    }
    assert [o["label"] for o in project["options"]] == [
        "Acme Audit", "Acme Launch", "Globex Merger",
    ]

    user = meta["dependent-filter-user_id"]
    assert user["dependsOn"] == {
        "dependent-filter-project_id": "dependent-filter-project_id",
    }
    assert [o["label"] for o in user["options"]] == ["Ana", "Bruno", "Carla"]

    billable = meta["boolean-filter-billable"]
    assert billable["component"] == "boolean-filter"
    assert "dependsOn" not in billable


def test_filter_metadata_unknown_resource(api):
    resp = api.get("/api/v1/resources/nope/filters")
    assert resp.status_code == 404


def test_rows_without_filters(api, demo_db):
    rows = api.get("/api/v1/resources/time-entries/rows").json()
    assert [r["description"] for r in rows] == [
        "Kickoff", "Audit prep", "Due diligence", "Launch review",
    ]


def test_rows_apply_filter_values(api, demo_db):
    rows = api.get("/api/v1/resources/time-entries/rows", params={
        "dependent-filter-client_id": "1",
        "dependent-filter-project_id": "10",
    }).json()
    assert [r["description"] for r in rows] == ["Kickoff", "Launch review"]


def test_rows_apply_boolean_filter(api, demo_db):
    rows = api.get("/api/v1/resources/time-entries/rows", params={
        "dependent-filter-client_id": "1",
        "boolean-filter-billable": "0",
    }).json()
    assert [r["description"] for r in rows] == ["Audit prep"]


def test_rows_ignore_unknown_and_empty_keys(api, demo_db):
    rows = api.get("/api/v1/resources/time-entries/rows", params={
        "unknown": "1",
        "dependent-filter-client_id": "",
        "limit": 2,
    }).json()
    assert len(rows) == 2


def test_rows_unknown_resource(api):
    assert api.get("/api/v1/resources/nope/rows").status_code == 404
