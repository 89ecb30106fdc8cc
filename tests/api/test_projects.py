"""API tests for project listing, detail and CRUD."""

PROJECTS = "/api/v1/projects/"


async def test_create_project_derives_slug(make_project):
    project = await make_project("Unified Data Layer", priority="critical")
    assert project["slug"] == "unified-data-layer"
    assert project["priority"] == "critical"
    assert project["status"] == "idea"
    assert project["task_count"] == 0
    assert project["progress_percentage"] == 0


async def test_duplicate_slug_conflicts(client, make_project):
    await make_project("Reporting Hub")
    resp = await client.post(PROJECTS, json={"title": "Reporting  Hub!"})
    assert resp.status_code == 409


async def test_unknown_pillar_is_404(client):
    resp = await client.post(
        PROJECTS,
        json={"title": "Orphan", "pillar_id": "00000000-0000-0000-0000-000000000001"},
    )
    assert resp.status_code == 404


async def test_invalid_vocabulary_rejected(client):
    resp = await client.post(PROJECTS, json={"title": "Bad", "priority": "urgent"})
    assert resp.status_code == 422
    resp = await client.post(PROJECTS, json={"title": "Bad", "data_readiness": "sort_of"})
    assert resp.status_code == 422


async def test_list_sorts_priority_by_rank(client, make_project):
    for priority in ("low", "critical", "medium", "high"):
        await make_project(f"{priority} project", priority=priority)

    resp = await client.get(PROJECTS, params={"sort_by": "priority", "sort_order": "asc"})
    assert resp.status_code == 200
    assert [p["priority"] for p in resp.json()] == ["critical", "high", "medium", "low"]

    resp = await client.get(PROJECTS, params={"sort_by": "priority", "sort_order": "desc"})
    assert [p["priority"] for p in resp.json()] == ["low", "medium", "high", "critical"]


async def test_list_filters_are_conjunctive(client, make_project):
    await make_project("A", status="planning", priority="high")
    await make_project("B", status="planning", priority="low")
    await make_project("C", status="idea", priority="high")

    resp = await client.get(
        PROJECTS,
        params={"status": "planning", "priority": "high", "difficulty": "all"},
    )
    assert [p["title"] for p in resp.json()] == ["A"]


async def test_list_filters_by_assessment_and_search(client, make_project):
    await make_project("SDR Portal", data_readiness="ready")
    await make_project("Installer Portal", data_readiness="partial")
    await make_project("Reporting Hub", data_readiness="ready")

    resp = await client.get(PROJECTS, params={"data_readiness": "ready", "search": "portal"})
    assert [p["title"] for p in resp.json()] == ["SDR Portal"]


async def test_unknown_sort_key_is_422(client, make_project):
    await make_project("A")
    resp = await client.get(PROJECTS, params={"sort_by": "phase"})
    assert resp.status_code == 422
    assert "phase" in resp.json()["detail"]


async def test_get_by_slug_includes_tasks_and_review_status(client, make_project, make_task):
    project = await make_project("SDR Portal")
    await make_task(project["id"], "Shadow SDRs", phase="discovery")

    resp = await client.get(f"{PROJECTS}sdr-portal")
    assert resp.status_code == 200
    detail = resp.json()
    assert detail["id"] == project["id"]
    assert [t["title"] for t in detail["tasks"]] == ["Shadow SDRs"]
    assert detail["task_count"] == 1
    assert detail["review_status"] == {
        "management_reviewed": False,
        "operations_sales_reviewed": False,
        "product_tech_reviewed": False,
        "review_count": 0,
        "all_reviewed": False,
    }

    resp = await client.get(f"{PROJECTS}{project['id']}")
    assert resp.json()["slug"] == "sdr-portal"


async def test_get_unknown_project_is_404(client):
    resp = await client.get(f"{PROJECTS}no-such-project")
    assert resp.status_code == 404


async def test_update_and_archive(client, make_project):
    project = await make_project("Campaign OS")

    resp = await client.patch(
        f"{PROJECTS}{project['id']}", json={"status": "in_progress", "is_archived": True}
    )
    assert resp.status_code == 200
    assert resp.json()["status"] == "in_progress"

    listed = (await client.get(PROJECTS)).json()
    assert listed == []
    listed = (await client.get(PROJECTS, params={"include_archived": True})).json()
    assert [p["title"] for p in listed] == ["Campaign OS"]


async def test_delete_project(client, make_project):
    project = await make_project("Short Lived")
    resp = await client.delete(f"{PROJECTS}{project['id']}")
    assert resp.status_code == 204

    resp = await client.delete(f"{PROJECTS}{project['id']}")
    assert resp.status_code == 404


async def test_project_events_are_published(client, bus, make_project):
    project = await make_project("Evented")
    await client.patch(f"{PROJECTS}{project['id']}", json={"priority": "high"})

    types = [e["type"] for e in bus.get_recent_events()]
    assert types == ["project.created", "project.updated"]
