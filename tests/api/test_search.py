"""API tests for global search."""

SEARCH = "/api/v1/search/"


async def test_short_query_returns_nothing(client, make_project):
    await make_project("Solar quote builder")

    for q in ("", "s", "  s  "):
        data = (await client.get(SEARCH, params={"q": q})).json()
        assert data == {"projects": [], "tasks": []}


async def test_matches_title_and_description_case_insensitively(client, make_project):
    by_title = await make_project("Solar Quote Builder")
    by_description = await make_project("Pricing", description="Feeds the QUOTE engine")
    await make_project("Unrelated")

    data = (await client.get(SEARCH, params={"q": "quote"})).json()

    assert {p["id"] for p in data["projects"]} == {by_title["id"], by_description["id"]}
    assert set(data["projects"][0]) == {"id", "title", "slug", "status", "priority"}


async def test_results_are_capped_at_five_per_kind(client, make_project, make_task):
    project = await make_project("Battery bundle")
    for n in range(7):
        await make_project(f"Battery upsell {n}")
        await make_task(project["id"], f"Battery sizing {n}")

    data = (await client.get(SEARCH, params={"q": "battery"})).json()

    assert len(data["projects"]) == 5
    assert len(data["tasks"]) == 5


async def test_task_results_carry_their_project(client, make_project, make_task):
    project = await make_project("Permit tracker")
    task = await make_task(project["id"], "Collect HOA approval", description="Upload 100% signed form")

    data = (await client.get(SEARCH, params={"q": "hoa"})).json()
    assert data["projects"] == []
    [hit] = data["tasks"]
    assert hit["id"] == task["id"]
    assert hit["project"] == {
        "id": project["id"],
        "title": "Permit tracker",
        "slug": project["slug"],
    }

    # Wildcards in the query are matched literally
    percent = (await client.get(SEARCH, params={"q": "100%"})).json()
    assert [t["id"] for t in percent["tasks"]] == [task["id"]]
    assert (await client.get(SEARCH, params={"q": "0%s"})).json()["tasks"] == []
