"""Sample dataset for local development.

``seed_database`` upserts by slug (tasks by title within their project), so
running it repeatedly never duplicates rows.
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from sunboard.core.database import get_session_factory, init_database
from sunboard.core.repositories import (
    PillarRepository,
    ProjectRepository,
    TaskRepository,
    TeamRepository,
)
from sunboard.core.schemas import PillarCreate, ProjectCreate, TaskCreate, TeamCreate

logger = logging.getLogger(__name__)

PILLARS = [
    {
        "name": "Data Foundation",
        "slug": "data-foundation",
        "description": "Clean, unified data every other capability depends on.",
        "color": "#0EA5E9",
        "icon": "database",
        "order_index": 0,
    },
    {
        "name": "Knowledge Generation",
        "slug": "knowledge-generation",
        "description": "Turning data into reporting, scoring and insight.",
        "color": "#8B5CF6",
        "icon": "lightbulb",
        "order_index": 1,
    },
    {
        "name": "Human Empowerment",
        "slug": "human-empowerment",
        "description": "Tools that make sales, ops and installers faster.",
        "color": "#F59E0B",
        "icon": "users",
        "order_index": 2,
    },
]

TEAMS = [
    {"name": "Technology", "slug": "technology", "color": "#3B82F6"},
    {"name": "Operations", "slug": "operations", "color": "#10B981"},
    {"name": "Sales", "slug": "sales", "color": "#EF4444"},
    {"name": "Marketing", "slug": "marketing", "color": "#EC4899"},
]

PROJECTS = [
    {
        "title": "Unified Data Layer",
        "slug": "unified-data-layer",
        "description": "Central API that aggregates CRM, messaging, telephony and "
        "accounting data into one consistent interface.",
        "why_it_matters": "Foundation for all other projects.",
        "category": "Data Infrastructure",
        "status": "in_progress",
        "priority": "critical",
        "difficulty": "hard",
        "pillar": "data-foundation",
        "team": "technology",
        "estimated_hours_min": 180,
        "estimated_hours_max": 240,
        "tasks": [
            {"title": "Source system inventory", "phase": "discovery", "status": "completed",
             "ai_potential": "low", "is_foundational": True},
            {"title": "Unified schema design", "phase": "planning", "status": "in_progress",
             "difficulty": "hard", "is_critical_path": True},
            {"title": "CRM connector", "phase": "development", "ai_potential": "medium"},
            {"title": "Data quality monitoring", "phase": "monitoring", "ai_potential": "high"},
        ],
    },
    {
        "title": "Reporting Hub",
        "slug": "reporting-hub",
        "description": "Automated weekly digests, provider ROI analysis and performance metrics.",
        "why_it_matters": "Leadership visibility without manual report generation.",
        "category": "Analytics",
        "status": "planning",
        "priority": "high",
        "difficulty": "medium",
        "pillar": "knowledge-generation",
        "team": "operations",
        "estimated_hours_min": 100,
        "estimated_hours_max": 140,
        "tasks": [
            {"title": "Stakeholder report audit", "phase": "discovery", "ai_potential": "medium"},
            {"title": "Weekly digest automation", "phase": "development", "ai_potential": "high"},
            {"title": "Dashboard training sessions", "phase": "training", "difficulty": "easy"},
        ],
    },
    {
        "title": "SDR Portal",
        "slug": "sdr-portal",
        "description": "Prioritized contact lists, conversation summaries and call prep for SDRs.",
        "why_it_matters": "SDRs work faster and make better contact decisions.",
        "category": "Sales Tools",
        "status": "in_progress",
        "priority": "critical",
        "difficulty": "hard",
        "pillar": "human-empowerment",
        "team": "sales",
        "estimated_hours_min": 150,
        "estimated_hours_max": 200,
        "tasks": [
            {"title": "SDR workflow shadowing", "phase": "discovery", "status": "completed"},
            {"title": "Contact prioritization rules", "phase": "planning", "ai_potential": "high",
             "is_critical_path": True},
            {"title": "Call prep view", "phase": "development", "status": "blocked"},
            {"title": "Pilot with two SDRs", "phase": "rollout"},
        ],
    },
    {
        "title": "Campaign OS",
        "slug": "campaign-os",
        "description": "Lead provider management with ROI tracking and validation automation.",
        "why_it_matters": "Marketing spend goes to the best-performing lead sources.",
        "category": "Marketing",
        "status": "idea",
        "priority": "medium",
        "difficulty": "medium",
        "pillar": "knowledge-generation",
        "team": "marketing",
        "estimated_hours_min": 100,
        "estimated_hours_max": 140,
        "tasks": [
            {"title": "Lead provider scorecard", "phase": "planning", "ai_potential": "medium"},
        ],
    },
]


async def _upsert_by_slug(repo, items: list[dict], schema) -> dict:
    ids = {}
    for item in items:
        existing = await repo.get_by_slug(item["slug"])
        if existing is None:
            existing = await repo.create(schema(**item))
            logger.info("Seeded %s %s", schema.__name__.removesuffix("Create").lower(), item["slug"])
        ids[item["slug"]] = existing.id
    return ids


async def seed_database(session: AsyncSession) -> dict[str, int]:
    """Insert any missing seed rows. Returns how many of each kind exist in the dataset."""
    pillar_ids = await _upsert_by_slug(PillarRepository(session), PILLARS, PillarCreate)
    team_ids = await _upsert_by_slug(TeamRepository(session), TEAMS, TeamCreate)

    project_repo = ProjectRepository(session)
    task_repo = TaskRepository(session)
    task_total = 0

    for entry in PROJECTS:
        data = {k: v for k, v in entry.items() if k not in ("pillar", "team", "tasks")}
        project = await project_repo.get_by_slug(data["slug"])
        if project is None:
            project = await project_repo.create(
                ProjectCreate(
                    **data,
                    pillar_id=pillar_ids[entry["pillar"]],
                    owner_team_id=team_ids[entry["team"]],
                )
            )
            logger.info("Seeded project %s", project.slug)

        existing_titles = {t.title for t in await task_repo.get_by_project(project.id)}
        for index, task in enumerate(entry["tasks"]):
            task_total += 1
            if task["title"] in existing_titles:
                continue
            await task_repo.create(
                TaskCreate(
                    project_id=project.id,
                    owner_team_id=team_ids[entry["team"]],
                    order_index=index,
                    **task,
                )
            )

        completed, total = await task_repo.get_completion(project.id)
        await project_repo.set_progress(project.id, round(completed * 100 / total) if total else 0)

    return {
        "pillars": len(pillar_ids),
        "teams": len(team_ids),
        "projects": len(PROJECTS),
        "tasks": task_total,
    }


async def run_seed() -> dict[str, int]:
    """Create tables if needed and seed the configured database."""
    await init_database()
    async with get_session_factory()() as session:
        return await seed_database(session)
