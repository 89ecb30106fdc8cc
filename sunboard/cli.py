#!/usr/bin/env python3
"""Command line entry point for Sunboard.

Usage:
    # Run the API server
    sunboard serve --port 8000

    # Load the sample dataset (safe to rerun)
    sunboard seed

    # Walk through pending project reviews
    sunboard review --area product_tech
"""

import argparse
import asyncio
import getpass
import sys
from pathlib import Path

from sunboard.client.http import SunboardHTTPClient
from sunboard.core.vocabulary import REVIEWER_AREA
from sunboard.review.preferences import DEFAULT_PATH, ReviewerPreferences
from sunboard.review.questions import QuestionType, questions_for
from sunboard.review.workflow import ReviewWorkflow
from sunboard.utils.config import get_settings
from sunboard.utils.exceptions import SunboardError, ValidationError
from sunboard.utils.logging import configure_logging

REVIEW_HELP = """Commands:
  a            answer this project's questions
  c <text>     comment on the project
  d            mark this review done and move on
  n / s        next / skip
  p            previous
  area <name>  switch reviewer area
  q            quit"""


def _print_project(workflow: ReviewWorkflow) -> None:
    project = workflow.current_project
    stats = workflow.stats
    print(
        f"\n[{workflow.cursor + 1}/{len(workflow.projects)}] {project['title']}"
        f"  ({project.get('status')}, {project.get('priority')} priority)"
    )
    if project.get("description"):
        print(f"  {project['description']}")
    for task in project.get("tasks", []):
        print(f"  - [{task['phase']}] {task['title']} ({task['status']})")
    print(
        f"  answered {workflow.answered_fraction():.0%} | "
        f"reviewed {stats.get('reviewedProjects', 0)}/{stats.get('totalProjects', 0)}"
    )


async def _answer_questions(workflow: ReviewWorkflow) -> None:
    for question in questions_for(workflow.area):
        options = f" [{'/'.join(question.options)}]" if question.options else ""
        previous = workflow.answers.get(question.id, {}).get("value")
        suffix = f" (current: {previous})" if previous else ""
        value = input(f"{question.prompt}{options}{suffix}: ").strip()
        if not value:
            continue
        comment = None
        if question.type is not QuestionType.TEXT:
            comment = input("  comment (optional): ").strip() or None
        try:
            await workflow.answer(question.id, value, comment)
        except ValidationError as e:
            print(f"  {e}")


async def run_review(workflow: ReviewWorkflow, area: str | None = None) -> None:
    """Interactive review loop."""
    if area:
        await workflow.select_area(area)
    elif workflow.area:
        await workflow.refresh()
    else:
        choice = input(f"Reviewer area ({'/'.join(REVIEWER_AREA)}): ").strip()
        await workflow.select_area(choice)

    print(REVIEW_HELP)
    while not workflow.is_finished:
        _print_project(workflow)
        await workflow.ensure_session()
        try:
            line = input("review> ").strip()
        except (EOFError, KeyboardInterrupt):
            print("\nExiting.")
            break

        command, _, rest = line.partition(" ")
        if command in ("q", "quit", "exit"):
            break
        elif command == "a":
            await _answer_questions(workflow)
        elif command == "c":
            await workflow.comment(rest)
        elif command == "d":
            if not await workflow.complete():
                print("Could not complete this review; try again.")
        elif command in ("n", "s"):
            workflow.next()
        elif command == "p":
            workflow.previous()
        elif command == "area":
            try:
                await workflow.select_area(rest.strip())
            except ValidationError as e:
                print(e)
        elif command:
            print(REVIEW_HELP)

    await workflow.drain()
    if workflow.is_finished:
        print(f"All caught up. Review streak: {workflow.preferences.streak} day(s).")


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser. Extracted for testability."""
    parser = argparse.ArgumentParser(
        prog="sunboard",
        description="Sunboard: project tracking with cross-functional reviews",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Show debug logs")
    subparsers = parser.add_subparsers(dest="command")

    serve = subparsers.add_parser("serve", help="Run the API server")
    serve.add_argument("--host", help="Bind address (default: API_HOST)")
    serve.add_argument("--port", type=int, help="Port (default: API_PORT)")
    serve.add_argument("--reload", action="store_true", help="Reload on code changes")

    subparsers.add_parser("seed", help="Load the sample dataset")

    review = subparsers.add_parser("review", help="Review pending projects")
    review.add_argument(
        "--reviewer-id",
        default=getpass.getuser(),
        help="Reviewer identity (default: current user)",
    )
    review.add_argument("--area", choices=list(REVIEWER_AREA), help="Reviewer area")
    review.add_argument("--api-url", help="API base URL (default: SUNBOARD_API_URL)")
    review.add_argument(
        "--preferences",
        default=str(DEFAULT_PATH),
        help=f"Preferences file (default: {DEFAULT_PATH})",
    )
    return parser


async def _review(args: argparse.Namespace) -> None:
    path = Path(args.preferences)
    client = SunboardHTTPClient(base_url=args.api_url)
    workflow = ReviewWorkflow(
        client, args.reviewer_id, ReviewerPreferences.load(path), preferences_path=path
    )
    try:
        await run_review(workflow, args.area)
    finally:
        await client.close()


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    settings = get_settings()

    if args.command is None:
        parser.print_help()
        sys.exit(1)

    if args.verbose:
        configure_logging(level="DEBUG", json_output=False)
    elif args.command == "review":
        # Keep the interactive prompt readable
        configure_logging(level="WARNING", json_output=False)
    else:
        configure_logging(level=settings.logging.level, json_output=settings.logging.json_output)

    if args.command == "serve":
        import uvicorn

        uvicorn.run(
            "sunboard.main:app",
            host=args.host or settings.api.host,
            port=args.port or settings.api.port,
            reload=args.reload or settings.api.reload,
        )
    elif args.command == "seed":
        from sunboard.seed import run_seed

        counts = asyncio.run(run_seed())
        print(", ".join(f"{count} {kind}" for kind, count in counts.items()))
    elif args.command == "review":
        try:
            asyncio.run(_review(args))
        except SunboardError as e:
            print(f"Error: {e}", file=sys.stderr)
            sys.exit(1)


if __name__ == "__main__":
    main()
