#!/usr/bin/env python3
"""
Seed script that loads a demo account with sample projects and tasks.

Creates:
- A demo user (demo@example.com / password123)
- Two projects
- Nine tasks spread over both projects with mixed statuses

Usage:
    python -m scripts.seed [--clear]

Options:
    --clear      Delete all users, projects and tasks before seeding
"""

import argparse
import asyncio
import time
from datetime import datetime, timezone

from sqlalchemy import delete
from sqlmodel import select

from taskboard.database import close_db, get_session_context, init_db
from taskboard.models import Project, Task, TaskStatus, User
from taskboard.security import hash_password


DEMO_EMAIL = "demo@example.com"
DEMO_PASSWORD = "password123"

DEMO_PROJECTS = [
    {
        "name": "Website Redesign",
        "description": "Complete redesign of the company website with modern UI/UX",
        "tasks": [
            ("Research competitor websites",
             "Analyze design trends and user experience patterns from competitor sites",
             datetime(2024, 1, 15, tzinfo=timezone.utc), TaskStatus.DONE),
            ("Create wireframes",
             "Design low-fidelity wireframes for all main pages",
             datetime(2024, 1, 20, tzinfo=timezone.utc), TaskStatus.IN_PROGRESS),
            ("Design mockups",
             "Create high-fidelity design mockups in Figma",
             datetime(2024, 1, 25, tzinfo=timezone.utc), TaskStatus.TODO),
            ("Implement responsive design",
             "Code the frontend with responsive CSS and modern frameworks",
             datetime(2024, 2, 1, tzinfo=timezone.utc), TaskStatus.TODO),
        ],
    },
    {
        "name": "Mobile App Development",
        "description": "Build a mobile application for iOS and Android platforms",
        "tasks": [
            ("Set up development environment",
             "Install React Native, configure development tools and emulators",
             datetime(2024, 1, 10, tzinfo=timezone.utc), TaskStatus.DONE),
            ("Design app architecture",
             "Plan the app structure, components, and data flow",
             datetime(2024, 1, 18, tzinfo=timezone.utc), TaskStatus.IN_PROGRESS),
            ("Implement user authentication",
             "Add login/signup functionality with secure token management",
             datetime(2024, 1, 30, tzinfo=timezone.utc), TaskStatus.TODO),
            ("Create main app screens",
             "Build the core UI screens and navigation flow",
             datetime(2024, 2, 5, tzinfo=timezone.utc), TaskStatus.TODO),
            ("Integrate backend API",
             "Connect the mobile app to the backend REST API",
             datetime(2024, 2, 10, tzinfo=timezone.utc), TaskStatus.TODO),
        ],
    },
]


async def clear_data():
    """Clear all existing data, dependents first."""
    print("Clearing existing data...")
    async with get_session_context() as session:
        await session.execute(delete(Task))
        await session.execute(delete(Project))
        await session.execute(delete(User))
    print("Data cleared.")


async def seed_demo_data() -> User:
    """Create the demo user with its projects and tasks."""
    async with get_session_context() as session:
        existing = await session.execute(select(User).where(User.email == DEMO_EMAIL))
        if existing.scalars().first() is not None:
            raise SystemExit(f"{DEMO_EMAIL} already exists; rerun with --clear")

        user = User(name="Demo User", email=DEMO_EMAIL, password_hash=hash_password(DEMO_PASSWORD))
        session.add(user)
        await session.flush()

        for demo in DEMO_PROJECTS:
            project = Project(name=demo["name"], description=demo["description"], owner_id=user.id)
            session.add(project)
            await session.flush()

            for title, description, due_date, task_status in demo["tasks"]:
                session.add(Task(
                    title=title,
                    description=description,
                    due_date=due_date,
                    status=task_status,
                    project_id=project.id,
                    created_by=user.id,
                ))
            print(f"  {project.name}: {len(demo['tasks'])} tasks")

        return user


async def main():
    parser = argparse.ArgumentParser(description="Seed the database with demo data")
    parser.add_argument("--clear", action="store_true", help="Clear existing data first")
    args = parser.parse_args()

    await init_db()

    if args.clear:
        await clear_data()

    start_time = time.time()
    print("Seeding demo data...")
    await seed_demo_data()
    elapsed = time.time() - start_time

    print(f"\nDatabase seeded in {elapsed:.2f}s")
    print("\nDemo user credentials:")
    print(f"Email: {DEMO_EMAIL}")
    print(f"Password: {DEMO_PASSWORD}")

    await close_db()


if __name__ == "__main__":
    asyncio.run(main())
