#!/usr/bin/env python3
"""
Seed script: creates users and tasks via the API (no direct DB).
Run: API must be running.
  python scripts/seed_data.py
  python scripts/seed_data.py --users 20 --tasks-per-user 15
"""

import argparse
import random
from datetime import date, timedelta

import httpx

API_BASE = "http://localhost:8000/api"

TITLES = [
    "Write release notes", "Review pull request", "Fix login redirect", "Update dependencies",
    "Plan sprint", "Refactor billing module", "Write integration tests", "Prepare demo",
    "Triage bug reports", "Document API", "Tune database indexes", "Clean up feature flags",
    "Design onboarding flow", "Migrate CI pipeline", "Profile slow endpoint", "Draft roadmap",
]

DESCRIPTIONS = [
    "Coordinate with the team before starting.",
    "Blocked until the staging environment is back.",
    "Low priority, pick up when there is slack.",
    "Customer-facing, keep stakeholders in the loop.",
    "",
]

STATUSES = ["pending", "in_progress", "completed"]


def random_task(user_id: int) -> dict:
    task = {
        "title": random.choice(TITLES) + (" #" + str(random.randint(1, 999)) if random.random() > 0.5 else ""),
        "status": random.choice(STATUSES),
        "user_id": user_id,
    }
    description = random.choice(DESCRIPTIONS)
    if description:
        task["description"] = description
    if random.random() > 0.3:
        task["deadline"] = (date.today() + timedelta(days=random.randint(-10, 60))).isoformat()
    return task


def main():
    ap = argparse.ArgumentParser(description="Seed users and tasks via API")
    ap.add_argument("--users", type=int, default=10, help="Number of users to create")
    ap.add_argument("--tasks-per-user", type=int, default=10, help="Tasks per user")
    ap.add_argument("--base-url", default=API_BASE, help="API base URL")
    args = ap.parse_args()

    user_ids = []
    created_tasks = 0
    errors = []

    with httpx.Client(base_url=args.base_url, timeout=30.0) as client:
        print(f"Creating {args.users} users...")
        existing = {}
        r = client.get("/users")
        if r.status_code == 200:
            existing = {u["email"]: u["id"] for u in r.json().get("data", [])}

        for i in range(args.users):
            email = f"user{i+1}@example.com"
            try:
                r = client.post("/users", json={"name": f"User {i+1}", "email": email})
                if r.status_code == 201:
                    user_ids.append(r.json()["data"]["id"])
                elif r.status_code == 409 and email in existing:
                    user_ids.append(existing[email])
                else:
                    errors.append(f"User {email}: {r.status_code} {r.text[:80]}")
            except httpx.HTTPError as e:
                errors.append(f"User {email}: {e}")

        print(f"Creating ~{len(user_ids) * args.tasks_per_user} tasks...")
        for user_id in user_ids:
            for _ in range(args.tasks_per_user):
                try:
                    r = client.post("/tasks", json=random_task(user_id))
                    if r.status_code == 201:
                        created_tasks += 1
                    else:
                        errors.append(f"Task for user {user_id}: {r.status_code} {r.text[:80]}")
                except httpx.HTTPError as e:
                    errors.append(str(e))

    print(f"\nDone. Users: {len(user_ids)}, Tasks created: {created_tasks}")
    if errors:
        print(f"Errors ({len(errors)}):")
        for e in errors[:15]:
            print("  ", e)
        if len(errors) > 15:
            print("  ... and", len(errors) - 15, "more")


if __name__ == "__main__":
    main()
