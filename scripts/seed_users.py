#!/usr/bin/env python3
"""
Seed script: registers demo users via the API (no direct DB).
Run with the API up:
  python scripts/seed_users.py
  python scripts/seed_users.py --users 100 --base-url http://localhost:8000/api/v1
"""

import argparse
import random

import httpx

API_BASE = "http://localhost:8000/api/v1"
PASSWORD = "password123"

FIRST_NAMES = ["Ana", "Bruno", "Carla", "Diego", "Elisa", "Felipe", "Gabriela", "Hugo", "Isabel", "João"]
LAST_NAMES = ["Silva", "Souza", "Costa", "Pereira", "Almeida", "Ribeiro", "Lima", "Gomes"]


def random_name() -> str:
    return f"{random.choice(FIRST_NAMES)} {random.choice(LAST_NAMES)}"


def phone_for(i: int) -> str:
    # 11 digits: area code + 9 + sequence, unique per index
    return f"119{i:08d}"


def main():
    ap = argparse.ArgumentParser(description="Seed users via API")
    ap.add_argument("--users", type=int, default=30, help="Number of users to create")
    ap.add_argument("--base-url", default=API_BASE, help="API base URL")
    args = ap.parse_args()

    created = 0
    conflicts = 0
    errors = []

    with httpx.Client(base_url=args.base_url, timeout=30.0) as client:
        print(f"Creating {args.users} users...")
        for i in range(args.users):
            email = f"user{i+1}@example.com"
            try:
                r = client.post("/users", json={
                    "name": random_name(),
                    "email": email,
                    "phone": phone_for(i + 1),
                    "password": PASSWORD,
                    "confirmPassword": PASSWORD,
                })
            except httpx.HTTPError as e:
                errors.append(f"Register {email}: {e}")
                continue
            if r.status_code == 200:
                created += 1
            elif r.status_code == 400 and r.json().get("error", "").endswith("_already_exists"):
                conflicts += 1
            else:
                errors.append(f"Register {email}: {r.status_code} {r.text[:80]}")
            if (i + 1) % 10 == 0:
                print(f"  ... {i+1} users")

    print(f"\nDone. Created: {created}, already existing: {conflicts}")
    if errors:
        print(f"Errors ({len(errors)}):")
        for e in errors[:15]:
            print("  ", e)
        if len(errors) > 15:
            print("  ... and", len(errors) - 15, "more")


if __name__ == "__main__":
    main()
