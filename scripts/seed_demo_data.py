#!/usr/bin/env python3
"""
LUMA Learning Platform - Demo Data Seed Script.

Creates a manager (Jane Doe) with two reports, an admin account and the
"Course Approval Request" email template. Safe to run repeatedly.

Usage:
    python scripts/seed_demo_data.py
    python scripts/seed_demo_data.py --reset
"""

import argparse

from luma import create_app
from luma.models import db
from luma.services.seed_service import seed_demo_data


def main():
    parser = argparse.ArgumentParser(description="Seed LUMA demo data")
    parser.add_argument("--reset", action="store_true", help="Drop and recreate all tables first")
    args = parser.parse_args()

    app = create_app()
    with app.app_context():
        if args.reset:
            db.drop_all()
            db.create_all()
            print("Tables recreated")
        created = seed_demo_data(app.config.get("COURSE_APPROVAL_TEMPLATE_NAME"))
        print(
            f"Seeded {created['profiles']} profiles, "
            f"{created['admin_grants']} admin grants, {created['templates']} templates"
        )
        print("Demo accounts (send as X-User-Id): demo-manager, demo-employee, demo-analyst, demo-admin")


if __name__ == "__main__":
    main()
