"""Database seeding script.

Creates missing tables and populates the default data: the ``Admin``
role and administrator, the category taxonomy, the test account and
its demo listings.  Safe to run repeatedly; see :mod:`seeder`.
"""
import os
import sys

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from app import seed_once


def main() -> None:
    """Initialize database and seed default data."""
    report = seed_once()
    print(f"Admin user created: {'yes' if report.admin_created else 'no'}")
    print(f"Test user created: {'yes' if report.test_user_created else 'no'}")
    print(f"Seeded {report.listings_created} listings")


if __name__ == "__main__":
    main()
