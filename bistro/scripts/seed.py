"""
Seed an admin account and a starter floor of tables

Usage:
    python -m bistro.scripts.seed admin@bistro.local 'a-strong-password'
"""

import argparse
import sys

from sqlmodel import Session, select
import structlog

from bistro.core.auth import hash_password
from bistro.core.database import engine, init_db
from bistro.core.logger_config import configure_logging
from bistro.models.table import Table
from bistro.models.user import User, UserRole

logger = structlog.get_logger(__name__)

# (number, capacity, location)
STARTER_TABLES = [
    (1, 2, "indoor"),
    (2, 4, "indoor"),
    (3, 4, "indoor"),
    (4, 6, "indoor"),
    (10, 2, "terrace"),
    (11, 4, "terrace"),
    (12, 4, "terrace"),
]


def seed(session: Session, admin_email: str, admin_password: str) -> dict:
    """Create the admin and any starter tables that do not exist yet"""
    created = {"admin": False, "tables": 0}

    admin = session.exec(select(User).where(User.email == admin_email)).first()
    if not admin:
        session.add(User(
            email=admin_email,
            password_hash=hash_password(admin_password),
            name="Admin",
            surname="Bistro",
            role=UserRole.ADMIN,
        ))
        created["admin"] = True
        logger.info("Admin user created", email=admin_email)

    existing = set(session.exec(select(Table.number)).all())
    for number, capacity, location in STARTER_TABLES:
        if number in existing:
            continue
        session.add(Table(number=number, capacity=capacity, location=location))
        created["tables"] += 1

    session.commit()
    return created


def main():
    """Main entry point for the seed job"""
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[1])
    parser.add_argument("email")
    parser.add_argument("password")
    args = parser.parse_args()

    configure_logging()
    try:
        init_db()
        with Session(engine) as session:
            results = seed(session, args.email, args.password)
        logger.info("Seed complete", **results)
    except Exception as e:
        logger.error("Seed failed", error=str(e))
        sys.exit(1)


if __name__ == "__main__":
    main()
