"""
SATAS Database Seeder

Creates a demo startup (with a job and an upcoming event) and a demo
individual, then prints access tokens that can be used as bearer tokens
against a locally running API.
"""

import sys
sys.path.insert(0, ".")

from datetime import datetime, timedelta
from uuid import uuid4

from app.db.session import SessionLocal, engine
from app.db.base import Base
from app.models import Event, IndividualProfile, Job, StartupProfile, User
from app.core.security import create_access_token

STARTUP_ID = "00000000-0000-4000-8000-000000000001"
INDIVIDUAL_ID = "00000000-0000-4000-8000-000000000002"


def seed_database():
    """Seed the database with demo data."""

    # Create all tables
    Base.metadata.create_all(bind=engine)

    db = SessionLocal()

    try:
        # Check if already seeded
        existing = db.query(User).filter(User.id == STARTUP_ID).first()
        if existing:
            print("Database already seeded. Skipping...")
            return

        print("Seeding database...")

        # 1. Startup account and profile
        startup_user = User(
            id=STARTUP_ID,
            email="founder@acme-robotics.dev",
            name="Maya Patel",
            user_type="startup",
        )
        db.add(startup_user)
        db.add(StartupProfile(
            user_id=STARTUP_ID,
            name="Acme Robotics",
            description="Warehouse robots that learn on the job.",
            location="Berlin",
            industry="Robotics",
            stage="Seed",
            team_size=12,
            founded_year=2023,
            website="https://acme-robotics.dev",
        ))
        db.flush()

        # 2. A job and an event hosted by the startup
        db.add(Job(
            id=str(uuid4()),
            startup_id=STARTUP_ID,
            title="Embedded Software Intern",
            description="Help us ship firmware updates to a fleet of 200 robots.",
            location="Berlin (hybrid)",
            type="Internship",
            salary=1800,
        ))
        event_day = datetime.utcnow().replace(hour=0, minute=0, second=0, microsecond=0) + timedelta(days=14)
        db.add(Event(
            id=str(uuid4()),
            startup_id=STARTUP_ID,
            title="Open Lab Evening",
            description="Meet the team and drive a robot.",
            location="Acme Robotics HQ, Berlin",
            date=event_day,
            start_time=event_day + timedelta(hours=18),
            end_time=event_day + timedelta(hours=21),
        ))

        # 3. Individual account and profile
        db.add(User(
            id=INDIVIDUAL_ID,
            email="lena.schmidt@example.com",
            name="Lena Schmidt",
            user_type="individual",
        ))
        db.add(IndividualProfile(
            user_id=INDIVIDUAL_ID,
            name="Lena Schmidt",
            email="lena.schmidt@example.com",
            location="Munich",
            industry="Robotics",
            role="Student",
            description="Mechatronics student looking for an internship.",
        ))

        # Commit all changes
        db.commit()

        print("Database seeded successfully!")
        print("\nCreated Users:")
        print("   - founder@acme-robotics.dev [startup: Acme Robotics]")
        print("   - lena.schmidt@example.com [individual]")
        print("\nBearer tokens (valid for 24h):")
        for user_id, email in (
            (STARTUP_ID, "founder@acme-robotics.dev"),
            (INDIVIDUAL_ID, "lena.schmidt@example.com"),
        ):
            token = create_access_token(user_id, email, expires_delta=timedelta(hours=24))
            print(f"   {email}: {token}")

    except Exception as e:
        db.rollback()
        print(f"Error seeding database: {e}")
        raise
    finally:
        db.close()


if __name__ == "__main__":
    seed_database()
