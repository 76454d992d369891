"""
Populate the database with a demo user and a sample network.

Usage:
    python -m network_crm.db.seed --contacts 25
    python -m network_crm.db.seed --create-tables   # local SQLite runs without alembic
"""
import argparse
import asyncio
import logging
import random
import sys
from datetime import timedelta

from network_crm.db.base import Base, utcnow
from network_crm.db.session import engine, AsyncSessionLocal
from network_crm.models import ContactCategory, ContactSource, InteractionType, InteractionOutcome
from network_crm.schemas import (
    ContactCreate,
    InteractionCreate,
    RelationshipCreate,
    TagCreate,
    UserCreate,
)
from network_crm.services.contact_service import ContactService
from network_crm.services.interaction_service import InteractionService
from network_crm.services.relationship_service import RelationshipService
from network_crm.services.tag_service import TagService
from network_crm.services.user_service import UserService

logger = logging.getLogger(__name__)

DEMO_USERNAME = "demo"
SEED_HISTORY_DAYS = 60

FIRST_NAMES = [
    "Sarah", "Michael", "Priya", "David", "Elena", "James", "Aiko", "Carlos",
    "Fatima", "Liam", "Nina", "Omar", "Grace", "Tomas", "Mei", "Jonas",
]
LAST_NAMES = [
    "Chen", "Johnson", "Patel", "Kim", "Rossi", "Okafor", "Tanaka", "Garcia",
    "Haddad", "Murphy", "Novak", "Silva", "Larsen", "Weber", "Ito", "Brown",
]
COMPANIES = ["Acme Corp", "Globex", "Initech", "Umbrella Labs", "Stark Ventures", "Wayne Capital", None]
TITLES = ["CTO", "Product Manager", "Founder", "Engineer", "Designer", "Investor", "Recruiter", None]
LOCATIONS = ["Berlin", "San Francisco", "London", "Tokyo", "New York", "Lisbon", None]
RELATIONSHIP_TYPES = ["colleague", "friend", "introduced", "co-founder", "mentor"]
SAMPLE_TAGS = [("investor", "#10B981"), ("hiring", "#F59E0B"), ("vip", "#EF4444"), ("follow-up", "#3B82F6")]


def _sample_contact(rng: random.Random, index: int) -> ContactCreate:
    first = FIRST_NAMES[index % len(FIRST_NAMES)]
    last = LAST_NAMES[(index * 7) % len(LAST_NAMES)]
    return ContactCreate(
        first_name=first,
        last_name=last,
        email=f"{first.lower()}.{last.lower()}{index}@example.com",
        company=rng.choice(COMPANIES),
        title=rng.choice(TITLES),
        location=rng.choice(LOCATIONS),
        category=rng.choice(list(ContactCategory)).value,
        relationship_strength=rng.randint(1, 5),
        contact_source=rng.choice(list(ContactSource)).value,
    )


async def seed(contact_count: int, rng_seed: int = 42) -> None:
    rng = random.Random(rng_seed)
    now = utcnow()

    async with AsyncSessionLocal() as session:
        users = UserService(session)
        user = await users.get_user_by_username(DEMO_USERNAME)
        if user:
            logger.info(f"Demo user already exists ({user.id}), adding to its network")
        else:
            user = await users.create_user(UserCreate(
                username=DEMO_USERNAME,
                password="demo",
                email="demo@example.com",
                first_name="Demo",
                last_name="User",
            ))
            logger.info(f"Created demo user {user.id}")
        user_id = user.id

        contacts_service = ContactService(session)
        contacts = []
        for i in range(contact_count):
            contacts.append(await contacts_service.create_contact(user_id, _sample_contact(rng, i)))
        logger.info(f"Created {len(contacts)} contacts")

        interactions_service = InteractionService(session)
        interaction_count = 0
        for contact in contacts:
            # Some contacts are left without history so the dormant view has content
            if rng.random() < 0.25:
                continue
            for _ in range(rng.randint(1, 4)):
                occurred_at = now - timedelta(
                    days=rng.randint(0, SEED_HISTORY_DAYS),
                    hours=rng.randint(0, 23),
                )
                await interactions_service.create_interaction(
                    user_id,
                    InteractionCreate(
                        contact_id=contact.id,
                        type=rng.choice(list(InteractionType)).value,
                        subject=f"Catch up with {contact.first_name}",
                        outcome=rng.choice(list(InteractionOutcome)),
                    ),
                    occurred_at=occurred_at,
                )
                interaction_count += 1
        logger.info(f"Logged {interaction_count} interactions")

        relationships_service = RelationshipService(session)
        relationship_count = 0
        if len(contacts) > 1:
            for _ in range(contact_count):
                source, target = rng.sample(contacts, 2)
                await relationships_service.create_relationship(user_id, RelationshipCreate(
                    from_contact_id=source.id,
                    to_contact_id=target.id,
                    relationship_type=rng.choice(RELATIONSHIP_TYPES),
                    strength=rng.randint(1, 5),
                ))
                relationship_count += 1
        logger.info(f"Created {relationship_count} relationships")

        tags_service = TagService(session)
        for name, color in SAMPLE_TAGS:
            tag = await tags_service.create_tag(user_id, TagCreate(name=name, color=color))
            for contact in rng.sample(contacts, min(3, len(contacts))):
                await tags_service.tag_contact(contact.id, tag.id, user_id)
        logger.info(f"Created {len(SAMPLE_TAGS)} tags")


async def create_tables() -> None:
    # Import registers every model on Base.metadata
    import network_crm.models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Tables created")


async def run(args: argparse.Namespace) -> None:
    try:
        if args.create_tables:
            await create_tables()
        await seed(args.contacts, rng_seed=args.seed)
    finally:
        await engine.dispose()


def main():
    logging.basicConfig(
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        level=logging.INFO,
        handlers=[logging.StreamHandler(sys.stdout)]
    )

    parser = argparse.ArgumentParser(description="Seed the CRM database with demo data")
    parser.add_argument("--contacts", type=int, default=20, help="Number of sample contacts to create")
    parser.add_argument("--seed", type=int, default=42, help="Random seed for reproducible data")
    parser.add_argument("--create-tables", action="store_true", help="Create tables directly instead of via alembic")
    args = parser.parse_args()

    if args.contacts < 0:
        parser.error("--contacts must be non-negative")

    asyncio.run(run(args))


if __name__ == '__main__':
    main()
