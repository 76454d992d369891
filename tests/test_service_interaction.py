import pytest
import uuid
from datetime import timedelta, timezone
from network_crm.db.base import utcnow
from network_crm.models import Contact
from network_crm.schemas import ContactCreate, InteractionCreate, InteractionPatch
from network_crm.services.contact_service import ContactService
from network_crm.services.interaction_service import InteractionService


def as_utc(value):
    # SQLite returns naive datetimes; everything is stored in UTC
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


async def make_contact(session, user_id, first_name="Sarah", **extra):
    return await ContactService(session).create_contact(
        user_id, ContactCreate(first_name=first_name, last_name="Chen", category="work", **extra)
    )


@pytest.mark.asyncio
async def test_create_interaction_for_unowned_contact_returns_none(mock_session):
    service = InteractionService(mock_session)

    result = await service.create_interaction(
        uuid.uuid4(), InteractionCreate(contact_id=uuid.uuid4(), type="call")
    )

    assert result is None
    mock_session.add.assert_not_called()
    mock_session.commit.assert_not_called()


@pytest.mark.asyncio
async def test_create_interaction_touches_contact(mock_session):
    user_id = uuid.uuid4()
    before = utcnow() - timedelta(days=3)
    contact = Contact(
        id=uuid.uuid4(), user_id=user_id, first_name="A", last_name="B",
        category="work", updated_at=before,
    )
    mock_session.execute.return_value.scalar_one_or_none.return_value = contact
    service = InteractionService(mock_session)

    interaction = await service.create_interaction(
        user_id, InteractionCreate(contact_id=contact.id, type="Coffee", subject="Catch up")
    )

    assert interaction.type == "coffee"
    assert interaction.user_id == user_id
    assert contact.updated_at > before
    assert contact.updated_at >= interaction.created_at
    # Insert and contact refresh share one commit
    mock_session.commit.assert_called_once()


@pytest.mark.asyncio
async def test_new_interaction_refreshes_contact_updated_at(db_session, user):
    contact = await make_contact(db_session, user.id)
    original = as_utc(contact.updated_at)

    interaction = await InteractionService(db_session).create_interaction(
        user.id, InteractionCreate(contact_id=contact.id, type="meeting", outcome="positive")
    )

    fetched = await ContactService(db_session).get_contact(contact.id, user.id)
    assert as_utc(fetched.updated_at) >= as_utc(interaction.created_at)
    assert as_utc(fetched.updated_at) >= original
    assert interaction.outcome == "positive"


@pytest.mark.asyncio
async def test_backdated_interaction_keeps_its_time(db_session, user):
    contact = await make_contact(db_session, user.id)
    occurred_at = utcnow() - timedelta(days=45)

    interaction = await InteractionService(db_session).create_interaction(
        user.id, InteractionCreate(contact_id=contact.id, type="call"), occurred_at=occurred_at
    )

    assert as_utc(interaction.created_at) == occurred_at
    assert as_utc(contact.updated_at) > occurred_at


@pytest.mark.asyncio
async def test_list_interactions_newest_first_with_contact(db_session, user, other_user):
    sarah = await make_contact(db_session, user.id)
    tom = await make_contact(db_session, user.id, first_name="Tom")
    stranger = await make_contact(db_session, other_user.id, first_name="Eve")
    service = InteractionService(db_session)
    now = utcnow()

    old = await service.create_interaction(
        user.id, InteractionCreate(contact_id=sarah.id, type="email"), occurred_at=now - timedelta(days=2)
    )
    new = await service.create_interaction(
        user.id, InteractionCreate(contact_id=tom.id, type="call"), occurred_at=now - timedelta(hours=1)
    )
    await service.create_interaction(other_user.id, InteractionCreate(contact_id=stranger.id, type="call"))

    interactions = await service.list_interactions(user.id)

    assert [i.id for i in interactions] == [new.id, old.id]
    assert interactions[0].contact.first_name == "Tom"

    only_sarah = await service.list_interactions(user.id, contact_id=sarah.id)
    assert [i.id for i in only_sarah] == [old.id]


@pytest.mark.asyncio
async def test_update_interaction_cannot_move_to_foreign_contact(db_session, user, other_user):
    mine = await make_contact(db_session, user.id)
    theirs = await make_contact(db_session, other_user.id, first_name="Eve")
    service = InteractionService(db_session)
    interaction = await service.create_interaction(user.id, InteractionCreate(contact_id=mine.id, type="call"))

    moved = await service.update_interaction(interaction.id, user.id, InteractionPatch(contact_id=theirs.id))
    assert moved is None

    updated = await service.update_interaction(interaction.id, user.id, InteractionPatch(notes="Went well"))
    assert updated.notes == "Went well"
    assert updated.contact_id == mine.id
    assert updated.type == "call"


@pytest.mark.asyncio
async def test_delete_interaction_is_scoped(db_session, user, other_user):
    contact = await make_contact(db_session, user.id)
    service = InteractionService(db_session)
    interaction = await service.create_interaction(user.id, InteractionCreate(contact_id=contact.id, type="call"))

    assert await service.delete_interaction(interaction.id, other_user.id) is False
    assert await service.delete_interaction(interaction.id, user.id) is True
    assert await service.delete_interaction(interaction.id, user.id) is False
