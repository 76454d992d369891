import pytest
import uuid
from sqlalchemy import select, func
from sqlalchemy.exc import OperationalError
from network_crm.core.exceptions import StorageError
from network_crm.models import Contact, Interaction, Relationship, Tag, ContactTag
from network_crm.schemas import ContactCreate, ContactPatch, InteractionCreate, RelationshipCreate, TagCreate
from network_crm.services.contact_service import ContactService, escape_like
from network_crm.services.interaction_service import InteractionService
from network_crm.services.relationship_service import RelationshipService
from network_crm.services.tag_service import TagService


def make_payload(**overrides):
    data = {"first_name": "Sarah", "last_name": "Chen", "category": "work"}
    data.update(overrides)
    return ContactCreate(**data)


async def count_rows(session, model, *criteria):
    stmt = select(func.count()).select_from(model)
    if criteria:
        stmt = stmt.where(*criteria)
    return (await session.execute(stmt)).scalar()


# ========================
# Unit tests (mocked session)
# ========================

@pytest.mark.asyncio
async def test_create_contact(mock_session):
    service = ContactService(mock_session)
    user_id = uuid.uuid4()

    contact = await service.create_contact(user_id, make_payload(company="Acme"))

    assert contact.first_name == "Sarah"
    assert contact.company == "Acme"
    assert contact.user_id == user_id
    assert contact.relationship_strength == 1
    assert contact.created_at == contact.updated_at
    mock_session.add.assert_called_once_with(contact)
    mock_session.commit.assert_called_once()


@pytest.mark.asyncio
async def test_update_contact_applies_only_sent_fields(mock_session):
    service = ContactService(mock_session)
    user_id = uuid.uuid4()
    existing = Contact(
        id=uuid.uuid4(), user_id=user_id, first_name="Old", last_name="Name",
        company="Old Co", category="work", relationship_strength=2,
    )
    mock_session.execute.return_value.scalar_one_or_none.return_value = existing

    updated = await service.update_contact(existing.id, user_id, ContactPatch(company="New Co"))

    assert updated is existing
    assert updated.company == "New Co"
    assert updated.first_name == "Old"
    assert updated.relationship_strength == 2
    assert updated.updated_at is not None
    mock_session.commit.assert_called_once()


@pytest.mark.asyncio
async def test_update_contact_not_found(mock_session):
    service = ContactService(mock_session)

    result = await service.update_contact(uuid.uuid4(), uuid.uuid4(), ContactPatch(company="X"))

    assert result is None
    mock_session.commit.assert_not_called()


@pytest.mark.asyncio
async def test_search_blank_or_oversized_query_skips_database(mock_session):
    service = ContactService(mock_session)
    user_id = uuid.uuid4()

    assert await service.search_contacts(user_id, "   ") == []
    assert await service.search_contacts(user_id, "x" * 101) == []
    mock_session.execute.assert_not_called()


@pytest.mark.asyncio
async def test_delete_contact_not_owned(mock_session):
    service = ContactService(mock_session)

    assert await service.delete_contact(uuid.uuid4(), uuid.uuid4()) is False
    mock_session.commit.assert_not_called()


@pytest.mark.asyncio
async def test_delete_contact_removes_dependents_in_one_commit(mock_session):
    service = ContactService(mock_session)
    user_id = uuid.uuid4()
    contact = Contact(id=uuid.uuid4(), user_id=user_id, first_name="A", last_name="B", category="work")
    mock_session.execute.return_value.scalar_one_or_none.return_value = contact

    assert await service.delete_contact(contact.id, user_id) is True

    # Ownership lookup, then interactions, relationships, tag links and the contact
    assert mock_session.execute.call_count == 5
    mock_session.commit.assert_called_once()


@pytest.mark.asyncio
async def test_storage_failure_rolls_back_and_raises(mock_session):
    mock_session.execute.side_effect = OperationalError("SELECT 1", {}, Exception("connection lost"))
    service = ContactService(mock_session)

    with pytest.raises(StorageError):
        await service.list_contacts(uuid.uuid4())

    mock_session.rollback.assert_called_once()


def test_escape_like():
    assert escape_like("100%") == "100\\%"
    assert escape_like("a_b") == "a\\_b"
    assert escape_like("back\\slash") == "back\\\\slash"


# ========================
# Storage behaviour (in-memory SQLite)
# ========================

@pytest.mark.asyncio
async def test_create_then_get_round_trip(db_session, user):
    service = ContactService(db_session)
    created = await service.create_contact(user.id, make_payload(
        email="sarah@example.com", title="CTO", relationship_strength=4, notes="Met at PyCon",
    ))

    fetched = await service.get_contact(created.id, user.id)

    assert fetched.id == created.id
    assert fetched.email == "sarah@example.com"
    assert fetched.title == "CTO"
    assert fetched.relationship_strength == 4
    assert fetched.notes == "Met at PyCon"
    assert fetched.interactions == []
    assert fetched.tags == []


@pytest.mark.asyncio
async def test_invalid_strength_rejected_by_database(db_session, user):
    service = ContactService(db_session)
    # The rollback expires every loaded instance, including the user
    user_id = user.id
    # Bypass schema validation to reach the CHECK constraint
    payload = ContactCreate.model_construct(
        first_name="Bad", last_name="Strength", category="work", relationship_strength=6,
        email=None, phone=None, company=None, title=None, location=None,
        linkedin_url=None, contact_source=None, notes=None,
    )

    with pytest.raises(StorageError):
        await service.create_contact(user_id, payload)

    # Session is usable again after the rollback
    assert await service.list_contacts(user_id) == []


@pytest.mark.asyncio
async def test_contacts_are_scoped_to_their_owner(db_session, user, other_user):
    service = ContactService(db_session)
    contact = await service.create_contact(user.id, make_payload())

    assert await service.get_contact(contact.id, other_user.id) is None
    assert await service.update_contact(contact.id, other_user.id, ContactPatch(company="Hijack")) is None
    assert await service.delete_contact(contact.id, other_user.id) is False
    assert await service.list_contacts(other_user.id) == []

    still_there = await service.get_contact(contact.id, user.id)
    assert still_there.company is None


@pytest.mark.asyncio
async def test_search_matches_name_company_and_stays_scoped(db_session, user, other_user):
    service = ContactService(db_session)
    sarah = await service.create_contact(user.id, make_payload())
    kitchen = await service.create_contact(user.id, make_payload(
        first_name="Tom", last_name="Baker", company="Kitchen Works",
    ))
    await service.create_contact(user.id, make_payload(first_name="Nina", last_name="Novak"))
    await service.create_contact(other_user.id, make_payload(first_name="Li", last_name="Chen"))

    results = await service.search_contacts(user.id, "CHEN")

    assert {c.id for c in results} == {sarah.id, kitchen.id}


@pytest.mark.asyncio
async def test_search_treats_wildcards_literally(db_session, user):
    service = ContactService(db_session)
    await service.create_contact(user.id, make_payload())
    discount = await service.create_contact(user.id, make_payload(first_name="Ann", company="50% Off Ltd"))

    assert [c.id for c in await service.search_contacts(user.id, "%")] == [discount.id]
    assert await service.search_contacts(user.id, "_") == []


@pytest.mark.asyncio
async def test_list_orders_by_recent_activity(db_session, user):
    service = ContactService(db_session)
    first = await service.create_contact(user.id, make_payload(first_name="First"))
    second = await service.create_contact(user.id, make_payload(first_name="Second"))

    await InteractionService(db_session).create_interaction(
        user.id, InteractionCreate(contact_id=first.id, type="call")
    )

    contacts = await service.list_contacts(user.id)
    assert [c.id for c in contacts] == [first.id, second.id]


@pytest.mark.asyncio
async def test_delete_contact_cascades(db_session, session_factory, user):
    contacts = ContactService(db_session)
    doomed = await contacts.create_contact(user.id, make_payload())
    friend = await contacts.create_contact(user.id, make_payload(first_name="Friend"))
    other = await contacts.create_contact(user.id, make_payload(first_name="Other"))

    await InteractionService(db_session).create_interaction(
        user.id, InteractionCreate(contact_id=doomed.id, type="meeting")
    )
    await InteractionService(db_session).create_interaction(
        user.id, InteractionCreate(contact_id=friend.id, type="call")
    )
    relationships = RelationshipService(db_session)
    await relationships.create_relationship(
        user.id, RelationshipCreate(from_contact_id=doomed.id, to_contact_id=friend.id)
    )
    await relationships.create_relationship(
        user.id, RelationshipCreate(from_contact_id=other.id, to_contact_id=doomed.id)
    )
    kept_edge = await relationships.create_relationship(
        user.id, RelationshipCreate(from_contact_id=friend.id, to_contact_id=other.id)
    )
    tags = TagService(db_session)
    tag = await tags.create_tag(user.id, TagCreate(name="vip"))
    await tags.tag_contact(doomed.id, tag.id, user.id)

    assert await contacts.delete_contact(doomed.id, user.id) is True

    async with session_factory() as fresh:
        assert await count_rows(fresh, Contact, Contact.id == doomed.id) == 0
        assert await count_rows(fresh, Interaction, Interaction.contact_id == doomed.id) == 0
        assert await count_rows(fresh, Interaction) == 1
        remaining = (await fresh.execute(select(Relationship.id))).scalars().all()
        assert remaining == [kept_edge.id]
        assert await count_rows(fresh, ContactTag) == 0
        # The tag itself survives
        assert await count_rows(fresh, Tag) == 1
