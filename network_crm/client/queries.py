"""Cached reads and invalidating writes over NetworkCrmClient."""
from typing import List, Optional
from network_crm.client.api import NetworkCrmClient, Id
from network_crm.client.query_cache import QueryClient, QueryKey, QueryKind, Mutation
from network_crm.config.constants import CLIENT_MIN_SEARCH_LENGTH
from network_crm.schemas import (
    ContactCreate,
    ContactPatch,
    ContactRead,
    ContactWithInteractions,
    ContactDetail,
    InteractionCreate,
    InteractionPatch,
    InteractionRead,
    InteractionWithContact,
    RelationshipCreate,
    RelationshipRead,
    TagCreate,
    TagRead,
    NetworkStats,
    NetworkGraph,
)


class CrmQueries:
    def __init__(self, client: NetworkCrmClient, cache: Optional[QueryClient] = None):
        self.client = client
        self.cache = cache or QueryClient()

    # ========================
    # Reads
    # ========================

    async def contacts(self, limit: Optional[int] = None) -> List[ContactWithInteractions]:
        key = QueryKey.of(QueryKind.CONTACTS, limit=limit)
        return await self.cache.fetch(key, lambda: self.client.contacts.list(limit))

    async def contact(self, contact_id: Id) -> ContactDetail:
        key = QueryKey.of(QueryKind.CONTACT, contact_id=contact_id)
        return await self.cache.fetch(key, lambda: self.client.contacts.get(contact_id))

    async def search_contacts(self, query: str) -> List[ContactRead]:
        query = (query or "").strip()
        # Search-as-you-type: too-short queries never reach the API
        if len(query) < CLIENT_MIN_SEARCH_LENGTH:
            return []
        key = QueryKey.of(QueryKind.CONTACT_SEARCH, q=query)
        return await self.cache.fetch(key, lambda: self.client.contacts.search(query))

    async def interactions(self, contact_id: Optional[Id] = None, limit: Optional[int] = None) -> List[InteractionWithContact]:
        key = QueryKey.of(QueryKind.INTERACTIONS, contact_id=contact_id, limit=limit)
        return await self.cache.fetch(key, lambda: self.client.interactions.list(contact_id, limit))

    async def relationships(self) -> List[RelationshipRead]:
        return await self.cache.fetch(QueryKey.of(QueryKind.RELATIONSHIPS), self.client.relationships.list)

    async def tags(self) -> List[TagRead]:
        return await self.cache.fetch(QueryKey.of(QueryKind.TAGS), self.client.tags.list)

    async def stats(self) -> NetworkStats:
        return await self.cache.fetch(QueryKey.of(QueryKind.STATS), self.client.analytics.stats)

    async def dormant_contacts(self, limit: Optional[int] = None) -> List[ContactRead]:
        key = QueryKey.of(QueryKind.DORMANT, limit=limit)
        return await self.cache.fetch(key, lambda: self.client.analytics.dormant(limit))

    async def graph(self) -> NetworkGraph:
        return await self.cache.fetch(QueryKey.of(QueryKind.GRAPH), self.client.network.graph)

    # ========================
    # Writes
    # ========================

    async def create_contact(self, payload: ContactCreate) -> ContactRead:
        return await self.cache.mutate(
            Mutation.CREATE_CONTACT, lambda: self.client.contacts.create(payload)
        )

    async def update_contact(self, contact_id: Id, patch: ContactPatch) -> ContactRead:
        return await self.cache.mutate(
            Mutation.UPDATE_CONTACT,
            lambda: self.client.contacts.update(contact_id, patch),
            contact_id=contact_id,
        )

    async def delete_contact(self, contact_id: Id) -> None:
        await self.cache.mutate(Mutation.DELETE_CONTACT, lambda: self.client.contacts.delete(contact_id))

    async def tag_contact(self, contact_id: Id, tag_id: Id) -> None:
        await self.cache.mutate(
            Mutation.TAG_CONTACT,
            lambda: self.client.contacts.add_tag(contact_id, tag_id),
            contact_id=contact_id,
        )

    async def untag_contact(self, contact_id: Id, tag_id: Id) -> None:
        await self.cache.mutate(
            Mutation.TAG_CONTACT,
            lambda: self.client.contacts.remove_tag(contact_id, tag_id),
            contact_id=contact_id,
        )

    async def create_interaction(self, payload: InteractionCreate) -> InteractionRead:
        return await self.cache.mutate(
            Mutation.CREATE_INTERACTION,
            lambda: self.client.interactions.create(payload),
            contact_id=payload.contact_id,
        )

    async def update_interaction(self, interaction_id: Id, patch: InteractionPatch) -> InteractionRead:
        return await self.cache.mutate(
            Mutation.UPDATE_INTERACTION, lambda: self.client.interactions.update(interaction_id, patch)
        )

    async def delete_interaction(self, interaction_id: Id) -> None:
        await self.cache.mutate(
            Mutation.DELETE_INTERACTION, lambda: self.client.interactions.delete(interaction_id)
        )

    async def create_relationship(self, payload: RelationshipCreate) -> RelationshipRead:
        return await self.cache.mutate(
            Mutation.CREATE_RELATIONSHIP, lambda: self.client.relationships.create(payload)
        )

    async def delete_relationship(self, relationship_id: Id) -> None:
        await self.cache.mutate(
            Mutation.DELETE_RELATIONSHIP, lambda: self.client.relationships.delete(relationship_id)
        )

    async def create_tag(self, payload: TagCreate) -> TagRead:
        return await self.cache.mutate(Mutation.CREATE_TAG, lambda: self.client.tags.create(payload))

    async def delete_tag(self, tag_id: Id) -> None:
        await self.cache.mutate(Mutation.DELETE_TAG, lambda: self.client.tags.delete(tag_id))
