"""Typed HTTP client for the Network CRM API."""
import logging
import uuid
from typing import Any, Dict, List, Optional, Union
import aiohttp
from pydantic import TypeAdapter
from network_crm.config.constants import CLIENT_TIMEOUT_SECONDS
from network_crm.core.exceptions import ApiError
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

logger = logging.getLogger(__name__)

Id = Union[uuid.UUID, str]

_contacts_adapter = TypeAdapter(List[ContactWithInteractions])
_contact_list_adapter = TypeAdapter(List[ContactRead])
_interactions_adapter = TypeAdapter(List[InteractionWithContact])
_relationships_adapter = TypeAdapter(List[RelationshipRead])
_tags_adapter = TypeAdapter(List[TagRead])


def _body(payload) -> Dict[str, Any]:
    return payload.model_dump(mode="json", by_alias=True, exclude_unset=True)


class NetworkCrmClient:
    """Client for the CRM REST API.

    Every call raises ApiError on a non-2xx response; nothing is retried.
    """

    def __init__(
        self,
        base_url: str,
        user_id: Optional[Id] = None,
        timeout: int = CLIENT_TIMEOUT_SECONDS,
        session: Optional[aiohttp.ClientSession] = None,
    ):
        """
        Initialize the client.

        Args:
            base_url: API root, e.g. http://localhost:8000
            user_id: Sent as X-User-Id; omit to use the server's demo identity
            timeout: Total request timeout in seconds
            session: Externally managed aiohttp session (not closed by the client)
        """
        self.base_url = base_url.rstrip("/")
        self.user_id = str(user_id) if user_id else None
        self.timeout = timeout
        self._session = session
        self._owns_session = session is None

        self.contacts = ContactsApi(self)
        self.interactions = InteractionsApi(self)
        self.relationships = RelationshipsApi(self)
        self.tags = TagsApi(self)
        self.analytics = AnalyticsApi(self)
        self.network = NetworkApi(self)

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc_info):
        await self.close()

    async def close(self):
        if self._session is not None and self._owns_session:
            await self._session.close()
            self._session = None

    def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None:
            self._session = aiohttp.ClientSession(
                timeout=aiohttp.ClientTimeout(total=self.timeout)
            )
        return self._session

    def _headers(self) -> Dict[str, str]:
        headers = {"Accept": "application/json"}
        if self.user_id:
            headers["X-User-Id"] = self.user_id
        return headers

    async def request(
        self,
        method: str,
        path: str,
        params: Optional[Dict[str, Any]] = None,
        json: Optional[Dict[str, Any]] = None,
    ) -> Any:
        """
        Perform one API call and decode its JSON body.

        Args:
            method: HTTP verb
            path: Path below the base URL, starting with /api
            params: Query parameters; None values are dropped
            json: Request body

        Returns:
            Decoded JSON response
        """
        query = {k: str(v) for k, v in (params or {}).items() if v is not None}
        url = f"{self.base_url}{path}"

        try:
            async with self._get_session().request(
                method, url, params=query, json=json, headers=self._headers()
            ) as response:
                if response.status >= 400:
                    try:
                        data = await response.json()
                    except (aiohttp.ContentTypeError, ValueError):
                        data = {"message": await response.text()}
                    message = data.get("message") or response.reason or "Request failed"
                    logger.error(f"CRM API error {response.status} on {method} {path}: {message}")
                    raise ApiError(response.status, message, data.get("errors"))
                return await response.json()
        except aiohttp.ClientError as e:
            logger.error(f"CRM API network error on {method} {path}: {e}")
            raise


class _Resource:
    def __init__(self, client: NetworkCrmClient):
        self._client = client


class ContactsApi(_Resource):
    async def list(self, limit: Optional[int] = None) -> List[ContactWithInteractions]:
        data = await self._client.request("GET", "/api/contacts", params={"limit": limit})
        return _contacts_adapter.validate_python(data)

    async def search(self, query: str) -> List[ContactRead]:
        data = await self._client.request("GET", "/api/contacts/search", params={"q": query})
        return _contact_list_adapter.validate_python(data)

    async def get(self, contact_id: Id) -> ContactDetail:
        data = await self._client.request("GET", f"/api/contacts/{contact_id}")
        return ContactDetail.model_validate(data)

    async def create(self, payload: ContactCreate) -> ContactRead:
        data = await self._client.request("POST", "/api/contacts", json=_body(payload))
        return ContactRead.model_validate(data)

    async def update(self, contact_id: Id, patch: ContactPatch) -> ContactRead:
        data = await self._client.request("PUT", f"/api/contacts/{contact_id}", json=_body(patch))
        return ContactRead.model_validate(data)

    async def delete(self, contact_id: Id) -> None:
        await self._client.request("DELETE", f"/api/contacts/{contact_id}")

    async def add_tag(self, contact_id: Id, tag_id: Id) -> None:
        await self._client.request("POST", f"/api/contacts/{contact_id}/tags/{tag_id}")

    async def remove_tag(self, contact_id: Id, tag_id: Id) -> None:
        await self._client.request("DELETE", f"/api/contacts/{contact_id}/tags/{tag_id}")


class InteractionsApi(_Resource):
    async def list(self, contact_id: Optional[Id] = None, limit: Optional[int] = None) -> List[InteractionWithContact]:
        data = await self._client.request(
            "GET", "/api/interactions", params={"contactId": contact_id, "limit": limit}
        )
        return _interactions_adapter.validate_python(data)

    async def create(self, payload: InteractionCreate) -> InteractionRead:
        data = await self._client.request("POST", "/api/interactions", json=_body(payload))
        return InteractionRead.model_validate(data)

    async def update(self, interaction_id: Id, patch: InteractionPatch) -> InteractionRead:
        data = await self._client.request("PUT", f"/api/interactions/{interaction_id}", json=_body(patch))
        return InteractionRead.model_validate(data)

    async def delete(self, interaction_id: Id) -> None:
        await self._client.request("DELETE", f"/api/interactions/{interaction_id}")


class RelationshipsApi(_Resource):
    async def list(self) -> List[RelationshipRead]:
        data = await self._client.request("GET", "/api/relationships")
        return _relationships_adapter.validate_python(data)

    async def create(self, payload: RelationshipCreate) -> RelationshipRead:
        data = await self._client.request("POST", "/api/relationships", json=_body(payload))
        return RelationshipRead.model_validate(data)

    async def delete(self, relationship_id: Id) -> None:
        await self._client.request("DELETE", f"/api/relationships/{relationship_id}")


class TagsApi(_Resource):
    async def list(self) -> List[TagRead]:
        data = await self._client.request("GET", "/api/tags")
        return _tags_adapter.validate_python(data)

    async def create(self, payload: TagCreate) -> TagRead:
        data = await self._client.request("POST", "/api/tags", json=_body(payload))
        return TagRead.model_validate(data)

    async def delete(self, tag_id: Id) -> None:
        await self._client.request("DELETE", f"/api/tags/{tag_id}")


class AnalyticsApi(_Resource):
    async def stats(self) -> NetworkStats:
        data = await self._client.request("GET", "/api/analytics/stats")
        return NetworkStats.model_validate(data)

    async def dormant(self, limit: Optional[int] = None) -> List[ContactRead]:
        data = await self._client.request("GET", "/api/analytics/dormant", params={"limit": limit})
        return _contact_list_adapter.validate_python(data)


class NetworkApi(_Resource):
    async def graph(self) -> NetworkGraph:
        data = await self._client.request("GET", "/api/network/graph")
        return NetworkGraph.model_validate(data)
