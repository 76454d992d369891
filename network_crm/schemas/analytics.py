import uuid
from typing import List, Optional
from network_crm.schemas.common import CamelModel


class NetworkStats(CamelModel):
    total_contacts: int
    strong_connections: int
    recent_interactions: int
    dormant_contacts: int


class GraphNode(CamelModel):
    id: uuid.UUID
    name: str
    category: str
    strength: int
    company: Optional[str] = None


class GraphLink(CamelModel):
    source: uuid.UUID
    target: uuid.UUID
    type: str
    strength: int


class NetworkGraph(CamelModel):
    nodes: List[GraphNode] = []
    links: List[GraphLink] = []
