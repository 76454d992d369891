from .common import Message
from .user import UserCreate
from .tag import TagCreate, TagRead
from .interaction import InteractionCreate, InteractionPatch, InteractionRead
from .contact import ContactCreate, ContactPatch, ContactRead, ContactWithInteractions, ContactDetail
from .relationship import RelationshipCreate, RelationshipRead
from .analytics import NetworkStats, GraphNode, GraphLink, NetworkGraph
from .interaction_with_contact import InteractionWithContact
