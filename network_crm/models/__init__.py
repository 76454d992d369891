from .user import User
from .contact import Contact, ContactCategory, ContactSource
from .interaction import Interaction, InteractionType, InteractionOutcome
from .relationship import Relationship
from .tag import Tag, ContactTag
