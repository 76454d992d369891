from network_crm.schemas.contact import ContactRead
from network_crm.schemas.interaction import InteractionRead


class InteractionWithContact(InteractionRead):
    contact: ContactRead
