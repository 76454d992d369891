from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Read model: snake_case attributes, camelCase on the wire."""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class CamelInput(BaseModel):
    """Request payload: accepts camelCase or snake_case keys, strips strings."""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
        use_enum_values=True,
        extra="ignore",
    )


class Message(BaseModel):
    message: str


def reject_explicit_null(value, info):
    """Patch fields backed by NOT NULL columns may be omitted but not nulled."""
    if value is None:
        raise ValueError(f"{info.field_name} may not be null")
    return value
