from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class BaseRequestDto(BaseModel):
    """
    Base class of request bodies.

    Bodies arrive in camelCase (`mentorId`, `startDate`), unknown fields are
    rejected with a 400 and surrounding whitespace is stripped from strings,
    so a goals field of "   " fails a min_length=1 constraint.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="forbid",
        str_strip_whitespace=True,
    )

    def to_db_dict(self) -> dict:
        """JSON-safe snake_case dict of the fields the client sent, for JSON columns."""
        return self.model_dump(mode="json", exclude_unset=True)

    def to_changes(self) -> dict:
        """Fields the client sent with a non-null value, as Python objects."""
        return self.model_dump(exclude_unset=True, exclude_none=True)
