from datetime import datetime
from typing import Annotated

from pydantic import AfterValidator, BaseModel
from pydantic.alias_generators import to_camel

from taskboard.timeutils import to_utc


# Stored timestamps may come back naive from SQLite; responses always carry UTC
UTCDateTime = Annotated[datetime, AfterValidator(to_utc)]


class APIModel(BaseModel):
    """
    Base for request/response bodies.

    The wire format is camelCase (dueDate, completionPercentage); requests
    may also use the snake_case field names.
    """

    model_config = {
        "alias_generator": to_camel,
        "populate_by_name": True,
        "from_attributes": True,
    }


class MessageResponse(APIModel):
    """Plain acknowledgement body."""
    message: str
