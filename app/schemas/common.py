import re
from datetime import time

from pydantic import BaseModel, BeforeValidator, ConfigDict, PlainSerializer
from pydantic.alias_generators import to_camel
from typing import Annotated

from app.utils.slot_overlap import parse_time, format_time

# 24h "HH:mm", single-digit hours accepted
TIME_PATTERN = re.compile(r"^([0-1]?[0-9]|2[0-3]):[0-5][0-9]$")


def validate_hhmm(value):
    """Accept "HH:mm" strings (or ``time`` objects) and return a ``time``."""
    if isinstance(value, time):
        return value
    if not isinstance(value, str) or not TIME_PATTERN.match(value):
        raise ValueError("Time must be in HH:mm format")
    return parse_time(value.zfill(5))


# Python-mode dumps keep ``time`` objects for the ORM, JSON gets "HH:mm"
HHMMTime = Annotated[
    time,
    BeforeValidator(validate_hhmm),
    PlainSerializer(format_time, return_type=str, when_used="json"),
]


class CamelModel(BaseModel):
    """Base schema exposing camelCase field names on the wire."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )
