"""
Value objects shared by events and commands.
"""

from enum import Enum, IntEnum

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class WireModel(BaseModel):
    """Base for everything that crosses the wire: camelCase on the wire, snake_case in Python."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        extra="ignore",
    )


class DeviceType(IntEnum):
    STREAM_DECK = 0
    STREAM_DECK_MINI = 1
    STREAM_DECK_XL = 2
    STREAM_DECK_MOBILE = 3
    CORSAIR_G_KEYS = 4
    STREAM_DECK_PEDAL = 5
    CORSAIR_VOYAGER = 6
    STREAM_DECK_PLUS = 7


class TitleAlignment(str, Enum):
    TOP = "top"
    MIDDLE = "middle"
    BOTTOM = "bottom"


class Target(IntEnum):
    """Where a title or image change is displayed."""
    BOTH = 0
    HARDWARE = 1
    SOFTWARE = 2


class Coordinates(WireModel):
    column: int
    row: int


class Size(WireModel):
    columns: int
    rows: int


class DeviceInfo(WireModel):
    name: str = ""
    type: DeviceType
    size: Size


class TitleParameters(WireModel):
    font_family: str = ""
    font_size: int
    font_style: str = ""
    font_underline: bool = False
    show_title: bool = True
    title_alignment: TitleAlignment = TitleAlignment.MIDDLE
    title_color: str = ""
