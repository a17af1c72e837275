"""Module level types used by the test suite (and resolvable from the CLI)."""

import datetime
import enum
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from tscriptify import embedded_field, json_field


@dataclass
class Address:
    duration: float = json_field("duration", default=0.0)
    text1: str = json_field("text,omitempty", default="")
    # Skipped: no name before the comma, explicit skip marker
    text2: str = json_field(",omitempty", default="")
    text3: str = json_field("-", default="")


@dataclass
class Dummy:
    something: str = json_field("something", default="")
    some_interface: Any = json_field("some_interface", default=None)


@dataclass
class HasName:
    name: str = json_field("name", default="")


@dataclass
class Person:
    has_name: HasName = embedded_field(default_factory=HasName)
    nicknames: List[str] = json_field("nicknames", default_factory=list)
    addresses: List[Address] = json_field("addresses", default_factory=list)
    dummy: Dummy = json_field("a", default_factory=Dummy)
    ptr: Optional[Dummy] = json_field("b", default=None)
    slice_ptr: List[Optional[Dummy]] = json_field("slice_ptr", default_factory=list)
    mapping: Dict[str, Optional[Dummy]] = json_field("map", default_factory=dict)
    birthday: Optional[datetime.datetime] = json_field("birthday", default=None)


@dataclass
class Shipment:
    statuses: Dict[str, datetime.datetime] = json_field("statuses", default_factory=dict)


class Color(enum.IntEnum):
    red = 0
    dark_blue = 1
    light_green = 3


class Status(int):
    _NAMES = {0: "pending", 1: "in_transit", 2: "delivered"}

    def __str__(self):
        return self._NAMES.get(int(self), f"Status({int(self)})")


class UserId(int):
    pass


@dataclass
class Order:
    id: UserId = json_field("id", default=UserId(0))
    color: Color = json_field("color", default=Color.red)
    status: Status = json_field("status", default=Status(0))
    history: List[Color] = json_field("history", default_factory=list)


@dataclass
class Leaf:
    value: int = json_field("value", default=0)


@dataclass
class Left:
    leaf: Leaf = json_field("leaf", default_factory=Leaf)


@dataclass
class Right:
    leaf: Leaf = json_field("leaf", default_factory=Leaf)


@dataclass
class Top:
    left: Left = json_field("left", default_factory=Left)
    right: Right = json_field("right", default_factory=Right)


@dataclass
class Node:
    label: str = json_field("label", default="")
    children: List["Node"] = json_field("children", default_factory=list)
    parent: Optional["Node"] = json_field("parent", default=None)


@dataclass
class Base:
    id: int = json_field("id", default=0)


@dataclass
class Derived(Base):
    label: str = json_field("label", default="")


@dataclass
class Blob:
    name: str = json_field("name", default="")
    data: bytes = json_field("data", default=b"")


@dataclass
class Calendar:
    days: List[datetime.date] = json_field("days", default_factory=list)
    by_id: Dict[int, str] = json_field("by_id", default_factory=dict)
    colors: Dict[str, Color] = json_field("colors", default_factory=dict)
    raw: Dict[str, bytes] = json_field("raw", default_factory=dict)
