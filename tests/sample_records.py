"""Record types and an in-memory table shared by the test suite."""
from __future__ import annotations

import asyncio
from datetime import datetime
from typing import Any, Callable, Literal, Union

from pydantic import BaseModel


class Item(BaseModel):
    name: str
    price: float


class FamilyPlan(BaseModel):
    kind: Literal["Family"]
    shared_membership: int


Plan = Union[Literal["Premium", "Standard"], FamilyPlan]


class Customer(BaseModel):
    name: str
    email: str
    plan: Plan


class Order(BaseModel):
    id: int
    customer_id: int
    item_id: int
    quantity: int
    purchased_at: datetime


class Company(BaseModel):
    name: str


class User(BaseModel):
    name: str
    company_id: int
    email: str = ""


ITEM_IDS: dict[str, int] = {"melon": 1, "orange": 2, "apple": 3, "carrot": 4}
CUSTOMER_IDS: dict[str, int] = {"Alice": 11, "Bob": 12, "Developer": 13}
ORDER_IDS: dict[str, int] = {"1": 101, "2": 102, "3": 103}


class MockTable:
    """Stand-in for a database table.

    Stores inserted records and returns the id pre-registered for the
    record's key; unknown keys fail the insertion.
    """

    def __init__(
        self,
        ids_by_key: dict[str, int],
        key: Callable[[Any], str] = lambda record: record.name,
    ) -> None:
        self.ids_by_key = dict(ids_by_key)
        self.key = key
        self.records: list[Any] = []
        self.in_flight = 0
        self.max_in_flight = 0

    def insert(self, record: Any) -> int:
        record_key = self.key(record)
        if record_key not in self.ids_by_key:
            raise RuntimeError(f"insert failed for {record_key}")
        self.records.append(record)
        return self.ids_by_key[record_key]

    async def insert_async(self, record: Any) -> int:
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            await asyncio.sleep(0.001)
            return self.insert(record)
        finally:
            self.in_flight -= 1
