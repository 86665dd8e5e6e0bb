"""Pytest configuration and shared fixtures."""

from __future__ import annotations

import itertools
from datetime import datetime, timedelta, timezone

import pytest

from assignflow.adapters.persistence.memory import (
    InMemoryAssignmentRepository,
    InMemoryStore,
    InMemorySupplierRepository,
)
from assignflow.application.concurrency import KeyedLock
from assignflow.domain.entities.actor import Actor
from assignflow.domain.entities.supplier import Supplier
from assignflow.domain.value_objects.enums import ActorRole

T0 = datetime(2026, 1, 1, 9, 0, tzinfo=timezone.utc)


class TickingClock:
    """Advances one second per call so createdAt ordering is deterministic."""

    def __init__(self, start: datetime = T0):
        self.now = start

    def __call__(self) -> datetime:
        self.now += timedelta(seconds=1)
        return self.now


class SequentialIds:
    def __init__(self, prefix: str):
        self._prefix = prefix
        self._counter = itertools.count(1)

    def __call__(self) -> str:
        return f"{self._prefix}_{next(self._counter)}"


@pytest.fixture
def store() -> InMemoryStore:
    s = InMemoryStore()
    for supplier in (
        Supplier(id="sup_1", company_name="الأمل لقطع الغيار", contact_name="Khaled"),
        Supplier(id="sup_2", company_name="Gulf Parts Co."),
        Supplier(id="sup_old", company_name="Closed Trading", is_active=False),
    ):
        s.suppliers[supplier.id] = supplier
    return s


@pytest.fixture
def repo(store) -> InMemoryAssignmentRepository:
    return InMemoryAssignmentRepository(store)


@pytest.fixture
def suppliers(store) -> InMemorySupplierRepository:
    return InMemorySupplierRepository(store)


@pytest.fixture
def clock() -> TickingClock:
    return TickingClock()


@pytest.fixture
def ids() -> SequentialIds:
    return SequentialIds("id")


@pytest.fixture
def locks() -> KeyedLock:
    return KeyedLock()


@pytest.fixture
def admin() -> Actor:
    return Actor(role=ActorRole.ADMIN, user_id="admin_1")


@pytest.fixture
def supplier_actor() -> Actor:
    return Actor(role=ActorRole.SUPPLIER, user_id="user_7", supplier_id="sup_1")


@pytest.fixture
def other_supplier_actor() -> Actor:
    return Actor(role=ActorRole.SUPPLIER, user_id="user_9", supplier_id="sup_2")
