"""Injected collaborators shared by use cases."""

from collections.abc import Awaitable, Callable
from datetime import datetime

from assignflow.domain.entities.events import StatusChanged

IdGenerator = Callable[[], str]
Clock = Callable[[], datetime]
StatusSubscriber = Callable[[StatusChanged], Awaitable[None]]
