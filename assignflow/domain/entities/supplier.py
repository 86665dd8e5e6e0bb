"""Supplier entity — a company that fulfils assigned requests."""

from dataclasses import dataclass


@dataclass
class Supplier:
    id: str
    company_name: str
    contact_name: str | None = None
    is_active: bool = True
