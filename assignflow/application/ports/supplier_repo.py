"""Port interface for supplier persistence."""

from abc import ABC, abstractmethod

from assignflow.domain.entities.supplier import Supplier


class SupplierRepository(ABC):
    @abstractmethod
    async def save(self, supplier: Supplier) -> Supplier:
        ...

    @abstractmethod
    async def get_by_id(self, supplier_id: str) -> Supplier | None:
        ...

    @abstractmethod
    async def get_all(self, active_only: bool = False) -> list[Supplier]:
        ...
