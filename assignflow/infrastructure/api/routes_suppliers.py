"""Supplier directory — assignment target selection for admins."""

from fastapi import APIRouter, Depends

from assignflow.application.concurrency import bounded
from assignflow.config import settings
from assignflow.domain.entities.actor import Actor
from assignflow.infrastructure.api.dependencies import (
    Repositories,
    get_repositories,
    require_admin,
)
from assignflow.infrastructure.api.serializers import serialize_supplier

router = APIRouter(prefix="/suppliers", tags=["suppliers"])


@router.get("")
async def list_suppliers(
    active_only: bool = False,
    actor: Actor = Depends(require_admin),
    repos: Repositories = Depends(get_repositories),
):
    suppliers = await bounded(
        repos.suppliers.get_all(active_only=active_only),
        settings.persistence_timeout_s, "listing suppliers",
    )
    return {"total": len(suppliers), "suppliers": [serialize_supplier(s) for s in suppliers]}
