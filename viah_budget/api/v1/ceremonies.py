"""GET /v1/ceremonies - ceremony template catalog"""

from typing import Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from viah_budget.api.v1.schemas import CeremonyListResponse, CeremonySchema, SeedCatalogResponse
from viah_budget.api.dependencies import get_catalog, get_request_id
from viah_budget.domain.catalog import (
    CEREMONY_TEMPLATES,
    default_ceremonies_for_tradition,
    templates_for_tradition,
)
from viah_budget.domain.models import Catalog
from viah_budget.infrastructure.database.repositories import CatalogRepository
from viah_budget.infrastructure.database.session import get_db
from viah_budget.infrastructure.observability.logging import log_catalog_seeded

router = APIRouter()


@router.get("/ceremonies", response_model=CeremonyListResponse)
def list_ceremonies(
    tradition: Optional[str] = Query(None, description="Filter by cultural tradition"),
    catalog: Catalog = Depends(get_catalog),
):
    """
    List ceremony templates with their line items.

    With a tradition, only that tradition's templates plus the shared
    reception are returned, along with the ceremonies pre-selected for it.
    """
    if tradition:
        templates = templates_for_tradition(catalog, tradition)
        defaults = list(default_ceremonies_for_tradition(tradition))
    else:
        templates = list(catalog.templates.values())
        defaults = []

    return CeremonyListResponse(
        tradition=tradition,
        default_ceremonies=defaults,
        ceremonies=[CeremonySchema.model_validate(t, from_attributes=True) for t in templates],
    )


@router.post("/ceremonies/seed", response_model=SeedCatalogResponse)
def seed_ceremonies(
    db: Session = Depends(get_db),
    request_id: str = Depends(get_request_id),
):
    """Load built-in templates missing from the database; existing rows are left as edited"""
    added = CatalogRepository(db).seed(CEREMONY_TEMPLATES)
    db.commit()

    log_catalog_seeded(request_id, added, len(CEREMONY_TEMPLATES))
    return SeedCatalogResponse(added=added, total=len(CEREMONY_TEMPLATES))
