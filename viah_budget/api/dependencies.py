"""Dependency injection for FastAPI endpoints"""

from fastapi import Depends, Request
from sqlalchemy.orm import Session
from viah_budget.domain.models import Catalog
from viah_budget.infrastructure.clients.weddings import WeddingAPIClient
from viah_budget.infrastructure.database.repositories import CatalogRepository
from viah_budget.infrastructure.database.session import get_db


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def get_wedding_client() -> WeddingAPIClient:
    """Provide Wedding API client instance"""
    return WeddingAPIClient()


def get_catalog(db: Session = Depends(get_db)) -> Catalog:
    """Fresh catalog snapshot for this request; never cached across requests"""
    return CatalogRepository(db).load_catalog()
