"""Data access layer for the ceremony template catalog"""

import logging
from typing import Iterable, List

from sqlalchemy.orm import Session, selectinload

from viah_budget.domain.catalog import DEFAULT_CATALOG, build_catalog
from viah_budget.domain.models import Catalog, CeremonyTemplate, CostUnit, LineItem
from viah_budget.infrastructure.database.models import CeremonyLineItemRecord, CeremonyTemplateRecord

logger = logging.getLogger(__name__)


class CatalogRepository:
    """Repository for ceremony templates and their line items"""

    def __init__(self, db: Session):
        self.db = db

    def load_catalog(self) -> Catalog:
        """
        Snapshot the catalog as of now.

        Falls back to the built-in catalog when no templates have been loaded
        into the database yet.
        """
        records = (
            self.db.query(CeremonyTemplateRecord)
            .options(selectinload(CeremonyTemplateRecord.line_items))
            .order_by(CeremonyTemplateRecord.id)
            .all()
        )
        if not records:
            return DEFAULT_CATALOG
        return build_catalog(self._to_domain(record) for record in records)

    def seed(self, templates: Iterable[CeremonyTemplate]) -> int:
        """Insert templates that do not exist yet; returns how many were added"""
        existing = {row[0] for row in self.db.query(CeremonyTemplateRecord.id).all()}
        added = 0
        for template in templates:
            if template.id in existing:
                continue
            self.db.add(self._to_record(template))
            added += 1
        self.db.flush()
        return added

    @staticmethod
    def _to_domain(record: CeremonyTemplateRecord) -> CeremonyTemplate:
        items: List[LineItem] = []
        for item in record.line_items:
            try:
                unit = CostUnit(item.unit)
            except ValueError:
                logger.warning("Unknown line item unit %r on %s, treating as fixed", item.unit, record.id)
                unit = CostUnit.FIXED
            low_cost, high_cost = float(item.low_cost), float(item.high_cost)
            if low_cost > high_cost:
                logger.warning(
                    "Inverted cost range %s-%s for %s on %s, swapping",
                    low_cost, high_cost, item.category, record.id,
                )
                low_cost, high_cost = high_cost, low_cost
            items.append(
                LineItem(
                    category=item.category,
                    unit=unit,
                    low_cost=low_cost,
                    high_cost=high_cost,
                    hours_low=item.hours_low,
                    hours_high=item.hours_high,
                    notes=item.notes,
                )
            )
        return CeremonyTemplate(
            id=record.id,
            name=record.name,
            tradition=record.tradition,
            default_guest_count=record.default_guest_count,
            line_items=tuple(items),
            description=record.description or "",
        )

    @staticmethod
    def _to_record(template: CeremonyTemplate) -> CeremonyTemplateRecord:
        return CeremonyTemplateRecord(
            id=template.id,
            name=template.name,
            tradition=template.tradition,
            description=template.description,
            default_guest_count=template.default_guest_count,
            line_items=[
                CeremonyLineItemRecord(
                    position=position,
                    category=item.category,
                    unit=item.unit.value,
                    low_cost=item.low_cost,
                    high_cost=item.high_cost,
                    hours_low=item.hours_low,
                    hours_high=item.hours_high,
                    notes=item.notes,
                )
                for position, item in enumerate(template.line_items)
            ],
        )
