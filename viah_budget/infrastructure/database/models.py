"""SQLAlchemy ORM models for the ceremony template catalog"""

from sqlalchemy import Column, DateTime, Float, ForeignKey, Integer, Numeric, Text
from sqlalchemy.orm import declarative_base, relationship
from sqlalchemy.sql import func

Base = declarative_base()


class CeremonyTemplateRecord(Base):
    """Admin-maintained ceremony cost profile"""

    __tablename__ = "ceremony_template"

    id = Column(Text, primary_key=True)
    name = Column(Text, nullable=False)
    tradition = Column(Text, nullable=False, index=True)
    description = Column(Text, nullable=False, default="")
    default_guest_count = Column(Integer, nullable=False, default=100)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    line_items = relationship(
        "CeremonyLineItemRecord",
        back_populates="template",
        cascade="all, delete-orphan",
        order_by="CeremonyLineItemRecord.position",
    )


class CeremonyLineItemRecord(Base):
    """Budget sub-category belonging to one ceremony template"""

    __tablename__ = "ceremony_line_item"

    id = Column(Integer, primary_key=True, autoincrement=True)
    template_id = Column(Text, ForeignKey("ceremony_template.id", ondelete="CASCADE"), nullable=False, index=True)
    position = Column(Integer, nullable=False, default=0)
    category = Column(Text, nullable=False)
    unit = Column(Text, nullable=False, default="fixed")
    low_cost = Column(Numeric(12, 2), nullable=False)
    high_cost = Column(Numeric(12, 2), nullable=False)
    hours_low = Column(Float, nullable=True)
    hours_high = Column(Float, nullable=True)
    notes = Column(Text, nullable=True)

    template = relationship("CeremonyTemplateRecord", back_populates="line_items")
