# backend/leadcrm/models.py
"""
SQLAlchemy ORM models.

Only the columns the enrichment engine reads or writes are mapped here; the
rest of the ``leads`` table belongs to the lead-management side of the CRM.
"""

from sqlalchemy import Column, String, Integer, DateTime, JSON, Index
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.sql import func

from leadcrm.database import Base


# JSONB on Postgres, plain JSON elsewhere. None is written as SQL NULL so that
# "not yet enriched" stays an IS NULL check.
EnrichmentJSON = JSON(none_as_null=True).with_variant(
    JSONB(none_as_null=True), "postgresql"
)


class Lead(Base):
    """Company lead imported from a spreadsheet."""
    __tablename__ = "leads"

    id = Column(Integer, primary_key=True, autoincrement=True)
    register_id = Column(String(100))

    # ========================================================================
    # COMPANY INFO
    # ========================================================================
    name = Column(String(255), nullable=False)
    legal_form = Column(String(50))
    nace_code = Column(String(255))
    employee_count = Column(Integer)
    website = Column(String(500))
    phone = Column(String(50))

    # ========================================================================
    # LOCATION
    # ========================================================================
    street = Column(String(255))
    zip = Column(String(20))
    city = Column(String(100))

    # ========================================================================
    # SOURCE INFO
    # ========================================================================
    import_source = Column(String(255))  # label of the uploaded CSV batch

    # ========================================================================
    # ENRICHMENT DATA
    # ========================================================================
    enrichment_data = Column(EnrichmentJSON)  # written only by the enrichment engine

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    __table_args__ = (
        Index("idx_leads_import_source_id", "import_source", "id"),
    )

    def __repr__(self):
        return f"<Lead(id={self.id}, name='{self.name}', city='{self.city}')>"
