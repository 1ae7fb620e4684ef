"""
Property and job lookup SQLAlchemy models.
"""

from sqlalchemy import Column, String

from .base import BaseModel


class PropertyModel(BaseModel):
    """Property database model."""

    __tablename__ = "properties"

    property_name = Column(String(255), nullable=False)
    address = Column(String(255))
    city = Column(String(100))
    state = Column(String(2))


class UnitSizeModel(BaseModel):
    """Unit size lookup."""

    __tablename__ = "unit_sizes"

    unit_size_label = Column(String(50), nullable=False)


class JobTypeModel(BaseModel):
    """Job type lookup."""

    __tablename__ = "job_types"

    job_type_label = Column(String(100), nullable=False)
