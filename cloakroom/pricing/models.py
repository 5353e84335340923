# cloakroom/pricing/models.py
from sqlalchemy import JSON, Column, DateTime, Float, Integer, String
from cloakroom.core.database import Base

# Single row; id is always CURRENT_ID
CURRENT_ID = 1

class PricingSetting(Base):
    __tablename__ = "pricing"

    id = Column(Integer, primary_key=True, default=CURRENT_ID)
    hourly = Column(JSON, nullable=False, default=dict)
    min_hours = Column(Float, nullable=False, default=1)
    rounding = Column(String(8), nullable=False, default="CEIL")
    updated_at = Column(DateTime(timezone=True), nullable=True)
