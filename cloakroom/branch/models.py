# cloakroom/branch/models.py
from sqlalchemy import Boolean, Column, Integer, String
from cloakroom.core.database import Base

class Branch(Base):
    __tablename__ = "branches"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    address = Column(String, nullable=False, default="")
    maps_url = Column(String, nullable=False, default="")
    active = Column(Boolean, nullable=False, default=True, index=True)
