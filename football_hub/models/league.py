"""Modelo League"""
from sqlalchemy import Column, String, Text
from football_hub.models.base import BaseModel


class League(BaseModel):
    """Modelo de Liga"""
    __tablename__ = "leagues"

    name = Column(String(255), nullable=False, index=True)
    country = Column(String(100), nullable=True)
    external_ref = Column(String(50), nullable=False, unique=True)
    logo_url = Column(Text, nullable=True)

    def __repr__(self):
        return f"<League(id={self.id}, name='{self.name}', external_ref='{self.external_ref}')>"
