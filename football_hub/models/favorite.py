"""Modelo Favorite"""
from sqlalchemy import Column, Integer, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from football_hub.models.base import BaseModel


class Favorite(BaseModel):
    """Time favorito de um usuário"""
    __tablename__ = "favorites"

    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    team_id = Column(Integer, ForeignKey("teams.id", ondelete="CASCADE"), nullable=False, index=True)

    # Relationships
    user = relationship("User", backref="favorites")
    team = relationship("Team")

    __table_args__ = (
        UniqueConstraint("user_id", "team_id", name="uq_favorite_user_team"),
    )

    def __repr__(self):
        return f"<Favorite(id={self.id}, user_id={self.user_id}, team_id={self.team_id})>"
