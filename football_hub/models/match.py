"""Modelo Match"""
from sqlalchemy import Column, Integer, String, Text, DateTime, Time, ForeignKey, JSON
from sqlalchemy.orm import relationship
from football_hub.models.base import BaseModel

# O provedor envia "Finished"; comparação sem diferenciar maiúsculas
FINISHED_STATUS = "finished"


class Match(BaseModel):
    """Modelo de Partida"""
    __tablename__ = "matches"

    league_id = Column(Integer, ForeignKey("leagues.id", ondelete="CASCADE"), nullable=False, index=True)
    home_team_id = Column(Integer, ForeignKey("teams.id", ondelete="CASCADE"), nullable=False, index=True)
    away_team_id = Column(Integer, ForeignKey("teams.id", ondelete="CASCADE"), nullable=False, index=True)

    match_date = Column(DateTime, nullable=True, index=True)
    match_time = Column(Time, nullable=True)
    # Placar vem como texto do provedor ("" ou null antes do jogo)
    home_score = Column(String(10), nullable=True)
    away_score = Column(String(10), nullable=True)
    status = Column(String(50), nullable=False, default="")
    venue = Column(String(255), nullable=True)
    external_ref = Column(String(50), nullable=False, unique=True)

    # Textos gerados por IA
    match_overview = Column(Text, nullable=True)
    tactical_analysis = Column(Text, nullable=True)
    match_preview = Column(Text, nullable=True)
    prediction = Column(Text, nullable=True)
    predicted_score_home = Column(Integer, nullable=True)
    predicted_score_away = Column(Integer, nullable=True)

    statistics = Column(JSON, nullable=False, default=list)

    # Relationships
    league = relationship("League", backref="matches")
    home_team = relationship("Team", foreign_keys=[home_team_id])
    away_team = relationship("Team", foreign_keys=[away_team_id])

    @property
    def is_finished(self) -> bool:
        return is_finished_status(self.status)

    def __repr__(self):
        return (
            f"<Match(id={self.id}, home={self.home_team_id}, away={self.away_team_id}, "
            f"status='{self.status}')>"
        )


def is_finished_status(status) -> bool:
    return (status or "").strip().lower() == FINISHED_STATUS
