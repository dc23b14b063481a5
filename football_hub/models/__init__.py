"""Models - modelos SQLAlchemy"""
from football_hub.models.league import League
from football_hub.models.team import Team
from football_hub.models.player import Player
from football_hub.models.match import Match
from football_hub.models.user import User
from football_hub.models.favorite import Favorite

__all__ = [
    "League",
    "Team",
    "Player",
    "Match",
    "User",
    "Favorite",
]
