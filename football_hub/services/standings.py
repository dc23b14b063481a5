"""
Classificação de uma liga calculada a partir das partidas.

Só contam partidas encerradas com os dois placares numéricos. As linhas são
agrupadas pelo id do time (o nome serve só para exibição) e ordenadas por
pontos, saldo, gols pró, nome e id, de modo que a ordem de entrada não
altera o resultado.
"""
from dataclasses import dataclass, asdict
from typing import Dict, Iterable, List, Optional
from football_hub.models.match import Match, is_finished_status

POINTS_WIN = 3
POINTS_DRAW = 1


@dataclass(frozen=True)
class MatchResult:
    """Entrada mínima do cálculo, sem dependência do ORM"""
    home_team_id: int
    away_team_id: int
    home_score: Optional[str]
    away_score: Optional[str]
    status: Optional[str]
    home_team_name: str = ""
    away_team_name: str = ""
    home_team_logo: Optional[str] = None
    away_team_logo: Optional[str] = None

    @classmethod
    def from_match(cls, match: Match) -> "MatchResult":
        """Adapta uma Match com home_team/away_team carregados"""
        home, away = match.home_team, match.away_team
        return cls(
            home_team_id=match.home_team_id,
            away_team_id=match.away_team_id,
            home_score=match.home_score,
            away_score=match.away_score,
            status=match.status,
            home_team_name=home.name if home else f"Team {match.home_team_id}",
            away_team_name=away.name if away else f"Team {match.away_team_id}",
            home_team_logo=home.logo_url if home else None,
            away_team_logo=away.logo_url if away else None,
        )


@dataclass
class StandingRow:
    team_id: int
    team_name: str
    logo_url: Optional[str] = None
    position: int = 0
    played: int = 0
    wins: int = 0
    draws: int = 0
    losses: int = 0
    goals_for: int = 0
    goals_against: int = 0
    goal_difference: int = 0
    points: int = 0

    def record(self, scored: int, conceded: int) -> None:
        self.played += 1
        self.goals_for += scored
        self.goals_against += conceded
        self.goal_difference = self.goals_for - self.goals_against
        if scored > conceded:
            self.wins += 1
            self.points += POINTS_WIN
        elif scored == conceded:
            self.draws += 1
            self.points += POINTS_DRAW
        else:
            self.losses += 1

    def to_dict(self) -> dict:
        return asdict(self)


def _score(value) -> Optional[int]:
    if value is None:
        return None
    try:
        return int(str(value).strip())
    except ValueError:
        return None


def _sort_key(row: StandingRow):
    return (-row.points, -row.goal_difference, -row.goals_for, row.team_name.lower(), row.team_id)


def compute_standings(matches: Iterable[MatchResult]) -> List[StandingRow]:
    """Calcula a tabela; times sem partida encerrada não aparecem"""
    table: Dict[int, StandingRow] = {}

    def row_for(team_id: int, name: str, logo: Optional[str]) -> StandingRow:
        row = table.get(team_id)
        if row is None:
            row = table[team_id] = StandingRow(team_id=team_id, team_name=name, logo_url=logo)
        return row

    for match in matches:
        if not is_finished_status(match.status):
            continue
        home_goals, away_goals = _score(match.home_score), _score(match.away_score)
        if home_goals is None or away_goals is None:
            continue

        row_for(match.home_team_id, match.home_team_name, match.home_team_logo).record(home_goals, away_goals)
        row_for(match.away_team_id, match.away_team_name, match.away_team_logo).record(away_goals, home_goals)

    standings = sorted(table.values(), key=_sort_key)
    for position, row in enumerate(standings, start=1):
        row.position = position
    return standings
