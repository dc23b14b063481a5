"""
DTOs de entrada dos registros do provedor (apifootball).

Cada registro bruto é validado aqui antes de chegar ao banco: strings vazias
viram None, ids numéricos viram texto e a falta de um campo identificador
levanta MissingRequiredDataError com a lista de campos.
"""
from datetime import date, datetime, time, timezone
from typing import Any, ClassVar, List, Optional, Tuple, Type, TypeVar
from pydantic import BaseModel, ConfigDict, ValidationError, field_validator
from football_hub.core.exceptions import MissingRequiredDataError
import logging

logger = logging.getLogger(__name__)

T = TypeVar("T", bound="ProviderRecord")


def _blank_to_none(value: Any) -> Any:
    if isinstance(value, str) and not value.strip():
        return None
    return value


def to_int(value: Any) -> Optional[int]:
    """Converte valores do provedor ("1886", 25, "") para int ou None"""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    try:
        return int(str(value).strip())
    except (TypeError, ValueError):
        return None


def parse_date(value: Optional[str]) -> Optional[datetime]:
    """Data "YYYY-MM-DD" do provedor como datetime à meia-noite"""
    if value is None:
        return None
    try:
        parsed = date.fromisoformat(value.strip())
    except ValueError:
        logger.warning(f"Data inválida do provedor: {value!r}")
        return None
    return datetime(parsed.year, parsed.month, parsed.day)


def parse_time(value: Optional[str]) -> Optional[time]:
    """Hora "HH:MM" do provedor"""
    if value is None:
        return None
    for fmt in ("%H:%M", "%H:%M:%S"):
        try:
            return datetime.strptime(value.strip(), fmt).time()
        except ValueError:
            continue
    logger.warning(f"Hora inválida do provedor: {value!r}")
    return None


class ProviderRecord(BaseModel):
    """Base: ignora campos desconhecidos e normaliza valores vazios"""
    model_config = ConfigDict(extra="ignore")

    ENTITY: ClassVar[str] = "record"
    REQUIRED: ClassVar[Tuple[str, ...]] = ()

    @field_validator("*", mode="before")
    @classmethod
    def _normalize(cls, value):
        value = _blank_to_none(value)
        # ids e números chegam ora como int, ora como str
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        return value

    @classmethod
    def parse(cls: Type[T], raw: Any) -> T:
        """Valida um registro bruto; campos identificadores ausentes viram erro explícito"""
        if not isinstance(raw, dict):
            raise MissingRequiredDataError(cls.ENTITY, list(cls.REQUIRED))
        missing = [name for name in cls.REQUIRED if _blank_to_none(raw.get(name)) is None]
        if missing:
            raise MissingRequiredDataError(cls.ENTITY, missing)
        try:
            return cls.model_validate(raw)
        except ValidationError as e:
            fields = [".".join(str(part) for part in err["loc"]) for err in e.errors()]
            raise MissingRequiredDataError(cls.ENTITY, fields) from e


class ProviderLeague(ProviderRecord):
    ENTITY: ClassVar[str] = "league"
    REQUIRED: ClassVar[Tuple[str, ...]] = ("league_id", "league_name")

    league_id: str
    league_name: str
    country_name: Optional[str] = None
    league_logo: Optional[str] = None
    league_season: Optional[str] = None

    def to_values(self) -> dict:
        return {
            "name": self.league_name,
            "country": self.country_name,
            "external_ref": self.league_id,
            "logo_url": self.league_logo,
        }


class ProviderVenue(ProviderRecord):
    venue_name: Optional[str] = None
    venue_address: Optional[str] = None
    venue_city: Optional[str] = None
    venue_capacity: Optional[str] = None


class ProviderCoach(ProviderRecord):
    coach_name: Optional[str] = None


class ProviderPlayer(ProviderRecord):
    ENTITY: ClassVar[str] = "player"
    REQUIRED: ClassVar[Tuple[str, ...]] = ("player_id", "player_name")

    player_id: str
    player_name: str
    player_type: Optional[str] = None
    player_image: Optional[str] = None
    player_age: Optional[str] = None
    player_number: Optional[str] = None

    def to_values(self, team_id: int) -> dict:
        return {
            "team_id": team_id,
            "full_name": self.player_name,
            "primary_position": self.player_type,
            "thumb_url": self.player_image,
            "external_ref": self.player_id,
            "age": to_int(self.player_age),
            "shirt_number": self.player_number,
        }


class ProviderTeam(ProviderRecord):
    ENTITY: ClassVar[str] = "team"
    REQUIRED: ClassVar[Tuple[str, ...]] = ("team_key", "team_name")

    team_key: str
    team_name: str
    team_badge: Optional[str] = None
    team_country: Optional[str] = None
    team_founded: Optional[str] = None
    venue: Optional[ProviderVenue] = None
    coaches: List[ProviderCoach] = []
    # Jogadores seguem crus; cada um é validado na sua própria sincronização
    players: List[Any] = []

    @field_validator("coaches", "players", mode="before")
    @classmethod
    def _none_to_list(cls, value):
        return value or []

    def to_values(self, league_id: int) -> dict:
        venue = self.venue or ProviderVenue()
        return {
            "league_id": league_id,
            "name": self.team_name,
            "logo_url": self.team_badge,
            "founded_year": to_int(self.team_founded),
            "country": self.team_country,
            "stadium_name": venue.venue_name,
            "stadium_city": venue.venue_city,
            "stadium_capacity": to_int(venue.venue_capacity),
            "venue_address": venue.venue_address,
            "coach": self.coaches[0].coach_name if self.coaches else None,
            "external_ref": self.team_key,
            "last_synced_at": datetime.now(timezone.utc),
        }


class ProviderMatch(ProviderRecord):
    ENTITY: ClassVar[str] = "match"
    REQUIRED: ClassVar[Tuple[str, ...]] = ("match_id",)

    match_id: str
    match_date: Optional[str] = None
    match_time: Optional[str] = None
    match_hometeam_id: Optional[str] = None
    match_awayteam_id: Optional[str] = None
    match_hometeam_name: Optional[str] = None
    match_awayteam_name: Optional[str] = None
    match_hometeam_ft_score: Optional[str] = None
    match_awayteam_ft_score: Optional[str] = None
    match_status: Optional[str] = None
    league_year: Optional[str] = None
    statistics: List[Any] = []

    @field_validator("statistics", mode="before")
    @classmethod
    def _none_to_list(cls, value):
        return value or []

    def to_values(self, league_id: int, home_team_id: int, away_team_id: int, venue: Optional[str]) -> dict:
        return {
            "league_id": league_id,
            "home_team_id": home_team_id,
            "away_team_id": away_team_id,
            "match_date": parse_date(self.match_date),
            "match_time": parse_time(self.match_time),
            "home_score": self.match_hometeam_ft_score,
            "away_score": self.match_awayteam_ft_score,
            "status": self.match_status or "",
            "venue": venue,
            "external_ref": self.match_id,
            "statistics": self.statistics,
        }
