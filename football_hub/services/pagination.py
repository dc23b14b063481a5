"""
Parâmetros de paginação e filtros das listagens.

As listagens têm duas operações explícitas: "todos" (meta só com total) e
"página" (limit/offset com meta completa). O tamanho de página acima do
máximo é reduzido ao máximo, nunca rejeitado.
"""
import math
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Optional, Tuple
from football_hub.core.config import settings
from football_hub.core.exceptions import BadRequestError

DATE_FORMAT = "%m/%d/%Y"


@dataclass(frozen=True)
class PageParams:
    number: int
    size: int

    @property
    def offset(self) -> int:
        return (self.number - 1) * self.size


@dataclass(frozen=True)
class TeamFilters:
    search: Optional[str] = None
    country: Optional[str] = None
    league_id: Optional[int] = None


@dataclass(frozen=True)
class MatchFilters:
    search: Optional[str] = None
    status: Optional[str] = None
    league_id: Optional[int] = None
    # intervalo semiaberto [inicio, fim)
    date_range: Optional[Tuple[datetime, datetime]] = None


def _parse_positive(value, label: str) -> int:
    try:
        number = int(str(value).strip())
    except (TypeError, ValueError):
        raise BadRequestError(f"{label} must be a positive integer")
    if number < 1:
        raise BadRequestError(f"{label} must be a positive integer")
    return number


def build_page_params(number, size, default_size: int, max_size: Optional[int] = None) -> PageParams:
    """Valida page[number]/page[size]; tamanho acima do máximo é limitado"""
    max_size = max_size or settings.MAX_PAGE_SIZE
    page_number = 1 if number is None else _parse_positive(number, "Page number")
    page_size = default_size if size is None else _parse_positive(size, "Page size")
    return PageParams(number=page_number, size=min(page_size, max_size))


def page_meta(page: PageParams, total: int) -> dict:
    total_pages = math.ceil(total / page.size) if page.size else 0
    return {
        "page": page.number,
        "size": page.size,
        "total": total,
        "totalPages": total_pages,
        "hasNext": page.number < total_pages,
        "hasPrev": page.number > 1,
    }


def total_meta(total: int) -> dict:
    return {"total": total}


def parse_day_range(value: Optional[str]) -> Optional[Tuple[datetime, datetime]]:
    """"MM/DD/YYYY" -> [00:00 do dia, 00:00 do dia seguinte)"""
    if value is None or not value.strip():
        return None
    try:
        start = datetime.strptime(value.strip(), DATE_FORMAT)
    except ValueError:
        raise BadRequestError("Invalid date format. Expected MM/DD/YYYY")
    return start, start + timedelta(days=1)
