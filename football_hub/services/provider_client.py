"""Cliente da API de dados de futebol (apifootball)"""
import time
from typing import Any, Dict, List, Optional
import requests
from football_hub.core.config import settings
from football_hub.core.exceptions import UpstreamUnavailableError
import logging

logger = logging.getLogger(__name__)

RETRYABLE_STATUS = {429, 500, 502, 503, 504}


class FootballAPIClient:
    """Cliente síncrono com rate limiting simples e retry com backoff exponencial"""

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout: Optional[int] = None,
        max_retries: Optional[int] = None,
        min_interval: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ):
        self.api_key = api_key if api_key is not None else settings.FOOTBALL_API_KEY
        self.base_url = (base_url or settings.FOOTBALL_API_BASE_URL).rstrip("/")
        self.timeout = timeout or settings.PROVIDER_TIMEOUT
        self.max_retries = max_retries or settings.PROVIDER_MAX_RETRIES
        self.min_interval = settings.PROVIDER_MIN_INTERVAL if min_interval is None else min_interval
        self.session = session or requests.Session()
        self.last_request_time = 0.0

    def _wait_rate_limit(self):
        elapsed = time.monotonic() - self.last_request_time
        if elapsed < self.min_interval:
            time.sleep(self.min_interval - elapsed)
        self.last_request_time = time.monotonic()

    def _backoff(self, attempt: int, response: Optional[requests.Response] = None) -> float:
        if response is not None and response.status_code == 429:
            retry_after = response.headers.get("Retry-After")
            if retry_after and retry_after.isdigit():
                return float(retry_after)
        return float(2 ** attempt)

    def make_request(self, action: str, params: Optional[Dict] = None) -> Any:
        """
        Faz GET /?action=<action>. Depois da última tentativa levanta
        UpstreamUnavailableError em vez de devolver dados vazios.
        """
        query = dict(params or {})
        query["action"] = action
        query["APIkey"] = self.api_key
        url = f"{self.base_url}/"

        last_error = "no attempt made"
        for attempt in range(self.max_retries):
            self._wait_rate_limit()
            response = None
            try:
                logger.info(f"Requisição {attempt + 1}/{self.max_retries}: {action}")
                response = self.session.get(url, params=query, timeout=self.timeout)

                if response.status_code in RETRYABLE_STATUS:
                    last_error = f"status {response.status_code}"
                    logger.warning(f"Provedor respondeu {response.status_code} para {action}")
                elif response.status_code != 200:
                    logger.error(f"Status code {response.status_code}: {response.text[:500]}")
                    raise UpstreamUnavailableError(
                        f"Football data provider returned status {response.status_code}"
                    )
                else:
                    return response.json()
            except ValueError as e:
                # JSON inválido
                raise UpstreamUnavailableError("Invalid response from football data provider") from e
            except requests.exceptions.RequestException as e:
                last_error = str(e)
                logger.error(f"Erro na requisição {action} (tentativa {attempt + 1}): {e}")

            if attempt < self.max_retries - 1:
                wait = self._backoff(attempt, response)
                logger.info(f"Aguardando {wait}s antes de retry...")
                time.sleep(wait)

        raise UpstreamUnavailableError(f"Football data provider unavailable ({last_error})")

    def _as_list(self, data: Any, action: str) -> List[Dict]:
        """Normaliza a resposta: lista, 'não encontrado' vira [], o resto é erro"""
        if isinstance(data, list):
            return data
        if isinstance(data, dict) and str(data.get("error")) == "404":
            logger.info(f"Provedor sem resultados para {action}: {data.get('message')}")
            return []
        logger.error(f"Formato de resposta inesperado em {action}: {type(data)}")
        raise UpstreamUnavailableError("Invalid response from football data provider")

    def get_leagues(self) -> List[Dict]:
        """Ligas disponíveis no plano"""
        return self._as_list(self.make_request("get_leagues"), "get_leagues")

    def get_teams(self, league_ref: str) -> List[Dict]:
        """Times da liga, cada um com a lista de jogadores"""
        data = self.make_request("get_teams", {"league_id": league_ref})
        return self._as_list(data, "get_teams")

    def get_events(self, league_ref: str, date_from: str, date_to: str) -> List[Dict]:
        """Partidas da liga na janela de datas (YYYY-MM-DD)"""
        data = self.make_request("get_events", {"league_id": league_ref, "from": date_from, "to": date_to})
        return self._as_list(data, "get_events")


def get_football_api_client() -> FootballAPIClient:
    """Dependency do cliente do provedor"""
    return FootballAPIClient()
