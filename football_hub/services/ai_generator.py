"""Geração de textos por IA (DeepSeek ou OpenAI via langchain)"""
import json
from typing import Any, Dict, Optional
from langchain_openai import ChatOpenAI
from langchain_core.messages import HumanMessage, SystemMessage
from football_hub.core.config import settings
from football_hub.core.exceptions import UpstreamUnavailableError
import logging

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = (
    "You are a football analyst writing short, factual texts for a football stats website. "
    "Never invent results that are not in the prompt."
)


def strip_code_fences(text: str) -> str:
    """Remove blocos markdown ```json ... ``` se presentes"""
    text = text.strip()
    if text.startswith("```json"):
        text = text[7:]
    elif text.startswith("```"):
        text = text[3:]
    if text.endswith("```"):
        text = text[:-3]
    return text.strip()


def parse_json_object(text: str) -> Dict[str, Any]:
    """Extrai o objeto JSON da resposta do modelo"""
    cleaned = strip_code_fences(text)
    try:
        data = json.loads(cleaned)
    except json.JSONDecodeError:
        # Modelo às vezes escreve algo antes/depois do objeto
        start, end = cleaned.find("{"), cleaned.rfind("}")
        if start == -1 or end <= start:
            raise UpstreamUnavailableError("AI provider returned invalid JSON")
        try:
            data = json.loads(cleaned[start:end + 1])
        except json.JSONDecodeError as e:
            raise UpstreamUnavailableError("AI provider returned invalid JSON") from e
    if not isinstance(data, dict):
        raise UpstreamUnavailableError("AI provider returned invalid JSON")
    return data


class AIGenerator:
    """Wrapper do ChatOpenAI usado para descrições, prévias e análises"""

    def __init__(self, llm: Optional[Any] = None):
        self.llm = llm
        if self.llm is None:
            self._initialize_llm()

    def _initialize_llm(self):
        """Inicializa LLM com DeepSeek, fallback para OpenAI"""
        if settings.DEEPSEEK_API_KEY:
            base_url = settings.DEEPSEEK_BASE_URL or "https://api.deepseek.com/v1"
            if not base_url.endswith("/v1"):
                base_url = base_url.rstrip("/") + "/v1"
            self.llm = ChatOpenAI(
                model=settings.AI_MODEL,
                temperature=settings.AI_TEMPERATURE,
                api_key=settings.DEEPSEEK_API_KEY,
                base_url=base_url,
            )
            logger.info(f"Gerador de IA com DeepSeek (modelo: {settings.AI_MODEL})")
        elif settings.OPENAI_API_KEY:
            self.llm = ChatOpenAI(
                model="gpt-4o-mini",
                temperature=settings.AI_TEMPERATURE,
                api_key=settings.OPENAI_API_KEY,
            )
            logger.info("Gerador de IA com OpenAI (fallback)")
        else:
            logger.warning("Nenhuma API key de IA configurada (DEEPSEEK_API_KEY ou OPENAI_API_KEY)")

    @property
    def available(self) -> bool:
        return self.llm is not None

    async def generate(self, prompt: str) -> str:
        """Texto livre a partir do prompt"""
        if not self.llm:
            raise UpstreamUnavailableError("AI provider is not configured", status_code=503)

        messages = [
            SystemMessage(content=SYSTEM_PROMPT),
            HumanMessage(content=prompt),
        ]
        try:
            response = await self.llm.ainvoke(messages)
        except Exception as e:
            logger.error(f"Erro ao chamar provedor de IA: {e}")
            raise UpstreamUnavailableError("AI provider request failed") from e

        content = response.content if isinstance(response.content, str) else ""
        text = content.strip()
        if not text:
            raise UpstreamUnavailableError("AI provider returned an empty response")
        return text

    async def generate_json(self, prompt: str) -> Dict[str, Any]:
        """Resposta em JSON; conteúdo inválido vira UpstreamUnavailableError"""
        text = await self.generate(prompt + "\n\nRespond with a single JSON object only, no markdown.")
        return parse_json_object(text)


_generator: Optional[AIGenerator] = None


def get_ai_generator() -> AIGenerator:
    """Dependency do gerador de IA (instância única por processo)"""
    global _generator
    if _generator is None:
        _generator = AIGenerator()
    return _generator
