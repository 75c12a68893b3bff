import logging
import os
from typing import Any, Dict, Optional

import backoff
import httpx
from dotenv import load_dotenv, find_dotenv

# Load .env file (walks up directories to find it)
load_dotenv(find_dotenv())

logger = logging.getLogger(__name__)

GEMINI_API_URL = "https://generativelanguage.googleapis.com/v1beta/models/{model}:generateContent"
DEFAULT_GEMINI_MODEL = "gemini-2.0-flash"
DEFAULT_TIMEOUT = 30.0


class ExplanationUnavailable(RuntimeError):
    """The narrative could not be generated by the LLM."""


def _giveup(e: Exception) -> bool:
    return isinstance(e, httpx.HTTPStatusError) and e.response.status_code < 500


def _extract_text(data: Dict[str, Any]) -> str:
    try:
        text = data["candidates"][0]["content"]["parts"][0]["text"]
    except (KeyError, IndexError, TypeError):
        return ""
    return text if isinstance(text, str) else ""


class GeminiClient:
    """
    Client for Google's Gemini generateContent API.

    The API key, model and timeout default to the GEMINI_API_KEY,
    GEMINI_MODEL and GEMINI_TIMEOUT environment variables. Without a key
    the client reports itself as unconfigured and callers use local text.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        timeout: Optional[float] = None,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        self.api_key = api_key if api_key is not None else os.environ.get("GEMINI_API_KEY", "")
        self.model = model or os.environ.get("GEMINI_MODEL", DEFAULT_GEMINI_MODEL)
        self.timeout = timeout or float(os.environ.get("GEMINI_TIMEOUT", DEFAULT_TIMEOUT))
        self._http_client = http_client

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key)

    @property
    def endpoint(self) -> str:
        return GEMINI_API_URL.format(model=self.model)

    @backoff.on_exception(
        backoff.expo,
        (httpx.RequestError, httpx.HTTPStatusError),
        max_tries=2,
        giveup=_giveup,
    )
    async def _post(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        params = {"key": self.api_key}
        if self._http_client is not None:
            response = await self._http_client.post(self.endpoint, params=params, json=payload)
        else:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.post(self.endpoint, params=params, json=payload)
        response.raise_for_status()
        return response.json()

    async def generate_text(self, prompt: str) -> str:
        """
        Generate a clinical narrative for ``prompt``.

        Returns the model text ("" when the response carries none).
        Raises ExplanationUnavailable when the request fails.
        """
        logger.info("Sending request to Gemini", extra={"model": self.model})

        payload = {
            "contents": [{"role": "user", "parts": [{"text": prompt}]}],
            "generationConfig": {
                "temperature": 0.3,
                "maxOutputTokens": 350,
            },
        }

        try:
            data = await self._post(payload)
        except httpx.HTTPError as e:
            logger.error("Error communicating with Gemini: %s", e)
            raise ExplanationUnavailable(str(e)) from e
        except ValueError as e:
            logger.error("Gemini returned a non-JSON response: %s", e)
            raise ExplanationUnavailable("invalid response body") from e

        text = _extract_text(data)
        logger.info("Gemini request successful", extra={"response_length": len(text)})
        return text
