import logging
from typing import Any, Dict, Optional

import httpx

from assistant_tools.core.config import Settings
from assistant_tools.core.exceptions import ConfigurationError, ForwardingError
from assistant_tools.metrics import forwarding_requests_total

logger = logging.getLogger(__name__)


class QuestionForwarder:
    """Forwards a free-text question to the Perplexity chat-completions API.

    The response body is returned verbatim; no answer field is extracted.
    """

    def __init__(
        self,
        api_key: Optional[str],
        url: str,
        model: str,
        system_prompt: str,
        timeout: Optional[float] = None,
    ):
        if not api_key or not api_key.strip():
            raise ConfigurationError("PERPLEXITY_API_KEY must be set")
        self.api_key = api_key
        self.url = url
        self.model = model
        self.system_prompt = system_prompt
        self.timeout = timeout

    @classmethod
    def from_settings(cls, settings: Settings) -> "QuestionForwarder":
        return cls(
            api_key=settings.PERPLEXITY_API_KEY,
            url=settings.PERPLEXITY_API_URL,
            model=settings.PERPLEXITY_MODEL,
            system_prompt=settings.PERPLEXITY_SYSTEM_PROMPT,
            timeout=settings.PERPLEXITY_TIMEOUT,
        )

    def build_payload(self, message: str) -> Dict[str, Any]:
        return {
            "model": self.model,
            "messages": [
                {"role": "system", "content": self.system_prompt},
                {"role": "user", "content": message},
            ],
        }

    def _build_headers(self) -> Dict[str, str]:
        return {
            "accept": "application/json",
            "content-type": "application/json",
            "Authorization": f"Bearer {self.api_key}",
        }

    async def ask(self, message: str) -> str:
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            try:
                response = await client.post(
                    self.url,
                    json=self.build_payload(message),
                    headers=self._build_headers(),
                )
                response.raise_for_status()
            except httpx.HTTPStatusError as e:
                forwarding_requests_total.labels(outcome="failed").inc()
                error_message = (
                    f"HTTP error from {self.url}: "
                    f"{e.response.status_code} - {e.response.text}"
                )
                logger.error(error_message)
                raise ForwardingError(error_message, status_code=e.response.status_code) from e
            except httpx.RequestError as e:
                forwarding_requests_total.labels(outcome="failed").inc()
                error_message = f"Request error for {self.url}: {e}"
                logger.error(error_message)
                raise ForwardingError(error_message) from e

        forwarding_requests_total.labels(outcome="success").inc()
        logger.debug(f"Forwarding response: {response.text}")
        return response.text
