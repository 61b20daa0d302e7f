"""Remote chat-completion client used to word posts with a language model.

Both supported providers speak the OpenAI-compatible
``POST /chat/completions`` protocol.  Failures never raise: they come back
as a :class:`RemoteResult` with ``ok=False`` so the caller can fall back to
the template pipeline.
"""

import logging
from typing import Dict, NamedTuple, Optional

import httpx

from socialposter import config

logger = logging.getLogger(__name__)

PROVIDER_BASE_URLS: Dict[str, str] = {
    "huggingface": "https://router.huggingface.co/v1",
    "openai": "https://api.openai.com/v1",
}
DEFAULT_PROVIDER = "huggingface"

# Per-platform model selection, by provider
MODEL_SELECTION: Dict[str, Dict[str, str]] = {
    "huggingface": {
        "linkedin": "moonshotai/Kimi-K2-Instruct",
        "twitter": "meta-llama/Llama-3.2-3B-Instruct",
        "instagram": "moonshotai/Kimi-K2-Instruct",
        "facebook": "meta-llama/Llama-3.2-3B-Instruct",
    },
    "openai": {},
}
DEFAULT_MODELS: Dict[str, str] = {
    "huggingface": "meta-llama/Llama-3.2-3B-Instruct",
    "openai": "gpt-4o-mini",
}


class ModelSettings(NamedTuple):
    temperature: float
    max_tokens: int


MODEL_SETTINGS: Dict[str, ModelSettings] = {
    "moonshotai/Kimi-K2-Instruct": ModelSettings(temperature=0.7, max_tokens=500),
    "meta-llama/Llama-3.2-3B-Instruct": ModelSettings(temperature=0.8, max_tokens=400),
    "Qwen/Qwen2.5-7B-Instruct": ModelSettings(temperature=0.7, max_tokens=300),
}
DEFAULT_MODEL_SETTINGS = ModelSettings(temperature=0.7, max_tokens=500)

MAX_ATTEMPTS = 2


class RemoteResult(NamedTuple):
    ok: bool
    text: str = ""
    error: str = ""
    model: str = ""


class RemoteGenerator:
    """Thin client for one provider's chat-completion endpoint."""

    def __init__(
        self,
        api_key: str,
        provider: Optional[str] = None,
        model: Optional[str] = None,
        timeout: Optional[float] = None,
    ):
        self.api_key = api_key
        self.provider = (provider or DEFAULT_PROVIDER).lower()
        if self.provider not in PROVIDER_BASE_URLS:
            logger.warning("Unknown provider '%s', using %s", self.provider, DEFAULT_PROVIDER)
            self.provider = DEFAULT_PROVIDER
        self.base_url = PROVIDER_BASE_URLS[self.provider]
        self.model_override = model or None
        self.timeout = timeout or config.LLM_TIMEOUT

    def model_for(self, platform: str) -> str:
        if self.model_override:
            return self.model_override
        return MODEL_SELECTION[self.provider].get(platform, DEFAULT_MODELS[self.provider])

    def build_payload(self, system_prompt: str, user_prompt: str, model: str) -> dict:
        settings = MODEL_SETTINGS.get(model, DEFAULT_MODEL_SETTINGS)
        return {
            "model": model,
            "messages": [
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_prompt},
            ],
            "temperature": settings.temperature,
            "max_tokens": settings.max_tokens,
        }

    async def try_generate(self, system_prompt: str, user_prompt: str, platform: str) -> RemoteResult:
        """Request a completion and never raise.

        Network errors and 5xx responses are retried once.  A timeout ends the
        attempt at once so the caller's deadline is never exceeded.
        """
        model = self.model_for(platform)
        try:
            return await self._request(system_prompt, user_prompt, model)
        except Exception as exc:
            # e.g. a credential that cannot be encoded into the header
            logger.debug("Remote request could not be sent: %r", exc)
            return RemoteResult(ok=False, error=f"request failed: {exc!r}", model=model)

    async def _request(self, system_prompt: str, user_prompt: str, model: str) -> RemoteResult:
        payload = self.build_payload(system_prompt, user_prompt, model)
        headers = {"Authorization": f"Bearer {self.api_key}", "Content-Type": "application/json"}

        result = RemoteResult(ok=False, error="not attempted", model=model)
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            for _ in range(MAX_ATTEMPTS):
                try:
                    response = await client.post(
                        f"{self.base_url}/chat/completions", json=payload, headers=headers
                    )
                except httpx.TimeoutException:
                    return RemoteResult(ok=False, error="request timed out", model=model)
                except httpx.HTTPError as exc:
                    result = RemoteResult(ok=False, error=f"network error: {exc}", model=model)
                    continue

                if response.status_code >= 500:
                    result = RemoteResult(ok=False, error=f"HTTP {response.status_code}", model=model)
                    continue
                if response.status_code >= 400:
                    return RemoteResult(ok=False, error=f"HTTP {response.status_code}", model=model)
                return self._parse(response, model)

        logger.debug("Remote generation gave up after %d attempts: %s", MAX_ATTEMPTS, result.error)
        return result

    @staticmethod
    def _parse(response: httpx.Response, model: str) -> RemoteResult:
        try:
            data = response.json()
            text = data["choices"][0]["message"]["content"]
        except (ValueError, KeyError, IndexError, TypeError) as exc:
            return RemoteResult(ok=False, error=f"malformed response: {exc!r}", model=model)
        if not isinstance(text, str) or not text.strip():
            return RemoteResult(ok=False, error="empty completion", model=model)
        return RemoteResult(ok=True, text=text.strip(), model=model)
