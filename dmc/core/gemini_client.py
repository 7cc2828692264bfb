"""Sync httpx client for the Gemini generateContent API.

One request per message: no retry, no streaming. The request carries a
fixed generation config and safety settings.
"""

import logging
from typing import Any, Dict, List, Optional, Sequence

import httpx

from dmc.config.models import DMCConfig

from .exceptions import (
    GeminiHTTPError,
    GeminiRequestError,
    GeminiResponseError,
)
from .prompts import render_prompt

logger = logging.getLogger(__name__)

GEMINI_MODEL = "gemini-1.5-flash-latest"
GEMINI_BASE_URL = "https://generativelanguage.googleapis.com/v1beta/models"
DEFAULT_TIMEOUT = 60.0

GENERATION_CONFIG: Dict[str, Any] = {
    "temperature": 0.7,
    "topK": 32,
    "topP": 1,
    "maxOutputTokens": 1000,
}

SAFETY_SETTINGS: List[Dict[str, str]] = [
    {
        "category": "HARM_CATEGORY_HARASSMENT",
        "threshold": "BLOCK_MEDIUM_AND_ABOVE",
    },
    {
        "category": "HARM_CATEGORY_HATE_SPEECH",
        "threshold": "BLOCK_MEDIUM_AND_ABOVE",
    },
]


def build_request_body(prompt: str) -> Dict[str, Any]:
    """Build the generateContent JSON payload for a prompt."""
    return {
        "contents": [{"parts": [{"text": prompt}]}],
        "generationConfig": dict(GENERATION_CONFIG),
        "safetySettings": [dict(setting) for setting in SAFETY_SETTINGS],
    }


def extract_text(data: Any) -> str:
    """Return the first candidate's first text part.

    Raises:
        GeminiResponseError: If there is no candidate or no text part
    """
    try:
        candidates = data.get("candidates") or []
        parts = candidates[0].get("content", {}).get("parts") or []
        text = parts[0]["text"]
    except (AttributeError, IndexError, KeyError, TypeError):
        raise GeminiResponseError("empty response from API") from None

    if not isinstance(text, str):
        raise GeminiResponseError("empty response from API")
    return text


class GeminiClient:
    """Generate commit-based messages with Gemini.

    Usage::

        with GeminiClient(api_key="...", config=config) as client:
            text = client.generate_message(lines, "report", "daily", "me@example.com")
    """

    def __init__(
        self,
        api_key: str,
        config: DMCConfig,
        model: str = GEMINI_MODEL,
        timeout: float = DEFAULT_TIMEOUT,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        """Initialize the client.

        Args:
            api_key: Gemini API key, sent as the ``key`` query parameter
            config: Configuration holding templates and intervals
            model: Model name in the endpoint path
            timeout: Request timeout in seconds
            transport: Optional httpx transport (tests use MockTransport)
        """
        self._api_key = api_key
        self.config = config
        self.model = model
        self._client = httpx.Client(
            timeout=timeout,
            transport=transport,
            headers={"Content-Type": "application/json"},
        )

    @property
    def url(self) -> str:
        return f"{GEMINI_BASE_URL}/{self.model}:generateContent"

    def generate_message(
        self,
        commits: Sequence[str],
        template_key: str,
        interval_key: str,
        author: str = "",
        language: str = "en",
    ) -> str:
        """Render a template with the commits and ask Gemini for the message.

        Args:
            commits: Raw log lines
            template_key: Key into the configured templates
            interval_key: Key into the configured intervals
            author: Author filter, available to templates as ``${author}``
            language: Output language code

        Returns:
            The generated text, verbatim

        Raises:
            TemplateNotFoundError: Unknown template (no request is made)
            IntervalNotFoundError: Unknown interval (no request is made)
            TemplateRenderError: Broken placeholders (no request is made)
            GeminiError: On transport, HTTP or response errors
        """
        template = self.config.get_template(template_key)
        interval = self.config.get_interval(interval_key)

        prompt = render_prompt(
            template.prompt,
            commits,
            interval.name,
            author=author,
            language=language,
        )
        return self.call_api(prompt)

    def call_api(self, prompt: str) -> str:
        """Send a single generateContent request.

        Raises:
            GeminiRequestError: If the request fails before a response
            GeminiHTTPError: On a non-2xx status
            GeminiResponseError: On a malformed or empty body
        """
        logger.debug("POST %s (%d prompt chars)", self.url, len(prompt))
        try:
            response = self._client.post(
                self.url,
                params={"key": self._api_key},
                json=build_request_body(prompt),
            )
        except httpx.HTTPError as e:
            raise GeminiRequestError(f"API request failed: {e}") from e

        if not response.is_success:
            raise GeminiHTTPError(response.status_code, response.text)

        try:
            data = response.json()
        except ValueError as e:
            raise GeminiResponseError(f"failed to parse response: {e}") from e

        return extract_text(data)

    def close(self) -> None:
        """Close the underlying HTTP client."""
        self._client.close()

    def __enter__(self) -> "GeminiClient":
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()
