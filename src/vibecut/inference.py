"""Gemini client that asks for three ffmpeg filter directives.

The service wraps its answer twice: a JSON envelope whose
candidates[0].content.parts[0].text is itself a JSON document. The two
layers are parsed by separate functions with separate error types so each
failure point can be exercised on its own.
"""

import json
import logging

import httpx

from .errors import (
    EnvelopeError,
    FilterPayloadError,
    InferenceRequestError,
    MissingCredentialError,
)

logger = logging.getLogger(__name__)


PROMPT_TEMPLATE = (
    'Return ONLY JSON: {{"filters":["ffmpeg_filter_1","ffmpeg_filter_2",'
    '"ffmpeg_filter_3"]}} for this prompt: {prompt}'
)


def build_request_body(prompt: str) -> dict:
    """Single-turn generateContent body with the prompt embedded verbatim."""
    return {"contents": [{"parts": [{"text": PROMPT_TEMPLATE.format(prompt=prompt)}]}]}


def extract_candidate_text(envelope) -> str:
    """Return candidates[0].content.parts[0].text from a response envelope.

    Raises:
        EnvelopeError: Any level is missing or of the wrong type.
    """
    try:
        text = envelope["candidates"][0]["content"]["parts"][0]["text"]
    except (KeyError, IndexError, TypeError) as e:
        raise EnvelopeError(f"Response missing candidate text: {e!r}") from e
    if not isinstance(text, str):
        raise EnvelopeError(f"Candidate text is {type(text).__name__}, not str")
    return text


def parse_filter_payload(text: str) -> list[str]:
    """Parse candidate text as JSON and return its string 'filters' entries.

    Non-string entries are dropped. An empty list is valid.

    Raises:
        FilterPayloadError: Not JSON, not an object, or no 'filters' list.
    """
    try:
        payload = json.loads(text)
    except json.JSONDecodeError as e:
        raise FilterPayloadError(f"Candidate text is not JSON: {e}") from e
    if not isinstance(payload, dict):
        raise FilterPayloadError("Candidate JSON is not an object")
    filters = payload.get("filters")
    if not isinstance(filters, list):
        raise FilterPayloadError("Candidate JSON has no 'filters' list")
    return [f for f in filters if isinstance(f, str)]


class GeminiClient:
    """Thin generateContent client.

    Args:
        api_key: Gemini API key; None makes every call fail with
            MissingCredentialError.
        model: Model name appended to the endpoint.
        endpoint: Base URL of the models collection.
        timeout: Per-request timeout in seconds.
        transport: Optional httpx transport (tests use httpx.MockTransport).
    """

    def __init__(
        self,
        api_key: str | None,
        model: str = "gemini-2.5-flash",
        endpoint: str = "https://generativelanguage.googleapis.com/v1beta/models",
        timeout: float = 30.0,
        transport: httpx.BaseTransport | None = None,
    ):
        self.api_key = api_key
        self.url = f"{endpoint.rstrip('/')}/{model}:generateContent"
        self.timeout = timeout
        self.transport = transport

    @classmethod
    def from_config(cls, config: dict) -> "GeminiClient":
        return cls(
            api_key=config["api_key"],
            model=config["gemini"]["model"],
            endpoint=config["gemini"]["endpoint"],
            timeout=config["timeouts"]["http"],
        )

    def generate(self, prompt: str) -> dict:
        """POST the prompt and return the decoded response envelope."""
        if not self.api_key:
            raise MissingCredentialError("GEMINI_API_KEY not set")

        try:
            with httpx.Client(timeout=self.timeout, transport=self.transport) as client:
                response = client.post(
                    self.url,
                    headers={"x-goog-api-key": self.api_key},
                    json=build_request_body(prompt),
                )
        except httpx.HTTPError as e:
            raise InferenceRequestError(f"Gemini request failed: {e}") from e

        if not response.is_success:
            raise InferenceRequestError(
                f"Gemini API error: HTTP {response.status_code}"
            )
        try:
            return response.json()
        except ValueError as e:
            raise EnvelopeError(f"Response body is not JSON: {e}") from e

    def suggest_filters(self, prompt: str) -> list[str]:
        """Ask the model for filter directives for the given prompt.

        Raises:
            InferenceError: Any failure along the way (see errors.py).
        """
        envelope = self.generate(prompt)
        text = extract_candidate_text(envelope)
        filters = parse_filter_payload(text)
        logger.info("Gemini suggested %d filter(s)", len(filters))
        return filters
