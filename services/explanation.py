"""
explanation.py — Topic Explanations from a Remote Model
========================================================
Topics without a trace generator get a prose explanation instead.  The
text comes from a Gemini-style `generateContent` HTTP endpoint.

    client = ExplanationClient(api_key="…")
    markdown = client.explain("Hamiltonian Path")

Failures of any kind (network, non-2xx, unexpected body) surface as ONE
error type, ExplanationServiceError.  Nothing is retried: the user asks
again by re-selecting the topic.
"""

import logging
from typing import Optional

import requests


logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://generativelanguage.googleapis.com/v1beta"
DEFAULT_MODEL    = "gemini-2.5-flash"
DEFAULT_TIMEOUT  = 30

FAILURE_MESSAGE = "Failed to communicate with the Gemini API."


class ExplanationServiceError(RuntimeError):
    """The remote explanation service could not produce text."""


def build_prompt(topic_name: str) -> str:
    return f"""
You are an expert computer science educator specializing in graph theory.
Your tone is clear, encouraging, and accessible to beginners.

Explain the topic: "{topic_name}".

Structure your explanation in Markdown format with the following sections exactly as specified below:

## What is it?
A simple, intuitive explanation of the concept. Start with a high-level overview.

## Real-World Analogy
A relatable analogy to help grasp the core idea. For example, for Dijkstra's algorithm, you could use a GPS finding the fastest route.

## Complexity
The time and space complexity of the algorithm, if applicable. Explain what the variables (e.g., V for vertices, E for edges) represent. If it's a concept and not an algorithm, you can omit this section.

## Simple Code Example
Provide a simple, well-commented code example in Python. The code should be easy to follow and demonstrate the core logic. Ensure the code is wrapped in a markdown code block.

Ensure the response is well-formatted and ready for display. Do not include any introductory or concluding remarks outside of this structure.
""".strip()


class ExplanationClient:
    """
    Attributes:
        api_key  : Credential sent as the x-goog-api-key header.
        model    : Model name inserted into the endpoint path.
        base_url : API root, overridable for tests or proxies.
        timeout  : Seconds before the request is abandoned.
    """

    def __init__(
        self,
        api_key: Optional[str],
        model: str = DEFAULT_MODEL,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT,
        session: Optional[requests.Session] = None,
    ):
        self.api_key  = api_key
        self.model    = model
        self.base_url = base_url.rstrip("/")
        self.timeout  = timeout
        self.session  = session or requests.Session()

    @property
    def endpoint(self) -> str:
        return f"{self.base_url}/models/{self.model}:generateContent"

    def explain(self, topic_name: str) -> str:
        """Return Markdown text for `topic_name` or raise ExplanationServiceError."""
        if not self.api_key:
            raise ExplanationServiceError("Explanation service API key is not configured.")

        payload = {"contents": [{"parts": [{"text": build_prompt(topic_name)}]}]}
        try:
            response = self.session.post(
                self.endpoint,
                json=payload,
                headers={"x-goog-api-key": self.api_key},
                timeout=self.timeout,
            )
            response.raise_for_status()
            body = response.json()
        except (requests.exceptions.RequestException, ValueError) as e:
            logger.error("Error fetching explanation for %r: %s", topic_name, e)
            raise ExplanationServiceError(FAILURE_MESSAGE) from e

        text = _extract_text(body)
        if not text:
            logger.warning("Explanation service returned no text for %r", topic_name)
            raise ExplanationServiceError(FAILURE_MESSAGE)
        return text


def _extract_text(body) -> str:
    try:
        parts = body["candidates"][0]["content"]["parts"]
    except (KeyError, IndexError, TypeError):
        return ""
    return "".join(p.get("text", "") for p in parts if isinstance(p, dict))
