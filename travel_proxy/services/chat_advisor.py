"""
Travel chat advisor backed by a local Ollama model.
"""

import json
import logging
import re
from typing import Any, List, Optional, Sequence, Tuple

import httpx

from travel_proxy.core.error_handler import (
    InvalidRequestError,
    UpstreamDataError,
    UpstreamError,
)
from travel_proxy.models.requests import ChatMessage
from travel_proxy.models.responses import ChatAdvisorResponse
from travel_proxy.services.chat_replies import fallback_reply
from travel_proxy.services.http_client import AsyncHttpClient


DEFAULT_SUGGESTIONS = ["Tell me more?", "Local tips?", "Best time to visit?"]
MAX_SUGGESTIONS = 4
MAX_SUGGESTION_LENGTH = 50
MIN_ANSWER_LENGTH = 10
HISTORY_TURNS = 6

GENERATION_OPTIONS = {
    "temperature": 0.7,
    "top_p": 0.9,
    "num_predict": 250,
    "stop": ["```", "\n\n\n", "Human:", "User:", "Assistant:", "Question:", "Response:", "Suggestions:"],
}

DISTANCE_KEYWORDS = ("how far", "distance", "drive", "travel time")

# Text the model copies from the prompt template instead of answering
PLACEHOLDER_ANSWERS = ("Write your answer here",)

RELATED_PREFIX = re.compile(r"^Related question \d+:\s*", re.IGNORECASE)
ANSWER_SUFFIX = re.compile(r"\s*Answer:.*$", re.IGNORECASE)


def is_distance_question(message: str) -> bool:
    text = message.lower()
    return any(keyword in text for keyword in DISTANCE_KEYWORDS)


def clean_suggestions(suggestions: Any) -> List[str]:
    """Keep short string suggestions, stripped of echoed prompt labels"""
    if not isinstance(suggestions, list):
        return list(DEFAULT_SUGGESTIONS)

    cleaned = []
    for item in suggestions:
        if not isinstance(item, str) or not 0 < len(item) < MAX_SUGGESTION_LENGTH:
            continue
        item = ANSWER_SUFFIX.sub("", RELATED_PREFIX.sub("", item)).strip()
        if item:
            cleaned.append(item)

    return cleaned[:MAX_SUGGESTIONS] or list(DEFAULT_SUGGESTIONS)


def _close_truncated(text: str) -> str:
    # Generation stops at num_predict tokens, which can cut the object short
    if text.count('"') % 2:
        text += '"'
    text += "]" * max(text.count("[") - text.count("]"), 0)
    text += "}" * max(text.count("{") - text.count("}"), 0)
    return text


def parse_advice(raw_text: str) -> Tuple[str, List[str]]:
    """
    Extract the answer and suggestions from raw model output.

    Args:
        raw_text: The model's generated text, expected to hold a JSON object

    Returns:
        (answer, suggestions)

    Raises:
        UpstreamDataError: No usable JSON object or answer in the output
    """
    text = raw_text.replace("```json", "").replace("```", "").strip()

    start = text.find("{")
    if start == -1 or '"response"' not in text:
        raise UpstreamDataError("Chat model output has no JSON answer")
    text = text[start:]

    try:
        data, _ = json.JSONDecoder().raw_decode(text)
    except json.JSONDecodeError:
        try:
            data = json.loads(_close_truncated(text))
        except json.JSONDecodeError as e:
            raise UpstreamDataError(f"Chat model output is not valid JSON: {e}") from e

    if not isinstance(data, dict):
        raise UpstreamDataError("Chat model output is not a JSON object")

    answer = data.get("response")
    if not isinstance(answer, str) or len(answer.strip()) < MIN_ANSWER_LENGTH:
        raise UpstreamDataError("Chat model answer is missing or too short")
    answer = answer.strip()
    if answer in PLACEHOLDER_ANSWERS:
        raise UpstreamDataError("Chat model repeated the prompt template")

    return answer, clean_suggestions(data.get("suggestions"))


class ChatAdvisor:
    """
    Answers travel questions with a local Ollama model.

    Model failures never reach the client: they are logged and answered
    from the canned replies with ``ai_powered`` set to false.
    """

    def __init__(
        self,
        ollama_url: str = "http://127.0.0.1:11434",
        model: str = "llama3.2:3b",
        timeout: float = 30,
        http_client: Optional[AsyncHttpClient] = None,
    ):
        self.ollama_url = ollama_url.rstrip("/")
        self.model = model
        self.timeout = timeout
        self._http_client = http_client
        self.logger = logging.getLogger(__name__)

    @property
    def http_client(self) -> AsyncHttpClient:
        if self._http_client is None:
            self._http_client = AsyncHttpClient(timeout=self.timeout)
        return self._http_client

    def build_prompt(self, message: str, history: Sequence[ChatMessage] = ()) -> str:
        """Build the generation prompt for a question and its recent conversation"""
        if is_distance_question(message):
            task = f'The user asks: "{message}". Give the distance, the travel time and the transport options.'
            example_suggestions = ["Transport options?", "Best route?", "Travel costs?"]
        else:
            task = f'Answer this travel question with specific, useful information: "{message}"'
            example_suggestions = ["Ask about transport", "Local attractions", "Best time to visit"]

        conversation = "\n".join(
            f"{'User' if turn.is_user else 'Advisor'}: {turn.text}"
            for turn in list(history)[-HISTORY_TURNS:]
            if turn.text
        )
        context = f"\nConversation so far:\n{conversation}\n" if conversation else ""

        return f"""You are a helpful travel advisor. {task}
{context}
Respond with valid JSON only:
{{
  "response": "{PLACEHOLDER_ANSWERS[0]}",
  "suggestions": {json.dumps(example_suggestions)}
}}

ONLY JSON. No examples. No markdown."""

    async def generate(self, prompt: str) -> Tuple[str, List[str]]:
        """
        Run one non-streaming generation and parse its answer.

        Raises:
            UpstreamError: Timeout, transport failure, non-success status or unreadable body
            UpstreamDataError: The generated text holds no usable answer
        """
        url = f"{self.ollama_url}/api/generate"
        payload = {
            "model": self.model,
            "prompt": prompt,
            "stream": False,
            "options": dict(GENERATION_OPTIONS),
        }

        try:
            response = await self.http_client.request("POST", url, json=payload, timeout=self.timeout)
        except httpx.TimeoutException as e:
            raise UpstreamError(f"Chat model timeout after {self.timeout}s") from e
        except httpx.HTTPError as e:
            raise UpstreamError(f"Chat model request failed: {type(e).__name__}") from e

        if not response.is_success:
            raise UpstreamError(f"Chat model error: {response.status_code}")

        try:
            body = response.json()
        except ValueError as e:
            raise UpstreamError("Chat model returned an invalid JSON body") from e

        generated = body.get("response") if isinstance(body, dict) else None
        if not isinstance(generated, str):
            raise UpstreamDataError("Chat model returned no generated text")

        return parse_advice(generated)

    async def advise(
        self,
        message: Optional[str],
        history: Sequence[ChatMessage] = ()
    ) -> ChatAdvisorResponse:
        """
        Answer a message, falling back to canned replies when the model fails.

        Raises:
            InvalidRequestError: The message is missing or blank
        """
        message = (message or "").strip()
        if not message:
            raise InvalidRequestError("Message is required")

        self.logger.info(f"Asking {self.model} at {self.ollama_url} ({len(history)} earlier turns)")

        try:
            answer, suggestions = await self.generate(self.build_prompt(message, history))
        except (UpstreamError, UpstreamDataError) as e:
            self.logger.warning(f"Chat model unavailable, using fallback reply: {e.message}")
            answer, suggestions = fallback_reply(message)
            return ChatAdvisorResponse(response=answer, suggestions=suggestions, ai_powered=False)

        return ChatAdvisorResponse(response=answer, suggestions=suggestions, ai_powered=True)

    async def close(self) -> None:
        if self._http_client is not None:
            await self._http_client.close()
