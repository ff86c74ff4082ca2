"""Chat agent that produces the assistant reply for one chat turn.

Uses LangChain's ``ChatOpenAI`` against any OpenAI-compatible endpoint
(Groq by default) and asks for a JSON object carrying the reply text and an
updated conversation summary.
"""

from __future__ import annotations

import json
import logging
import re
from typing import Any

from langchain_core.messages import HumanMessage, SystemMessage
from langchain_openai import ChatOpenAI

from careerchat.config import get_settings
from careerchat.prompts.chat_prompt import build_chat_system_prompt

logger = logging.getLogger(__name__)

EMPTY_REPLY = "Sorry, I couldn't process that request."


class ChatAgent:
    """Stateless agent that produces a single reply per call."""

    def __init__(self) -> None:
        settings = get_settings()
        self._llm = ChatOpenAI(
            model=settings.llm_model,
            api_key=settings.llm_api_key,
            base_url=settings.llm_base_url,
            temperature=settings.llm_temperature,
            max_tokens=settings.llm_max_tokens,
            model_kwargs={"response_format": {"type": "json_object"}},
        )

    # ── Public API ────────────────────────────────────────────────────────

    async def reply(
        self,
        message: str,
        chat_id: str,
        chat_name: str,
        context: str = "",
    ) -> dict[str, Any]:
        """Generate a reply for *message*.

        Returns
        -------
        dict with keys: response (str), context (str)
        """
        messages = [
            SystemMessage(content=build_chat_system_prompt(chat_id, chat_name, context)),
            HumanMessage(content=message),
        ]

        raw = await self._llm.ainvoke(messages)
        return self._parse_output(raw.content, context)

    # ── Helpers ───────────────────────────────────────────────────────────

    @staticmethod
    def _parse_output(content: str, previous_context: str = "") -> dict[str, Any]:
        """Parse LLM JSON output robustly."""
        try:
            data = json.loads(content)
        except json.JSONDecodeError:
            match = re.search(r"```(?:json)?\s*(\{.*?\})\s*```", content, re.DOTALL)
            data = None
            if match:
                try:
                    data = json.loads(match.group(1))
                except json.JSONDecodeError:
                    data = None
            if data is None:
                logger.error("Failed to parse Chat Agent output: %s", content[:200])
                data = {"response": content, "context": previous_context}

        if not isinstance(data, dict):
            data = {"response": str(data)}

        return {
            "response": data.get("response") or EMPTY_REPLY,
            "context": data.get("context") or previous_context,
        }
