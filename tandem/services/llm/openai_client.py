# tandem/services/llm/openai_client.py
from __future__ import annotations

import json
import logging
import re
from typing import Any, Dict, List, Optional

import httpx

from tandem.core.config import settings

log = logging.getLogger("llm")


class LLMError(RuntimeError):
    """The chat-completions endpoint could not produce a reply."""


def extract_last_json_block(text: str) -> Optional[Dict[str, Any]]:
    """
    Extract the last JSON object from a messy LLM string.
    Strategy:
      1) scan and track brace depth
      2) fallback to coarser `{ ... }` matches
    """
    last_obj = None
    stack = []
    start_idx = None
    for i, ch in enumerate(text):
        if ch == "{":
            stack.append(i)
            if start_idx is None:
                start_idx = i
        elif ch == "}":
            if stack:
                stack.pop()
                if not stack and start_idx is not None:
                    chunk = text[start_idx : i + 1]
                    try:
                        last_obj = json.loads(chunk)
                    except ValueError:
                        pass
                    start_idx = None
    if isinstance(last_obj, dict):
        return last_obj

    matches = list(re.finditer(r"\{.*\}", text, flags=re.DOTALL))
    for m in reversed(matches):
        try:
            obj = json.loads(m.group(0))
        except ValueError:
            continue
        if isinstance(obj, dict):
            return obj
    return None


def loads_reply(content: Optional[str]) -> Optional[Dict[str, Any]]:
    """Model content as a dict, tolerating prose or code fences around it."""
    if not content:
        return None
    try:
        obj = json.loads(content)
    except ValueError:
        return extract_last_json_block(content)
    return obj if isinstance(obj, dict) else None


class OpenAIChatClient:
    """
    Minimal async client for an OpenAI-compatible /v1/chat/completions.

    Features:
      - JSON-mode requests (response_format=json_object)
      - env-configurable url/model/key via settings
      - simple retries & timeouts

    Example:
      llm = OpenAIChatClient()
      content = await llm.chat_json(system_prompt, "Return ONLY JSON ...")
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        url: Optional[str] = None,
        model: Optional[str] = None,
        timeout: Optional[float] = None,
        max_retries: Optional[int] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.api_key = api_key if api_key is not None else settings.OPENAI_API_KEY
        self.url = (url or settings.OPENAI_URL).rstrip("/")
        self.model = model or settings.OPENAI_MODEL
        self.timeout = timeout if timeout is not None else settings.LLM_TIMEOUT
        self.max_retries = max_retries if max_retries is not None else settings.LLM_MAX_RETRIES
        self._transport = transport

    # ----------------------- Low-level request helpers -----------------------

    def _headers(self) -> Dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"
        return headers

    async def _apost_json(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        attempt = 0
        last_exc: Optional[Exception] = None
        async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
            while attempt <= self.max_retries:
                try:
                    r = await client.post(self.url, json=payload, headers=self._headers())
                    if r.status_code >= 400:
                        log.error("LLM HTTP %d: %s", r.status_code, r.text[:500])
                    r.raise_for_status()
                    return r.json()
                except (httpx.HTTPError, ValueError) as e:
                    last_exc = e
                    attempt += 1
            raise LLMError(f"LLM request failed after {self.max_retries+1} attempts: {last_exc}")

    # ----------------------------- Chat APIs ---------------------------------

    def _payload(
        self,
        messages: List[Dict[str, str]],
        model: Optional[str],
        max_tokens: Optional[int],
        temperature: Optional[float],
        json_mode: bool,
    ) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "model": model or self.model,
            "messages": messages,
        }
        if max_tokens is not None:
            payload["max_tokens"] = max_tokens
        if temperature is not None:
            payload["temperature"] = temperature
        if json_mode:
            payload["response_format"] = {"type": "json_object"}
        return payload

    async def chat(
        self,
        messages: List[Dict[str, str]],
        model: Optional[str] = None,
        max_tokens: Optional[int] = None,
        temperature: Optional[float] = None,
        json_mode: bool = False,
    ) -> str:
        data = await self._apost_json(
            self._payload(messages, model, max_tokens, temperature, json_mode)
        )
        try:
            return data["choices"][0]["message"]["content"] or ""
        except (KeyError, IndexError, TypeError):
            raise LLMError(f"Unexpected chat completion shape: {str(data)[:300]}")

    async def chat_json(
        self,
        system_prompt: str,
        user_content: str,
        model: Optional[str] = None,
        max_tokens: Optional[int] = None,
        temperature: Optional[float] = None,
    ) -> str:
        """Raw content of a JSON-mode completion (parse with ``loads_reply``)."""
        return await self.chat(
            [
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_content},
            ],
            model=model,
            max_tokens=max_tokens,
            temperature=temperature,
            json_mode=True,
        )
