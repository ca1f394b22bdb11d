"""
LLM service for OpenRouter API integration
"""
import json
import logging
import re
from typing import Any, Dict, List, Optional

import httpx

from ..config import settings

logger = logging.getLogger(__name__)


class LLMService:
    """Service for OpenRouter chat completions

    Every public call returns a result dict with a ``success`` key instead of
    raising, so callers decide whether a failure is fatal or degradable.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        model: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        self.api_key = settings.openrouter_api_key if api_key is None else api_key
        self.base_url = (base_url or settings.openrouter_base_url).rstrip("/")
        self.model = model or settings.openrouter_model
        self.timeout = timeout or settings.llm_timeout_seconds
        self.max_tokens = settings.llm_max_tokens
        self._transport = transport

    @property
    def configured(self) -> bool:
        key = (self.api_key or "").strip()
        return bool(key) and key != "your_openrouter_api_key_here"

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            timeout=httpx.Timeout(self.timeout),
            transport=self._transport,
            headers={
                "Authorization": f"Bearer {self.api_key}",
                "HTTP-Referer": "aarohan.local",
                "X-Title": "AAROHAN Career Assistant",
                "Content-Type": "application/json"
            }
        )

    async def chat(
        self,
        messages: List[Dict[str, str]],
        temperature: float = 0.7,
        max_tokens: Optional[int] = None,
        response_schema: Optional[Dict[str, Any]] = None,
        schema_name: str = "response"
    ) -> Dict[str, Any]:
        """
        Send a chat completion request

        Args:
            messages: OpenAI-style message list
            temperature: Sampling temperature
            max_tokens: Completion limit (defaults to settings)
            response_schema: Optional JSON schema to constrain the output
            schema_name: Name reported for the schema

        Returns:
            Dict with ``success`` and either ``content`` or ``error``
        """
        if not self.configured:
            return {
                "success": False,
                "error": "OpenRouter API key is not configured",
                "status_code": 503
            }

        payload: Dict[str, Any] = {
            "model": self.model,
            "messages": messages,
            "temperature": temperature,
            "max_tokens": max_tokens or self.max_tokens
        }
        if response_schema is not None:
            payload["response_format"] = {
                "type": "json_schema",
                "json_schema": {"name": schema_name, "strict": True, "schema": response_schema}
            }

        try:
            logger.info(f"Sending request to OpenRouter API with model: {self.model}")
            async with self._client() as client:
                response = await client.post(f"{self.base_url}/chat/completions", json=payload)

            if response.status_code != 200:
                error_msg = f"OpenRouter API error: {response.status_code} - {response.text}"
                logger.error(error_msg)
                return {
                    "success": False,
                    "error": error_msg,
                    "status_code": response.status_code
                }

            response_data = response.json()
            choices = response_data.get("choices") or []
            if not choices:
                logger.error("No choices in OpenRouter response")
                return {"success": False, "error": "No choices in OpenRouter response", "status_code": 502}

            content = (choices[0].get("message") or {}).get("content") or ""
            if not content.strip():
                return {"success": False, "error": "Empty completion", "status_code": 502}

            return {
                "success": True,
                "content": content.strip(),
                "model_used": self.model,
                "tokens_used": response_data.get("usage", {}).get("total_tokens", 0)
            }

        except httpx.TimeoutException:
            error_msg = "OpenRouter API request timed out"
            logger.error(error_msg)
            return {"success": False, "error": error_msg, "status_code": 408}

        except httpx.RequestError as e:
            error_msg = f"OpenRouter API request failed: {e}"
            logger.error(error_msg)
            return {"success": False, "error": error_msg, "status_code": 500}

        except (ValueError, KeyError, AttributeError, TypeError) as e:
            error_msg = f"Malformed OpenRouter response: {e}"
            logger.error(error_msg)
            return {"success": False, "error": error_msg, "status_code": 502}

    async def generate_text(
        self,
        prompt: str,
        system_prompt: Optional[str] = None,
        temperature: float = 0.7
    ) -> Dict[str, Any]:
        """Single-prompt completion returning plain text"""
        messages = []
        if system_prompt:
            messages.append({"role": "system", "content": system_prompt})
        messages.append({"role": "user", "content": prompt})
        return await self.chat(messages, temperature=temperature)

    async def generate_json(
        self,
        prompt: str,
        schema: Dict[str, Any],
        schema_name: str = "response",
        system_prompt: Optional[str] = None
    ) -> Dict[str, Any]:
        """Completion constrained to a JSON schema, parsed into ``data``"""
        messages = []
        if system_prompt:
            messages.append({"role": "system", "content": system_prompt})
        messages.append({"role": "user", "content": prompt})

        result = await self.chat(
            messages,
            temperature=0.2,
            response_schema=schema,
            schema_name=schema_name
        )
        if not result["success"]:
            return result

        data = self._extract_json_from_response(result["content"])
        if data is None:
            logger.warning("Failed to extract valid JSON from LLM response")
            return {
                "success": False,
                "error": "Failed to extract valid JSON from LLM response",
                "raw_response": result["content"],
                "status_code": 502
            }

        return {"success": True, "data": data, "model_used": result.get("model_used")}

    @staticmethod
    def _extract_json_from_response(content: str) -> Optional[Dict[str, Any]]:
        """
        Extract a JSON object from LLM response content

        Handles fenced ```json blocks, bare fences and prose around a single object.
        """
        candidates = []

        json_block_match = re.search(r'```json\s*(.*?)\s*```', content, re.DOTALL)
        if json_block_match:
            candidates.append(json_block_match.group(1))

        block_match = re.search(r'```\s*(.*?)\s*```', content, re.DOTALL)
        if block_match:
            candidates.append(block_match.group(1))

        brace_match = re.search(r'(\{.*\})', content, re.DOTALL)
        if brace_match:
            candidates.append(brace_match.group(1))

        candidates.append(content)

        for candidate in candidates:
            try:
                parsed = json.loads(candidate.strip())
            except json.JSONDecodeError:
                continue
            if isinstance(parsed, dict):
                return parsed

        logger.warning("No JSON object found in LLM response")
        return None

    async def test_connection(self) -> Dict[str, Any]:
        """Test OpenRouter API connection"""
        result = await self.chat(
            [{"role": "user", "content": "Hello, please respond with 'OK' only."}],
            temperature=0.0,
            max_tokens=10
        )
        if result["success"]:
            return {"success": True, "message": "OpenRouter API connection successful", "model": self.model}
        return {"success": False, "error": result.get("error", "Unknown error")}


# Global LLM service instance
llm_service = LLMService()
