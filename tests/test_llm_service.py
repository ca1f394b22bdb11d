"""
Tests for the OpenRouter client, using httpx.MockTransport in place of the network
"""
import asyncio
import json

import httpx

from aarohan.services.llm_service import LLMService


def completion(content, status_code=200):
    return httpx.Response(status_code, json={
        "choices": [{"message": {"role": "assistant", "content": content}}],
        "usage": {"total_tokens": 42}
    })


def make_service(handler, api_key="test-key"):
    return LLMService(
        api_key=api_key,
        base_url="https://openrouter.test/api/v1/",
        model="test/model",
        timeout=5,
        transport=httpx.MockTransport(handler)
    )


def test_generate_text_success():
    seen = {}

    def handler(request):
        seen["url"] = str(request.url)
        seen["auth"] = request.headers["Authorization"]
        seen["payload"] = json.loads(request.content)
        return completion("  Focus on spreadsheet skills.  ")

    result = asyncio.run(make_service(handler).generate_text("Advise me", system_prompt="Be brief"))

    assert result["success"] is True
    assert result["content"] == "Focus on spreadsheet skills."
    assert result["tokens_used"] == 42
    assert seen["url"] == "https://openrouter.test/api/v1/chat/completions"
    assert seen["auth"] == "Bearer test-key"
    assert [m["role"] for m in seen["payload"]["messages"]] == ["system", "user"]
    assert seen["payload"]["model"] == "test/model"
    assert "response_format" not in seen["payload"]


def test_not_configured_makes_no_request():
    calls = []

    def handler(request):
        calls.append(request)
        return completion("unused")

    service = make_service(handler, api_key="")
    result = asyncio.run(service.generate_text("hello"))

    assert service.configured is False
    assert result["success"] is False
    assert result["status_code"] == 503
    assert calls == []


def test_placeholder_key_counts_as_not_configured():
    assert make_service(lambda request: completion("x"), api_key="your_openrouter_api_key_here").configured is False


def test_error_status_is_reported():
    result = asyncio.run(make_service(lambda request: httpx.Response(429, text="rate limited")).generate_text("hi"))

    assert result["success"] is False
    assert result["status_code"] == 429
    assert "rate limited" in result["error"]


def test_timeout_is_reported():
    def handler(request):
        raise httpx.ReadTimeout("timed out", request=request)

    result = asyncio.run(make_service(handler).generate_text("hi"))

    assert result == {"success": False, "error": "OpenRouter API request timed out", "status_code": 408}


def test_connection_error_is_reported():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    result = asyncio.run(make_service(handler).generate_text("hi"))

    assert result["success"] is False
    assert result["status_code"] == 500


def test_missing_choices_and_empty_content():
    no_choices = asyncio.run(make_service(lambda r: httpx.Response(200, json={"choices": []})).generate_text("hi"))
    empty = asyncio.run(make_service(lambda r: completion("   ")).generate_text("hi"))

    assert no_choices["success"] is False and no_choices["status_code"] == 502
    assert empty["success"] is False and empty["status_code"] == 502


def test_non_json_body_is_reported():
    result = asyncio.run(make_service(lambda r: httpx.Response(200, text="<html>oops</html>")).generate_text("hi"))

    assert result["success"] is False
    assert result["status_code"] == 502


def test_generate_json_sends_schema_and_parses_fenced_reply():
    seen = {}
    schema = {"type": "object", "properties": {"title": {"type": "string"}}}

    def handler(request):
        seen["payload"] = json.loads(request.content)
        return completion('Here you go:\n```json\n{"title": "Career plan"}\n```')

    result = asyncio.run(make_service(handler).generate_json("Summarize", schema, schema_name="end_conversation"))

    assert result["success"] is True
    assert result["data"] == {"title": "Career plan"}
    response_format = seen["payload"]["response_format"]
    assert response_format["type"] == "json_schema"
    assert response_format["json_schema"]["name"] == "end_conversation"
    assert response_format["json_schema"]["schema"] == schema


def test_generate_json_rejects_unparseable_reply():
    result = asyncio.run(make_service(lambda r: completion("I cannot answer that")).generate_json("x", {}))

    assert result["success"] is False
    assert result["raw_response"] == "I cannot answer that"


def test_extract_json_variants():
    extract = LLMService._extract_json_from_response

    assert extract('{"a": 1}') == {"a": 1}
    assert extract('```\n{"a": 2}\n```') == {"a": 2}
    assert extract('Result: {"a": 3} hope this helps') == {"a": 3}
    assert extract('[1, 2, 3]') is None
    assert extract('no json here') is None


def test_connection_check():
    ok = asyncio.run(make_service(lambda r: completion("OK")).test_connection())
    failed = asyncio.run(make_service(lambda r: httpx.Response(401, text="bad key")).test_connection())

    assert ok["success"] is True
    assert failed["success"] is False
