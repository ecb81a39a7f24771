"""Unit tests for the llm module."""
import httpx
import pytest
from conftest import completion_payload

from deekseep.llm import (
    DEFAULT_MODEL_ID,
    ChatMessage,
    CompletionClient,
    CompletionError,
    DeepSeekCompletionClient,
    ErrorKind,
    RequestConfig,
    build_messages,
    build_request_body,
    create_completion_client,
    parse_response_body,
    resolve_model_id,
)
from deekseep.settings import AppSettings

USER_MESSAGES = [ChatMessage(role="user", content="What is 1+1?")]


class TestCompletionClientInterface:
    """Tests for the abstract CompletionClient interface."""

    def test_client_is_abstract(self):
        """Test that CompletionClient cannot be instantiated directly."""
        with pytest.raises(TypeError):
            CompletionClient()  # type: ignore


class TestModelMapping:
    """Tests for UI label to provider model resolution."""

    def test_known_labels(self):
        assert resolve_model_id("DeekSeep-V3") == "deepseek-chat"
        assert resolve_model_id("DeekSeep-R1") == "deepseek-coder"

    def test_unknown_label_falls_back(self):
        assert resolve_model_id("GPT-9") == DEFAULT_MODEL_ID
        assert resolve_model_id("") == DEFAULT_MODEL_ID


class TestRequestConfig:
    """Tests for RequestConfig.from_settings()."""

    def test_defaults_for_unset_values(self):
        """Test that zero temperature and max tokens fall back to defaults."""
        config = RequestConfig.from_settings(AppSettings())

        assert config.temperature == 0.7
        assert config.max_tokens == 4000
        assert config.api_model_id == "deepseek-chat"
        assert config.api_key_override is None

    def test_negative_values_use_defaults(self):
        config = RequestConfig.from_settings(AppSettings(temperature=-1.0, max_tokens=-5))

        assert config.temperature == 0.7
        assert config.max_tokens == 4000

    def test_explicit_values(self):
        settings = AppSettings(
            api_key="sk-user",
            model_label="DeekSeep-R1",
            temperature=0.2,
            max_tokens=256,
            system_prompt="Custom",
        )
        config = RequestConfig.from_settings(settings, system_prompt="Packaged")

        assert config.api_model_id == "deepseek-coder"
        assert config.temperature == 0.2
        assert config.max_tokens == 256
        assert config.system_prompt == "Custom"
        assert config.api_key_override == "sk-user"

    def test_packaged_prompt_used_when_settings_have_none(self):
        config = RequestConfig.from_settings(AppSettings(), system_prompt="Packaged")
        assert config.system_prompt == "Packaged"

    def test_temperature_clamped_to_one(self):
        config = RequestConfig.from_settings(AppSettings(temperature=1.8))
        assert config.temperature == 1.0

    def test_invalid_direct_values_rejected(self):
        with pytest.raises(ValueError):
            RequestConfig(max_tokens=0)
        with pytest.raises(ValueError):
            RequestConfig(temperature=1.5)


class TestRequestBody:
    """Tests for request body construction."""

    def test_system_prompt_prepended(self):
        messages = build_messages(USER_MESSAGES, "Be brief.")

        assert messages[0] == {"role": "system", "content": "Be brief."}
        assert messages[1] == {"role": "user", "content": "What is 1+1?"}

    def test_system_prompt_prepended_even_with_existing_system_turn(self):
        """Test that the prompt is prepended unconditionally."""
        history = [ChatMessage(role="system", content="Old rule"), *USER_MESSAGES]
        messages = build_messages(history, "New rule")

        assert [m["role"] for m in messages] == ["system", "system", "user"]
        assert messages[0]["content"] == "New rule"

    def test_empty_system_prompt_not_sent(self):
        assert build_messages(USER_MESSAGES, "") == [{"role": "user", "content": "What is 1+1?"}]
        assert build_messages(USER_MESSAGES, None) == [{"role": "user", "content": "What is 1+1?"}]

    def test_body_keys(self):
        config = RequestConfig(temperature=0.5, max_tokens=100, system_prompt="S")
        body = build_request_body(USER_MESSAGES, config)

        assert set(body) == {"model", "messages", "temperature", "max_tokens"}
        assert body["model"] == "deepseek-chat"
        assert body["temperature"] == 0.5
        assert body["max_tokens"] == 100
        assert len(body["messages"]) == 2


class TestParseResponseBody:
    """Tests for response decoding policy."""

    def test_first_choice_returned(self):
        assert parse_response_body(completion_payload("first", "second")) == "first"

    def test_error_object_wins(self):
        payload = {
            "error": {"message": "Insufficient Balance", "type": "invalid_request", "code": "402"},
            "choices": [{"message": {"role": "assistant", "content": "ignored"}}],
        }
        with pytest.raises(CompletionError) as exc_info:
            parse_response_body(payload, status_code=402)

        assert exc_info.value.kind == ErrorKind.API_ERROR
        assert exc_info.value.message == "Insufficient Balance"
        assert exc_info.value.status_code == 402

    def test_empty_choices_is_malformed(self):
        with pytest.raises(CompletionError) as exc_info:
            parse_response_body({"choices": []})
        assert exc_info.value.kind == ErrorKind.MALFORMED_RESPONSE

    def test_missing_choices_is_malformed(self):
        with pytest.raises(CompletionError) as exc_info:
            parse_response_body({"id": "x"})
        assert exc_info.value.kind == ErrorKind.MALFORMED_RESPONSE

    def test_choice_without_message_is_malformed(self):
        with pytest.raises(CompletionError) as exc_info:
            parse_response_body({"choices": [{"index": 0}]})
        assert exc_info.value.kind == ErrorKind.MALFORMED_RESPONSE

    def test_non_object_is_malformed(self):
        with pytest.raises(CompletionError) as exc_info:
            parse_response_body(["not", "an", "object"])
        assert exc_info.value.kind == ErrorKind.MALFORMED_RESPONSE


class TestDeepSeekCompletionClient:
    """Tests for DeepSeekCompletionClient against a mock transport."""

    @pytest.mark.asyncio
    async def test_successful_completion(self, make_client):
        """Test the request shape and the decoded reply."""
        client, transport = make_client(
            lambda request: httpx.Response(200, json=completion_payload("2"))
        )
        config = RequestConfig(system_prompt="Be brief.", api_key_override="sk-user")

        try:
            result = await client.complete(USER_MESSAGES, config)
        finally:
            await client.close()

        assert result.is_success
        assert result.text == "2"

        request = transport.requests[0]
        assert request.method == "POST"
        assert str(request.url) == "https://api.deepseek.com/v1/chat/completions"
        assert request.headers["Authorization"] == "Bearer sk-user"
        assert request.headers["Content-Type"].startswith("application/json")

        body = transport.last_body
        assert body["model"] == "deepseek-chat"
        assert body["temperature"] == 0.7
        assert body["max_tokens"] == 4000
        assert body["messages"][0] == {"role": "system", "content": "Be brief."}

    @pytest.mark.asyncio
    async def test_default_key_used_without_override(self, make_client):
        client, transport = make_client(
            lambda request: httpx.Response(200, json=completion_payload("ok")),
            default_api_key="sk-default",
        )
        await client.complete(USER_MESSAGES, RequestConfig())

        assert transport.requests[0].headers["Authorization"] == "Bearer sk-default"

    @pytest.mark.asyncio
    async def test_missing_credential_sends_nothing(self, make_client):
        client, transport = make_client(
            lambda request: httpx.Response(200, json=completion_payload("ok")),
            default_api_key=None,
        )
        result = await client.complete(USER_MESSAGES, RequestConfig(api_key_override=""))

        assert result.error_kind == ErrorKind.MISSING_CREDENTIAL
        assert transport.requests == []

    @pytest.mark.asyncio
    async def test_http_error_with_error_object(self, make_client):
        """Test that a non-2xx error body surfaces its message verbatim."""
        client, _ = make_client(
            lambda request: httpx.Response(
                401,
                json={"error": {"message": "Authentication Fails", "type": "authentication_error"}},
            )
        )
        result = await client.complete(USER_MESSAGES, RequestConfig())

        assert result.error_kind == ErrorKind.API_ERROR
        assert result.message == "Authentication Fails"
        assert result.status_code == 401

    @pytest.mark.asyncio
    async def test_error_object_in_ok_response(self, make_client):
        client, _ = make_client(
            lambda request: httpx.Response(200, json={"error": {"message": "Model overloaded"}})
        )
        result = await client.complete(USER_MESSAGES, RequestConfig())

        assert result.error_kind == ErrorKind.API_ERROR
        assert result.message == "Model overloaded"
        assert result.status_code == 200

    @pytest.mark.asyncio
    async def test_empty_choices_is_malformed(self, make_client):
        client, _ = make_client(lambda request: httpx.Response(200, json={"choices": []}))
        result = await client.complete(USER_MESSAGES, RequestConfig())

        assert result.error_kind == ErrorKind.MALFORMED_RESPONSE

    @pytest.mark.asyncio
    async def test_undecodable_body_is_transport(self, make_client):
        client, _ = make_client(lambda request: httpx.Response(200, text="<html>oops</html>"))
        result = await client.complete(USER_MESSAGES, RequestConfig())

        assert result.error_kind == ErrorKind.TRANSPORT

    @pytest.mark.asyncio
    async def test_connection_error_is_transport(self, make_client):
        def refuse(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("Connection refused", request=request)

        client, transport = make_client(refuse)
        result = await client.complete(USER_MESSAGES, RequestConfig())

        assert result.error_kind == ErrorKind.TRANSPORT
        assert "Connection refused" in result.message
        assert len(transport.requests) == 1

    @pytest.mark.asyncio
    async def test_timeout_is_transport(self, make_client):
        def stall(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("timed out", request=request)

        client, transport = make_client(stall)
        result = await client.complete(USER_MESSAGES, RequestConfig())

        assert result.error_kind == ErrorKind.TRANSPORT
        assert len(transport.requests) == 1

    @pytest.mark.asyncio
    async def test_server_error_is_not_retried(self, make_client):
        client, transport = make_client(
            lambda request: httpx.Response(503, json={"error": {"message": "Server busy"}})
        )
        result = await client.complete(USER_MESSAGES, RequestConfig())

        assert result.error_kind == ErrorKind.API_ERROR
        assert len(transport.requests) == 1

    @pytest.mark.asyncio
    async def test_non_json_error_status_is_transport(self, make_client):
        client, _ = make_client(
            lambda request: httpx.Response(502, text="<html>Bad Gateway</html>")
        )
        result = await client.complete(USER_MESSAGES, RequestConfig())

        assert result.error_kind == ErrorKind.TRANSPORT
        assert "Bad Gateway" in result.message

    @pytest.mark.asyncio
    async def test_error_status_without_error_object_is_malformed(self, make_client):
        client, _ = make_client(lambda request: httpx.Response(503, json={"detail": "busy"}))
        result = await client.complete(USER_MESSAGES, RequestConfig())

        assert result.error_kind == ErrorKind.MALFORMED_RESPONSE
        assert result.status_code == 503

    @pytest.mark.asyncio
    async def test_debug_callback_receives_status(self, make_client):
        entries = []
        client, _ = make_client(lambda request: httpx.Response(200, json=completion_payload("ok")))
        client.set_debug_callback(lambda level, component, message: entries.append((level, component, message)))

        await client.complete(USER_MESSAGES, RequestConfig())

        assert ("debug", "LLM", "Status Code: 200") in entries

    @pytest.mark.asyncio
    async def test_close_keeps_injected_http_client_open(self, make_client):
        client, _ = make_client(lambda request: httpx.Response(200, json=completion_payload("ok")))
        await client.close()

        assert not client._http_client.is_closed

    @pytest.mark.asyncio
    @pytest.mark.integration
    async def test_real_api(self, api_keys):
        """Integration test: one real round trip."""
        if not api_keys["deepseek"]:
            pytest.skip("DEEPSEEK_API_KEY not set")

        async with DeepSeekCompletionClient(default_api_key=api_keys["deepseek"]) as client:
            result = await client.complete(
                [ChatMessage(role="user", content="Reply with the single word: pong")],
                RequestConfig(max_tokens=10),
            )

        assert result.is_success
        assert result.text


class TestCompletionClientFactory:
    """Tests for create_completion_client()."""

    def test_create_deepseek_client(self):
        client = create_completion_client("deepseek", default_api_key="sk-test")
        assert isinstance(client, DeepSeekCompletionClient)

    def test_provider_name_is_case_insensitive(self):
        assert isinstance(create_completion_client("DeepSeek"), DeepSeekCompletionClient)

    def test_unknown_provider_raises(self):
        with pytest.raises(ValueError, match="Unsupported provider"):
            create_completion_client("anthropic")
