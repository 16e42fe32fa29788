"""Tests for the chat client: session rules, HTTP client and the Textual app."""
import asyncio
import json

import httpx
import pytest
from conftest import RecordingTransport
from textual.widgets import Select, TextArea

from duochat.llm import PRIMARY_PROVIDER, SECONDARY_PROVIDER
from duochat.ui import ChatSession, DuoChatApp, MissingApiKeyError, RelayClient
from duochat.ui.config import EMPTY_REPLY, FALLBACK_REPLY, MISSING_CUSTOM_KEY
from duochat.ui.screens import ProviderNoticeScreen
from duochat.ui.widgets import ApiKeyPanel, ChatBubble, ChatInputBar


def _session(recorder: RecordingTransport, **kwargs) -> ChatSession:
    return ChatSession(RelayClient(transport=recorder.transport()), **kwargs)


class TestProviderSelection:
    """Tests for provider and model switching."""

    def test_starts_on_primary_default(self):
        """Test the initial selection."""
        session = _session(RecordingTransport())

        assert session.provider == PRIMARY_PROVIDER
        assert session.model == "gemini-2.5-flash"
        assert session.messages == []
        assert session.loading is False

    def test_secondary_needs_confirmation(self):
        """Test that choosing Cysic only records a pending switch."""
        session = _session(RecordingTransport())

        assert session.request_provider_change(SECONDARY_PROVIDER) is True
        assert session.pending_provider == SECONDARY_PROVIDER
        assert session.provider == PRIMARY_PROVIDER

    def test_cancel_keeps_previous_selection(self):
        """Test that cancelling leaves provider and model as they were."""
        session = _session(RecordingTransport())
        session.select_model("gemini-2.5-pro")

        session.request_provider_change(SECONDARY_PROVIDER)
        session.cancel_provider_change()

        assert session.provider == PRIMARY_PROVIDER
        assert session.model == "gemini-2.5-pro"
        assert session.pending_provider is None

    def test_confirm_switches_and_resets_model(self):
        """Test that confirming applies the provider default model."""
        session = _session(RecordingTransport())

        session.request_provider_change(SECONDARY_PROVIDER)
        session.confirm_provider_change()

        assert session.provider == SECONDARY_PROVIDER
        assert session.model == "QwQ-32B-Q4_K_M"
        assert session.pending_provider is None

    def test_primary_switch_is_immediate(self):
        """Test that switching back to Gemini needs no confirmation."""
        session = _session(RecordingTransport())
        session.request_provider_change(SECONDARY_PROVIDER)
        session.confirm_provider_change()
        session.select_model("phi-4")

        assert session.request_provider_change(PRIMARY_PROVIDER) is False
        assert session.provider == PRIMARY_PROVIDER
        assert session.model == "gemini-2.5-flash"

    def test_same_provider_is_noop(self):
        """Test that re-selecting the active provider changes nothing."""
        session = _session(RecordingTransport())

        assert session.request_provider_change(PRIMARY_PROVIDER) is False
        assert session.pending_provider is None

    def test_unknown_provider_rejected(self):
        """Test that unknown providers raise."""
        with pytest.raises(ValueError):
            _session(RecordingTransport()).request_provider_change("openai")

    def test_model_must_belong_to_provider(self):
        """Test that another provider's model is refused."""
        session = _session(RecordingTransport())

        with pytest.raises(ValueError):
            session.select_model("phi-4")
        assert session.model == "gemini-2.5-flash"


class TestSubmit:
    """Tests for sending prompts."""

    @pytest.mark.asyncio
    async def test_blank_prompt_sends_nothing(self):
        """Test that whitespace prompts are ignored."""
        recorder = RecordingTransport(payload={"text": "unused"})
        session = _session(recorder)

        assert await session.submit("   \n") is None
        assert recorder.requests == []
        assert session.messages == []

    @pytest.mark.asyncio
    async def test_successful_round_trip(self):
        """Test the request body and the reply appended."""
        recorder = RecordingTransport(payload={"text": "Hi! How can I help?"})
        session = _session(recorder)

        reply = await session.submit("Hello")

        assert reply.content == "Hi! How can I help?"
        assert reply.model == "gemini-2.5-flash"
        assert [(m.role, m.content) for m in session.messages] == [
            ("user", "Hello"),
            ("assistant", "Hi! How can I help?"),
        ]
        request = recorder.requests[0]
        assert str(request.url) == "http://127.0.0.1:8000/api/ai"
        assert recorder.bodies[0] == {"prompt": "Hello", "model": "gemini-2.5-flash", "messages": []}
        assert session.loading is False

    @pytest.mark.asyncio
    async def test_history_sent_in_order(self):
        """Test that prior turns are sent oldest first, without the new prompt."""
        recorder = RecordingTransport(payload={"text": "R"})
        session = _session(recorder)

        await session.submit("first")
        await session.submit("second")

        assert recorder.bodies[1]["prompt"] == "second"
        assert recorder.bodies[1]["messages"] == [
            {"role": "user", "content": "first"},
            {"role": "assistant", "content": "R"},
        ]
        assert len(session.messages) == 4

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "payload,expected",
        [
            ({"response": "legacy field"}, "legacy field"),
            ({}, EMPTY_REPLY),
            ({"text": ""}, EMPTY_REPLY),
            ([1, 2], EMPTY_REPLY),
        ],
    )
    async def test_reply_text_fallbacks(self, payload, expected: str):
        """Test the order in which reply fields are read."""
        session = _session(RecordingTransport(payload=payload))

        reply = await session.submit("Hello")

        assert reply.content == expected

    @pytest.mark.asyncio
    async def test_server_error_shows_fallback(self):
        """Test that a non-2xx answer becomes the fallback reply."""
        recorder = RecordingTransport(status_code=500, payload={"error": "Failed to get response from Gemini"})
        session = _session(recorder)

        reply = await session.submit("Hello")

        assert reply.content == FALLBACK_REPLY
        assert reply.model == "gemini-2.5-flash"
        assert len(recorder.requests) == 1
        assert session.loading is False

    @pytest.mark.asyncio
    async def test_transport_error_shows_fallback(self):
        """Test that an unreachable server becomes the fallback reply."""
        session = _session(RecordingTransport(error=httpx.ConnectError("refused")))

        reply = await session.submit("Hello")

        assert reply.content == FALLBACK_REPLY
        assert [m.role for m in session.messages] == ["user", "assistant"]

    @pytest.mark.asyncio
    async def test_invalid_json_shows_fallback(self):
        """Test that a body that is not JSON becomes the fallback reply."""

        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, content=b"<html>oops</html>")

        session = ChatSession(RelayClient(transport=httpx.MockTransport(handler)))

        reply = await session.submit("Hello")

        assert reply.content == FALLBACK_REPLY

    @pytest.mark.asyncio
    async def test_single_flight(self):
        """Test that a second prompt is ignored while one is in flight."""
        release = asyncio.Event()
        received: list[httpx.Request] = []

        async def handler(request: httpx.Request) -> httpx.Response:
            received.append(request)
            await release.wait()
            return httpx.Response(200, json={"text": "done"})

        session = ChatSession(RelayClient(transport=httpx.MockTransport(handler)))
        first = asyncio.create_task(session.submit("one"))
        while not received:
            await asyncio.sleep(0)

        assert session.loading is True
        assert await session.submit("two") is None

        release.set()
        reply = await first

        assert reply.content == "done"
        assert len(received) == 1
        assert [m.content for m in session.messages] == ["one", "done"]

    @pytest.mark.asyncio
    async def test_observers_notified(self):
        """Test the message and loading callbacks."""
        shown = []
        loading = []
        session = _session(
            RecordingTransport(payload={"text": "ok"}),
            on_message=shown.append,
            on_loading=loading.append,
        )

        await session.submit("Hello")

        assert [m.role for m in shown] == ["user", "assistant"]
        assert loading == [True, False]

    @pytest.mark.asyncio
    async def test_clear_forgets_history(self):
        """Test that clearing drops the conversation from later requests."""
        recorder = RecordingTransport(payload={"text": "R"})
        session = _session(recorder)

        await session.submit("first")
        session.clear()
        await session.submit("second")

        assert recorder.bodies[1]["messages"] == []


class TestCustomApiKey:
    """Tests for the Cysic custom-key mode."""

    def _on_cysic(self, recorder: RecordingTransport) -> ChatSession:
        session = _session(recorder)
        session.request_provider_change(SECONDARY_PROVIDER)
        session.confirm_provider_change()
        return session

    @pytest.mark.asyncio
    async def test_missing_custom_key_blocks_request(self):
        """Test that custom mode without a key sends nothing."""
        recorder = RecordingTransport(payload={"text": "unused"})
        session = self._on_cysic(recorder)
        session.set_api_key_mode("custom", "  ")

        with pytest.raises(MissingApiKeyError, match=MISSING_CUSTOM_KEY):
            await session.submit("Hello")

        assert recorder.requests == []
        assert session.messages == []
        assert session.loading is False

    @pytest.mark.asyncio
    async def test_custom_key_sent(self):
        """Test that the typed key travels as customApiKey."""
        recorder = RecordingTransport(payload={"text": "ok"})
        session = self._on_cysic(recorder)
        session.set_api_key_mode("custom", "user-key")

        await session.submit("Hello")

        assert recorder.bodies[0]["customApiKey"] == "user-key"
        assert recorder.bodies[0]["model"] == "QwQ-32B-Q4_K_M"

    @pytest.mark.asyncio
    async def test_default_mode_omits_key(self):
        """Test that default mode never sends a key."""
        recorder = RecordingTransport(payload={"text": "ok"})
        session = self._on_cysic(recorder)
        session.set_api_key_mode("custom", "user-key")
        session.set_api_key_mode("default")

        await session.submit("Hello")

        assert "customApiKey" not in recorder.bodies[0]

    @pytest.mark.asyncio
    async def test_custom_key_ignored_on_primary(self):
        """Test that Gemini requests never carry the custom key."""
        recorder = RecordingTransport(payload={"text": "ok"})
        session = _session(recorder)
        session.set_api_key_mode("custom", "")

        await session.submit("Hello")

        assert "customApiKey" not in recorder.bodies[0]

    def test_unknown_mode_rejected(self):
        """Test that only the two modes exist."""
        with pytest.raises(ValueError):
            _session(RecordingTransport()).set_api_key_mode("shared")


class TestDuoChatApp:
    """Pilot tests for the Textual app."""

    @pytest.mark.asyncio
    async def test_cancel_notice_keeps_provider(self):
        """Test that Escape on the notice restores the previous selection."""
        app = DuoChatApp(client=RelayClient(transport=RecordingTransport().transport()))

        async with app.run_test() as pilot:
            app.query_one("#provider-select", Select).value = SECONDARY_PROVIDER
            await pilot.pause()
            assert isinstance(app.screen, ProviderNoticeScreen)

            await pilot.press("escape")
            await pilot.pause()

            assert app.session.provider == PRIMARY_PROVIDER
            assert app.session.model == "gemini-2.5-flash"
            assert app.query_one("#provider-select", Select).value == PRIMARY_PROVIDER
            assert app.query_one("#api-key-panel", ApiKeyPanel).display is False

    @pytest.mark.asyncio
    async def test_continue_switches_provider(self):
        """Test that continuing applies Cysic and shows the key panel."""
        app = DuoChatApp(client=RelayClient(transport=RecordingTransport().transport()))

        async with app.run_test() as pilot:
            app.query_one("#provider-select", Select).value = SECONDARY_PROVIDER
            await pilot.pause()
            await pilot.click("#btn-continue")
            await pilot.pause()

            assert app.session.provider == SECONDARY_PROVIDER
            assert app.session.model == "QwQ-32B-Q4_K_M"
            assert app.query_one("#model-select", Select).value == "QwQ-32B-Q4_K_M"
            assert app.query_one("#api-key-panel", ApiKeyPanel).display is True

    @pytest.mark.asyncio
    async def test_send_button_round_trip(self):
        """Test that Send posts the prompt and renders both bubbles."""
        recorder = RecordingTransport(payload={"text": "**Hello** there"})
        app = DuoChatApp(client=RelayClient(transport=recorder.transport()))

        async with app.run_test() as pilot:
            app.query_one("#chat-input", TextArea).text = "Hi"
            await pilot.click("#send-btn")
            await app.workers.wait_for_complete()
            await pilot.pause()

            assert [m.content for m in app.session.messages] == ["Hi", "**Hello** there"]
            assert len(app.query(ChatBubble)) == 2
            assert json.loads(recorder.requests[0].content)["prompt"] == "Hi"

    @pytest.mark.asyncio
    async def test_ctrl_j_sends_prompt(self):
        """Test that Ctrl+J in the editor sends and clears the prompt."""
        recorder = RecordingTransport(payload={"text": "ok"})
        app = DuoChatApp(client=RelayClient(transport=recorder.transport()))

        async with app.run_test() as pilot:
            prompt = app.query_one("#chat-input", TextArea)
            prompt.focus()
            prompt.text = "Hello"
            await pilot.press("ctrl+j")
            await app.workers.wait_for_complete()
            await pilot.pause()

            assert prompt.text == ""
            assert len(recorder.requests) == 1
            assert json.loads(recorder.requests[0].content)["prompt"] == "Hello"

    @pytest.mark.asyncio
    async def test_blank_or_disabled_input_sends_nothing(self):
        """Test that a blank prompt and a disabled bar post no request."""
        recorder = RecordingTransport(payload={"text": "ok"})
        app = DuoChatApp(client=RelayClient(transport=recorder.transport()))

        async with app.run_test() as pilot:
            prompt = app.query_one("#chat-input", TextArea)
            prompt.text = "   "
            await pilot.click("#send-btn")
            await pilot.pause()

            bar = app.query_one("#chat-input-bar", ChatInputBar)
            bar.set_enabled(False)
            prompt.text = "Hello"
            bar._submit()
            await app.workers.wait_for_complete()
            await pilot.pause()

            assert recorder.requests == []
            assert app.session.messages == []
            assert prompt.text == "Hello"
