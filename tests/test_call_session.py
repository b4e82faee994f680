"""
Tests for the voice call state machine with a scripted SDK client
"""

import pytest

from interview_coach.core.errors import InvalidTransition, UpstreamFailure
from interview_coach.utils.enums import CallState
from interview_coach.voice.assistant import create_interview_assistant
from interview_coach.voice.call_session import VoiceCallSession, DurationTicker


class FakeVoiceClient:
    def __init__(self, fail_start=False):
        self.handlers = {}
        self.is_muted = False
        self.fail_start = fail_start
        self.started_with = None
        self.stop_calls = 0

    def on(self, event, handler):
        self.handlers.setdefault(event, []).append(handler)

    def emit(self, event, *args):
        for handler in self.handlers.get(event, []):
            handler(*args)

    def start(self, config):
        if self.fail_start:
            raise RuntimeError("microphone permission denied")
        self.started_with = config

    def stop(self):
        self.stop_calls += 1

    def set_muted(self, muted):
        self.is_muted = muted


class ManualTicker:
    def __init__(self, on_tick, interval=1.0):
        self.on_tick = on_tick
        self.running = False

    def start(self):
        self.running = True

    def stop(self):
        self.running = False

    def fire(self, times=1):
        for _ in range(times):
            self.on_tick()


@pytest.fixture
def tickers():
    return []


@pytest.fixture
def voice_client():
    return FakeVoiceClient()


@pytest.fixture
def call(voice_client, tickers):
    def factory(on_tick):
        ticker = ManualTicker(on_tick)
        tickers.append(ticker)
        return ticker

    return VoiceCallSession(voice_client, ticker_factory=factory)


def user_transcript(text, transcript_type="final"):
    return {"type": "transcript", "role": "user", "transcript": text, "transcriptType": transcript_type}


class TestCallStates:
    """idle -> connecting -> active -> ended"""

    def test_starts_idle(self, call):
        assert call.state == CallState.IDLE
        assert not call.is_active
        assert call.call_duration == 0

    def test_full_call(self, call, voice_client):
        config = call.start("What is a race condition?")
        assert call.state == CallState.CONNECTING
        assert voice_client.started_with == config

        voice_client.emit("call-start")
        assert call.state == CallState.ACTIVE

        voice_client.emit("call-end")
        assert call.state == CallState.ENDED

    def test_cannot_start_while_active(self, call, voice_client):
        call.start("Q1")
        voice_client.emit("call-start")
        with pytest.raises(InvalidTransition):
            call.start("Q2")

    def test_can_start_again_after_end(self, call, voice_client):
        call.start("Q1")
        voice_client.emit("call-start")
        voice_client.emit("call-end")
        call.start("Q2")
        assert call.state == CallState.CONNECTING

    def test_start_failure_is_upstream_failure(self, tickers):
        client = FakeVoiceClient(fail_start=True)
        call = VoiceCallSession(client, ticker_factory=lambda cb: ManualTicker(cb))
        with pytest.raises(UpstreamFailure, match="microphone permission denied"):
            call.start("Q1")
        assert call.state == CallState.ENDED

    def test_stop_delegates_to_client(self, call, voice_client):
        call.stop()
        assert voice_client.stop_calls == 1


class TestDuration:
    """One-second tick counter"""

    def test_ticks_while_active(self, call, voice_client, tickers):
        call.start("Q1")
        voice_client.emit("call-start")
        tickers[-1].fire(3)
        assert call.call_duration == 3

    def test_reset_on_each_call_start(self, call, voice_client, tickers):
        call.start("Q1")
        voice_client.emit("call-start")
        tickers[-1].fire(5)
        voice_client.emit("call-end")
        assert call.call_duration == 5

        call.start("Q2")
        voice_client.emit("call-start")
        assert call.call_duration == 0
        assert len(tickers) == 2

    def test_ticker_stopped_on_end(self, call, voice_client, tickers):
        call.start("Q1")
        voice_client.emit("call-start")
        assert tickers[-1].running
        voice_client.emit("call-end")
        assert not tickers[-1].running


class TestTranscript:
    """User transcript fragments"""

    def test_collects_final_user_fragments(self, call, voice_client):
        call.start("Q1")
        voice_client.emit("call-start")
        voice_client.emit("message", user_transcript("I would use"))
        voice_client.emit("message", user_transcript("I would use a lock", "partial"))
        voice_client.emit("message", user_transcript("a mutex."))
        voice_client.emit(
            "message",
            {"type": "transcript", "role": "assistant", "transcript": "Thanks!"},
        )
        voice_client.emit("message", {"type": "status-update", "status": "ended"})

        assert call.transcript == "I would use a mutex."
        assert call.drain_fragments() == ["I would use", "a mutex."]
        assert call.drain_fragments() == []

    def test_transcript_reset_on_new_start(self, call, voice_client):
        call.start("Q1")
        voice_client.emit("call-start")
        voice_client.emit("message", user_transcript("first answer"))
        voice_client.emit("call-end")

        call.start("Q2")
        assert call.transcript == ""
        assert call.drain_fragments() == []


class TestSpeechAndErrors:
    """Speaking flag, errors and mute"""

    def test_speaking_flag(self, call, voice_client):
        voice_client.emit("speech-start")
        assert call.is_speaking
        voice_client.emit("speech-end")
        assert not call.is_speaking

    def test_error_ends_call_and_is_reported(self, call, voice_client, tickers):
        call.start("Q1")
        voice_client.emit("call-start")
        voice_client.emit("speech-start")
        voice_client.emit("error", {"message": "network lost"})

        assert call.state == CallState.ENDED
        assert not call.is_speaking
        assert not tickers[-1].running
        assert call.last_error == "Voice error: network lost"

    def test_meeting_ended_is_not_an_error(self, call, voice_client):
        call.start("Q1")
        voice_client.emit("call-start")
        voice_client.emit("error", {"message": "Meeting has ended"})
        assert call.state == CallState.ENDED
        assert call.last_error is None

    def test_error_without_message(self, call, voice_client):
        voice_client.emit("error", {})
        assert call.last_error == "Voice error: Unknown error"

    def test_toggle_mute(self, call, voice_client):
        assert call.toggle_mute() is True
        assert voice_client.is_muted
        assert call.toggle_mute() is False
        assert not voice_client.is_muted


class TestClientsAreIndependent:
    """No shared state between calls"""

    def test_two_sessions_do_not_share_transcripts(self):
        first_client, second_client = FakeVoiceClient(), FakeVoiceClient()
        first = VoiceCallSession(first_client, ticker_factory=ManualTicker)
        second = VoiceCallSession(second_client, ticker_factory=ManualTicker)

        first.start("Q1")
        second.start("Q2")
        first_client.emit("message", user_transcript("only first"))

        assert first.transcript == "only first"
        assert second.transcript == ""


def test_duration_ticker_stops():
    ticks = []
    ticker = DurationTicker(lambda: ticks.append(1), interval=60)
    ticker.start()
    ticker.stop()
    ticker._thread.join(timeout=1)
    assert not ticker._thread.is_alive()
    assert ticks == []


class TestAssistantConfig:
    """Assistant configuration"""

    def test_question_in_first_message_and_system_prompt(self):
        config = create_interview_assistant(
            "Explain CAP theorem.", {"job_role": "SRE", "interview_type": "Technical"}
        )
        assert config["firstMessage"].startswith("Here's your question: Explain CAP theorem.")
        system = config["model"]["messages"][0]["content"]
        assert "Question: Explain CAP theorem." in system
        assert "Role: SRE" in system
        assert config["silenceTimeoutSeconds"] == 30
        assert config["maxDurationSeconds"] == 300
        assert config["recordingEnabled"] is True

    def test_context_optional(self):
        config = create_interview_assistant("Q?")
        assert "Role:" not in config["model"]["messages"][0]["content"]
