"""
Client-side state for one voice interview call: idle -> connecting -> active -> ended
"""

import queue
import threading
from typing import Callable, Protocol

import structlog

from interview_coach.core.errors import InvalidTransition, UpstreamFailure
from interview_coach.utils.enums import CallState
from interview_coach.voice.assistant import create_interview_assistant

logger = structlog.get_logger(__name__)

# Raised by the SDK when a call is torn down normally
MEETING_ENDED = "Meeting has ended"


class VoiceClient(Protocol):
    is_muted: bool

    def on(self, event: str, handler: Callable) -> None: ...

    def start(self, assistant_config: dict) -> None: ...

    def stop(self) -> None: ...

    def set_muted(self, muted: bool) -> None: ...


class DurationTicker:
    """Calls ``on_tick`` once per interval on a daemon thread until stopped."""

    def __init__(self, on_tick: Callable[[], None], interval: float = 1.0):
        self.on_tick = on_tick
        self.interval = interval
        self._stopped = threading.Event()
        self._thread = None

    def start(self):
        self._thread = threading.Thread(target=self._run, daemon=True)
        self._thread.start()

    def _run(self):
        while not self._stopped.wait(self.interval):
            self.on_tick()

    def stop(self):
        self._stopped.set()


class VoiceCallSession:
    def __init__(self, client: VoiceClient, ticker_factory=DurationTicker):
        self.client = client
        self.state = CallState.IDLE
        self.is_speaking = False
        self.last_error: str | None = None
        self.fragments: queue.Queue = queue.Queue()

        self._ticker_factory = ticker_factory
        self._ticker = None
        self._duration = 0
        self._transcript: list[str] = []
        self._lock = threading.Lock()

        client.on("call-start", self._on_call_start)
        client.on("call-end", self._on_call_end)
        client.on("speech-start", self._on_speech_start)
        client.on("speech-end", self._on_speech_end)
        client.on("message", self._on_message)
        client.on("error", self._on_error)

    @property
    def is_active(self) -> bool:
        return self.state == CallState.ACTIVE

    @property
    def call_duration(self) -> int:
        with self._lock:
            return self._duration

    @property
    def transcript(self) -> str:
        with self._lock:
            return " ".join(self._transcript)

    def start(self, question: str, context: dict | None = None) -> dict:
        if self.state not in (CallState.IDLE, CallState.ENDED):
            raise InvalidTransition(f"Cannot start a call while {self.state.value}")

        config = create_interview_assistant(question, context)

        with self._lock:
            self._transcript = []
        self._drain()
        self.last_error = None
        self.state = CallState.CONNECTING

        try:
            self.client.start(config)
        except Exception as e:
            self.state = CallState.ENDED
            logger.error("voice_call_start_failed", error=str(e))
            raise UpstreamFailure(f"Failed to start voice interview: {e}", cause=e) from e

        logger.info("voice_call_starting", question=question[:80])
        return config

    def stop(self):
        try:
            self.client.stop()
        except Exception as e:
            logger.error("voice_call_stop_failed", error=str(e))
            raise UpstreamFailure("Failed to stop voice interview", cause=e) from e

    def toggle_mute(self) -> bool:
        muted = not self.client.is_muted
        try:
            self.client.set_muted(muted)
        except Exception as e:
            raise UpstreamFailure("Failed to toggle microphone", cause=e) from e
        logger.info("voice_mute_toggled", muted=muted)
        return muted

    def drain_fragments(self) -> list[str]:
        """Take every transcript fragment queued since the last drain."""
        return self._drain()

    def close(self):
        self._stop_ticker()

    def _drain(self) -> list[str]:
        fragments = []
        while True:
            try:
                fragments.append(self.fragments.get_nowait())
            except queue.Empty:
                return fragments

    def _tick(self):
        with self._lock:
            self._duration += 1

    def _stop_ticker(self):
        if self._ticker is not None:
            self._ticker.stop()
            self._ticker = None

    def _on_call_start(self, *args):
        self.state = CallState.ACTIVE
        with self._lock:
            self._duration = 0
        self._stop_ticker()
        self._ticker = self._ticker_factory(self._tick)
        self._ticker.start()
        logger.info("voice_call_started")

    def _on_call_end(self, *args):
        self.state = CallState.ENDED
        self.is_speaking = False
        self._stop_ticker()
        logger.info("voice_call_ended", duration=self.call_duration)

    def _on_speech_start(self, *args):
        self.is_speaking = True

    def _on_speech_end(self, *args):
        self.is_speaking = False

    def _on_message(self, message: dict):
        if message.get("type") != "transcript" or message.get("role") != "user":
            return
        # Partial transcripts are superseded by the final one
        if message.get("transcriptType", "final") != "final":
            return
        fragment = (message.get("transcript") or "").strip()
        if not fragment:
            return
        with self._lock:
            self._transcript.append(fragment)
        self.fragments.put(fragment)

    def _on_error(self, error):
        if isinstance(error, dict):
            message = error.get("message") or ""
        else:
            message = str(getattr(error, "message", "") or error or "")

        self.state = CallState.ENDED
        self.is_speaking = False
        self._stop_ticker()

        if MEETING_ENDED in message:
            logger.info("voice_meeting_ended")
            return

        self.last_error = f"Voice error: {message or 'Unknown error'}"
        logger.error("voice_call_error", error=message)
