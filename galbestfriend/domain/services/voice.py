"""
Voice input controller
Turns speech-recognition events into draft text and short status feedback
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

STATUS_LISTENING = "Listening..."
STATUS_GOT_IT = "Got it!"
STATUS_REVIEW = "Tap send or keep talking"

HEADER_LISTENING = "Listening to you..."
HEADER_READY = "Ready to listen"

ERROR_STATUSES: dict[str, str] = {
    "no-speech": "No speech detected",
    "audio-capture": "No microphone found",
    "not-allowed": "Mic access denied",
}
DEFAULT_ERROR_STATUS = "Try again"

UNSUPPORTED_TIP = (
    "Voice input tip: Voice input works best in Chrome or Safari on mobile. "
    "You can also just type your message — I'm here either way!"
)
PERMISSION_HELP = (
    "Microphone access needed: To use voice input, please allow microphone access "
    "in your browser settings. On mobile, you might need to refresh the page after "
    "granting permission."
)

REVIEW_HINT_MIN_LENGTH = 10


class VoiceEventType(Enum):
    START = "start"
    RESULT = "result"
    END = "end"
    ERROR = "error"


@dataclass(frozen=True)
class SpeechResult:
    """One recognition alternative"""

    transcript: str
    is_final: bool = False


@dataclass
class VoiceFeedback:
    """What the input area should show after an event"""

    status: str = ""
    header_status: str = HEADER_READY
    draft: str = ""
    listening: bool = False
    system_message: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "status": self.status,
            "header_status": self.header_status,
            "draft": self.draft,
            "listening": self.listening,
            "system_message": self.system_message,
        }


@dataclass
class VoiceInputController:
    """
    Speech input state for one chat

    Interim transcripts only preview the draft; a final transcript replaces
    it. Nothing is sent automatically, the draft is handed to the normal
    send path by the caller.
    """

    supported: bool = True
    listening: bool = False
    draft: str = ""
    _last: VoiceFeedback = field(default_factory=VoiceFeedback, repr=False)

    def handle(
        self,
        event: VoiceEventType | str,
        results: list[SpeechResult] | None = None,
        error: str | None = None,
    ) -> VoiceFeedback:
        """Dispatch one recognition event"""
        event = VoiceEventType(event)
        if not self.supported:
            return self._feedback("", system_message=UNSUPPORTED_TIP)
        if event is VoiceEventType.START:
            return self.on_start()
        if event is VoiceEventType.RESULT:
            return self.on_result(results or [])
        if event is VoiceEventType.END:
            return self.on_end()
        return self.on_error(error or "")

    def on_start(self) -> VoiceFeedback:
        self.listening = True
        return self._feedback(STATUS_LISTENING, header_status=HEADER_LISTENING)

    def on_result(self, results: list[SpeechResult]) -> VoiceFeedback:
        final = "".join(r.transcript for r in results if r.is_final)
        interim = "".join(r.transcript for r in results if not r.is_final)

        if final:
            self.draft = final
            return self._feedback(STATUS_GOT_IT, header_status=self._header())
        if interim:
            self.draft = interim
            return self._feedback(STATUS_LISTENING, header_status=self._header())
        return self._feedback(self._last.status, header_status=self._header())

    def on_end(self) -> VoiceFeedback:
        self.listening = False
        status = STATUS_REVIEW if len(self.draft.strip()) > REVIEW_HINT_MIN_LENGTH else ""
        return self._feedback(status)

    def on_error(self, error: str) -> VoiceFeedback:
        self.listening = False
        status = ERROR_STATUSES.get(error, DEFAULT_ERROR_STATUS)
        help_text = PERMISSION_HELP if error == "not-allowed" else None
        return self._feedback(status, system_message=help_text)

    def take_draft(self) -> str:
        """Hand over the draft text and clear it"""
        draft, self.draft = self.draft.strip(), ""
        return draft

    def _header(self) -> str:
        return HEADER_LISTENING if self.listening else HEADER_READY

    def _feedback(
        self,
        status: str,
        header_status: str = HEADER_READY,
        system_message: str | None = None,
    ) -> VoiceFeedback:
        self._last = VoiceFeedback(
            status=status,
            header_status=header_status,
            draft=self.draft,
            listening=self.listening,
            system_message=system_message,
        )
        return self._last
