"""
Voice input controller tests
"""

from galbestfriend.domain.services.voice import (
    HEADER_LISTENING,
    HEADER_READY,
    PERMISSION_HELP,
    STATUS_GOT_IT,
    STATUS_LISTENING,
    STATUS_REVIEW,
    UNSUPPORTED_TIP,
    SpeechResult,
    VoiceEventType,
    VoiceInputController,
)


class TestVoiceInputController:
    def setup_method(self):
        self.controller = VoiceInputController()

    def test_start_listening(self):
        feedback = self.controller.handle("start")

        assert feedback.status == STATUS_LISTENING
        assert feedback.header_status == HEADER_LISTENING
        assert feedback.listening is True

    def test_interim_then_final(self):
        self.controller.handle(VoiceEventType.START)

        interim = self.controller.handle("result", [SpeechResult("he never")])
        final = self.controller.handle(
            "result", [SpeechResult("he never texts back", is_final=True), SpeechResult(" ugh")]
        )

        assert interim.draft == "he never"
        assert interim.status == STATUS_LISTENING
        assert final.draft == "he never texts back"
        assert final.status == STATUS_GOT_IT

    def test_end_hints_review_for_long_draft(self):
        self.controller.handle("start")
        self.controller.handle("result", [SpeechResult("he ignored me again", is_final=True)])

        feedback = self.controller.handle("end")

        assert feedback.status == STATUS_REVIEW
        assert feedback.header_status == HEADER_READY
        assert feedback.listening is False

    def test_end_without_hint_for_short_draft(self):
        self.controller.handle("start")
        self.controller.handle("result", [SpeechResult("hi", is_final=True)])

        assert self.controller.handle("end").status == ""

    def test_errors(self):
        assert self.controller.handle("error", error="no-speech").status == "No speech detected"
        assert self.controller.handle("error", error="network").status == "Try again"

        denied = self.controller.handle("error", error="not-allowed")

        assert denied.status == "Mic access denied"
        assert denied.system_message == PERMISSION_HELP

    def test_unsupported(self):
        controller = VoiceInputController(supported=False)

        feedback = controller.handle("start")

        assert feedback.system_message == UNSUPPORTED_TIP
        assert controller.listening is False

    def test_take_draft_clears(self):
        self.controller.handle("result", [SpeechResult("  miss her  ", is_final=True)])

        assert self.controller.take_draft() == "miss her"
        assert self.controller.draft == ""
