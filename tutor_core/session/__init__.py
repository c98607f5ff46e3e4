from tutor_core.session.capabilities import PlaybackSink, TranscriptSource
from tutor_core.session.practice_session import (
    CONNECTION_ISSUE_REPLY,
    PracticeSession,
    SessionStatus,
)

__all__ = [
    "CONNECTION_ISSUE_REPLY",
    "PlaybackSink",
    "PracticeSession",
    "SessionStatus",
    "TranscriptSource",
]
