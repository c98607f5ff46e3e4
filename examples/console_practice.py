"""Minimal console practice loop against a running tutor service."""

from tutor_core.session import PracticeSession


class ConsoleTranscript:
    def listen(self):
        text = input("you> ").strip()
        return text or None


if __name__ == "__main__":
    with PracticeSession(transcript_source=ConsoleTranscript()) as session:
        while True:
            try:
                reply = session.listen_and_send()
            except (EOFError, KeyboardInterrupt):
                break
            if reply is None:
                break
            print(f"tutor [{session.status}]>", reply.content)
