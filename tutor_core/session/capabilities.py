"""会话依赖的平台能力接口。

语音识别和语音合成都由运行平台提供（浏览器、桌面端等），
这里只约定最小接口，具体实现由调用方注入。
"""

from typing import Optional, Protocol


class TranscriptSource(Protocol):
    """语音转文字来源。"""

    def listen(self) -> Optional[str]:
        """阻塞直到得到一段转写文本；没有识别到内容时返回 None。"""
        ...


class PlaybackSink(Protocol):
    """语音播放出口。"""

    def speak(self, text: str, rate: float = 1.0) -> None:
        ...
