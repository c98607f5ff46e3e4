"""``0:<json>\\n`` 行协议的编解码。

服务端把一条回复编码为一行；消费端按换行切分，只处理以 ``0:`` 开头的行，
单行 JSON 解析失败时跳过该行而不是报错。
"""

import json
from typing import Iterable, Iterator, List

ENVELOPE_PREFIX = "0:"
# 产出回复的层级，随响应头下发，消费端不必从回复内容里猜
REPLY_TIER_HEADER = "X-Reply-Tier"


def encode_envelope(text: str) -> str:
    return f"{ENVELOPE_PREFIX}{json.dumps({'content': text}, ensure_ascii=False, separators=(',', ':'))}\n"


def decode_line(line: str) -> str:
    """解析单行，返回其中的 content；不是回复行或无法解析时返回空串。"""

    if not line.startswith(ENVELOPE_PREFIX):
        return ""
    try:
        data = json.loads(line[len(ENVELOPE_PREFIX):])
    except json.JSONDecodeError:
        return ""
    if not isinstance(data, dict):
        return ""
    content = data.get("content")
    return content if isinstance(content, str) else ""


class EnvelopeDecoder:
    """增量解码器：数据块可能在任意位置被切断，未结束的行留到下一块再处理。"""

    def __init__(self):
        self._buffer = ""

    def feed(self, chunk: str) -> Iterator[str]:
        self._buffer += chunk
        *lines, self._buffer = self._buffer.split("\n")
        for line in lines:
            content = decode_line(line)
            if content:
                yield content

    def close(self) -> Iterator[str]:
        rest, self._buffer = self._buffer, ""
        content = decode_line(rest)
        if content:
            yield content


def decode_envelope(chunks: Iterable[str]) -> str:
    """把整段响应（或按块到达的响应）还原为回复文本。"""

    if isinstance(chunks, str):
        chunks = [chunks]
    decoder = EnvelopeDecoder()
    parts: List[str] = []
    for chunk in chunks:
        parts.extend(decoder.feed(chunk))
    parts.extend(decoder.close())
    return "".join(parts)
