"""学习者词汇表。

为前端的单词弹窗提供数据：英文词、越南语释义、IPA 音标。
查词前会统一小写并去掉常见标点，因此 "Hello!" 与 "hello" 命中同一条。
"""

import re
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple


_PUNCTUATION = re.compile(r"[.,!?;:\"'()]")


@dataclass(frozen=True)
class VocabularyEntry:
    word: str
    translation: str
    pronunciation: str


def _entries(*rows: Tuple[str, str, str]) -> Dict[str, VocabularyEntry]:
    return {word: VocabularyEntry(word, translation, ipa) for word, translation, ipa in rows}


VOCABULARY: Dict[str, VocabularyEntry] = _entries(
    ("hello", "xin chào", "/həˈloʊ/"),
    ("good", "tốt", "/ɡʊd/"),
    ("morning", "buổi sáng", "/ˈmɔːrnɪŋ/"),
    ("how", "như thế nào", "/haʊ/"),
    ("are", "là", "/ɑːr/"),
    ("you", "bạn", "/juː/"),
    ("today", "hôm nay", "/təˈdeɪ/"),
    ("weather", "thời tiết", "/ˈweðər/"),
    ("beautiful", "đẹp", "/ˈbjuːtɪfəl/"),
    ("nice", "đẹp, tốt", "/naɪs/"),
    ("thank", "cảm ơn", "/θæŋk/"),
    ("thanks", "cảm ơn", "/θæŋks/"),
    ("please", "xin vui lòng", "/pliːz/"),
    ("help", "giúp đỡ", "/help/"),
    ("understand", "hiểu", "/ˌʌndərˈstænd/"),
    ("speak", "nói", "/spiːk/"),
    ("learn", "học", "/lɜːrn/"),
    ("practice", "luyện tập", "/ˈpræktɪs/"),
    ("english", "tiếng Anh", "/ˈɪŋɡlɪʃ/"),
    ("language", "ngôn ngữ", "/ˈlæŋɡwɪdʒ/"),
    ("conversation", "cuộc trò chuyện", "/ˌkɑːnvərˈseɪʃən/"),
    ("work", "công việc", "/wɜːrk/"),
    ("study", "học tập", "/ˈstʌdi/"),
    ("family", "gia đình", "/ˈfæməli/"),
    ("friend", "bạn bè", "/frend/"),
    ("like", "thích", "/laɪk/"),
    ("love", "yêu", "/lʌv/"),
    ("food", "thức ăn", "/fuːd/"),
    ("time", "thời gian", "/taɪm/"),
    ("what", "cái gì", "/wʌt/"),
    ("where", "ở đâu", "/wer/"),
    ("when", "khi nào", "/wen/"),
    ("why", "tại sao", "/waɪ/"),
    ("can", "có thể", "/kæn/"),
    ("want", "muốn", "/wɑːnt/"),
    ("need", "cần", "/niːd/"),
    ("know", "biết", "/noʊ/"),
    ("think", "nghĩ", "/θɪŋk/"),
    ("feel", "cảm thấy", "/fiːl/"),
    ("yes", "có", "/jes/"),
    ("no", "không", "/noʊ/"),
    ("sorry", "xin lỗi", "/ˈsɑːri/"),
    ("welcome", "chào mừng", "/ˈwelkəm/"),
    ("goodbye", "tạm biệt", "/ɡʊdˈbaɪ/"),
)


def clean_token(token: str) -> str:
    return _PUNCTUATION.sub("", token.lower())


def lookup(token: str) -> Optional[VocabularyEntry]:
    return VOCABULARY.get(clean_token(token))


def annotate(text: str) -> List[Tuple[str, Optional[VocabularyEntry]]]:
    """按空格切词，每个词附上词汇表条目（没有则为 None），保留原始大小写和标点。"""

    return [(token, lookup(token)) for token in text.split(" ")]
