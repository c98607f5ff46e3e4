"""提示词模板加载工具。

按语言(locale) 从 prompts/<locale> 目录读取各层级的提示词模板，
模板中的 ``{message}`` 会被替换为学生最新一条消息。
"""

from functools import lru_cache
from pathlib import Path


PROMPTS_DIR = Path(__file__).resolve().parent

# 备用模型按“剧本”续写，靠这两个角色标记切出老师的台词
TEACHER_MARKER = "English Teacher:"
STUDENT_MARKER = "Student:"

_TEMPLATE_FILES = {
    "primary": "tutor_primary.md",
    "secondary": "tutor_secondary.md",
}


@lru_cache(maxsize=None)
def load_prompt_template(tier: str, locale: str = "en") -> str:
    """读取某一层级的提示词模板，去掉文件末尾换行。"""

    fname = PROMPTS_DIR / locale / _TEMPLATE_FILES[tier]
    return fname.read_text(encoding="utf-8").rstrip("\n")


def build_prompt(tier: str, message: str, locale: str = "en") -> str:
    return load_prompt_template(tier, locale).format(message=message)
