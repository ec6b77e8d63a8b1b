"""存储 key 生成

生成格式: `<folder>/<slug>-<token>.<ext>`
"""

import re
import secrets
import time
import unicodedata
from collections.abc import Callable

from .paths import SEPARATOR, normalize

_NON_ALNUM_RE = re.compile(r"[^a-z0-9]+")
_EXT_RE = re.compile(r"[^a-z0-9]")
_BASENAME_RE = re.compile(r"[/\\]")


def slugify(text: str, separator: str = "-") -> str:
    """转写为 ASCII 并折叠标点/空白，如 "My Photo" -> "my-photo" """
    ascii_text = (
        unicodedata.normalize("NFKD", text).encode("ascii", "ignore").decode("ascii")
    )
    return _NON_ALNUM_RE.sub(separator, ascii_text.lower()).strip(separator)


def split_filename(filename: str) -> tuple[str, str]:
    """拆分文件名为 (base, ext)，ext 已小写；无扩展名时 ext 为空"""
    name = _BASENAME_RE.split(filename or "")[-1]
    if "." not in name:
        return name, ""
    base, _, ext = name.rpartition(".")
    return base, _EXT_RE.sub("", ext.lower())


def unique_token() -> str:
    """时间 + 随机数组成的唯一标识

    前 13 位为微秒时间戳（十六进制），后 6 位为随机熵。
    """
    micros = time.time_ns() // 1000
    return f"{micros:013x}{secrets.token_hex(3)}"


class KeyGenerator:
    """根据原始文件名与目标目录生成唯一 key

    用法:
        keys = KeyGenerator()
        keys.generate("My Photo.PNG", "/avatars/")  # avatars/my-photo-<token>.png
    """

    def __init__(self, token_factory: Callable[[], str] = unique_token):
        self._token_factory = token_factory

    def generate(self, filename: str, folder: str = SEPARATOR) -> str:
        base, ext = split_filename(filename)
        token = self._token_factory()
        slug = slugify(base)
        stem = f"{slug}-{token}" if slug else token
        name = f"{stem}.{ext}" if ext else stem

        prefix = normalize(folder)
        if prefix:
            return f"{prefix}{SEPARATOR}{name}"
        return name
