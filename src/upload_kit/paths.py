"""路径规范化

把调用方传入的目录片段（可能包含 `.`、`..`、混用的分隔符）折叠为规范路径，
结果永远不会越过拼接它的根目录。
"""

import re

SEPARATOR = "/"

_SPLIT_RE = re.compile(r"[/\\]+")


def normalize(path: str, confine: bool = False) -> str:
    """规范化路径

    Args:
        path: 原始路径，`/` 与 `\\` 均视为分隔符
        confine: 为 True 时结果以 `/` 开头（形如绝对路径）

    `..` 只会弹出已保留的片段，栈为空时直接丢弃。
    """
    parts: list[str] = []
    for part in _SPLIT_RE.split(path or ""):
        if not part or part == ".":
            continue
        if part == "..":
            if parts:
                parts.pop()
            continue
        parts.append(part)

    joined = SEPARATOR.join(parts)
    if confine:
        return SEPARATOR + joined
    return joined
