# -*- coding: utf-8 -*-
"""
版本比较

宿主插件头部中的版本字符串并不总是合法的 PEP 440 版本，
这里提供一个永不抛出异常的全序比较：
- 合法的纯发布版本交给 packaging 规范化
- 其余字符串取开头的点分数字段，剩余部分按段做字典序比较
- 缺失的末尾数字段视为 0，缺失的版本视为 "0"
"""

import re
from typing import NamedTuple, Optional, Tuple, Union

from packaging.version import InvalidVersion, Version

# 开头的点分数字部分，允许 v 前缀
_NUMERIC_PREFIX = re.compile(r"^[vV]?(\d+(?:\.\d+)*)")
_SEGMENT_SEPARATORS = re.compile(r"[.\-+_]+")
_INT_CHUNK = 1000


class VersionKey(NamedTuple):
    """
    可比较的版本键

    release 已去掉末尾的 0，因此元组的自然顺序即为补零后的逐段数值比较；
    release 相同时再比较 suffix 的字符串段。
    """

    release: Tuple[int, ...]
    suffix: Tuple[str, ...] = ()


def _trim_zeros(release: Tuple[int, ...]) -> Tuple[int, ...]:
    parts = list(release)
    while parts and parts[-1] == 0:
        parts.pop()
    return tuple(parts)


def _digits_to_int(digits: str) -> int:
    """分块转换，不受 int(str) 的位数限制"""
    value = 0
    for start in range(0, len(digits), _INT_CHUNK):
        chunk = digits[start : start + _INT_CHUNK]
        value = value * 10 ** len(chunk) + int(chunk)
    return value


def _pep440_release(text: str) -> Optional[Tuple[int, ...]]:
    """只有纯发布版本才走 packaging，预发布/后发布/本地版本按段比较"""
    try:
        parsed = Version(text)
    except (InvalidVersion, ValueError):
        # 超长数字段会触发 int 的位数限制
        return None

    if (
        parsed.epoch
        or parsed.pre is not None
        or parsed.post is not None
        or parsed.dev is not None
        or parsed.local is not None
    ):
        return None
    return parsed.release


def parse_version(value: Union[str, int, float, None]) -> VersionKey:
    """
    将版本字符串解析为 VersionKey

    Args:
        value: 版本字符串，None 或空字符串视为 "0"

    Returns:
        版本键
    """
    text = "" if value is None else str(value).strip()
    if not text:
        text = "0"

    release = _pep440_release(text)
    if release is not None:
        return VersionKey(_trim_zeros(release))

    match = _NUMERIC_PREFIX.match(text)
    if match:
        numbers = tuple(_digits_to_int(part) for part in match.group(1).split("."))
        remainder = text[match.end():]
    else:
        numbers = ()
        remainder = text

    suffix = tuple(seg for seg in _SEGMENT_SEPARATORS.split(remainder) if seg)
    return VersionKey(_trim_zeros(numbers), suffix)


def compare_versions(left: Union[str, None], right: Union[str, None]) -> int:
    """
    比较两个版本字符串

    Returns:
        -1 表示 left < right，0 表示相等，1 表示 left > right
    """
    left_key = parse_version(left)
    right_key = parse_version(right)
    if left_key < right_key:
        return -1
    if left_key > right_key:
        return 1
    return 0


def version_lt(left: Union[str, None], right: Union[str, None]) -> bool:
    """left < right"""
    return compare_versions(left, right) < 0


def version_ge(left: Union[str, None], right: Union[str, None]) -> bool:
    """left >= right"""
    return compare_versions(left, right) >= 0
