"""路径规范化测试"""

from pathlib import Path

import pytest

from upload_kit.paths import normalize


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("/avatars/", "avatars"),
        ("a/./b/../c", "a/c"),
        ("a\\b//c", "a/b/c"),
        ("../../etc/passwd", "etc/passwd"),
        ("a/../../b", "b"),
        ("..", ""),
        ("", ""),
        ("./", ""),
    ],
)
def test_normalize_relative(raw, expected):
    assert normalize(raw) == expected


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("uploads", "/uploads"),
        ("\\uploads\\2024\\", "/uploads/2024"),
        ("", "/"),
        ("../..", "/"),
    ],
)
def test_normalize_confined(raw, expected):
    assert normalize(raw, confine=True) == expected


@pytest.mark.parametrize(
    "raw",
    [
        "../secret",
        "a/../../../secret",
        "..\\..\\windows\\system32",
        "./../a/./../..//b/..",
        "/../../../../etc/shadow",
        "x/y/z/../../../../..",
    ],
)
def test_normalize_never_escapes_root(tmp_path: Path, raw):
    root = tmp_path.resolve()
    result = normalize(raw)

    assert ".." not in result.split("/")
    assert (root / result).resolve().is_relative_to(root)
