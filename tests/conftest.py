"""测试公共 fixture"""

from pathlib import Path

import pytest


@pytest.fixture
def make_files(tmp_path: Path):
    """在 tmp_path 下创建文件，返回根目录

    用法: make_files("a.txt", "sub/b.txt")
    """

    def _make(*names: str) -> Path:
        for name in names:
            path = tmp_path / name
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(name, encoding="utf-8")
        return tmp_path

    return _make
