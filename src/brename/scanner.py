"""文件列表器

使用 pathlib 扫描目录（可选递归），生成 FileEntry 列表。
"""

from __future__ import annotations

import logging
from pathlib import Path

from brename.models import FileEntry

logger = logging.getLogger(__name__)

# 默认不排除任何扩展名
DEFAULT_EXCLUDE_EXTS: set[str] = set()


def normalize_exts(raw: str | None) -> set[str]:
    """解析逗号分隔的扩展名列表

    Args:
        raw: 如 ".json,txt"

    Returns:
        小写且带点的扩展名集合
    """
    if not raw:
        return set()
    exts = set()
    for ext in raw.split(","):
        ext = ext.strip().lower()
        if ext:
            exts.add(ext if ext.startswith(".") else f".{ext}")
    return exts


class FileLister:
    """文件列表器 - 列出目录下的普通文件"""

    def __init__(
        self,
        include_hidden: bool = True,
        exclude_exts: set[str] | None = None,
    ):
        """初始化列表器

        Args:
            include_hidden: 是否包含隐藏文件/目录（以 . 开头）
            exclude_exts: 要排除的文件扩展名集合（如 {".json", ".txt"}）
        """
        self.include_hidden = include_hidden
        self.exclude_exts = (
            {e.lower() for e in exclude_exts}
            if exclude_exts is not None
            else set(DEFAULT_EXCLUDE_EXTS)
        )

    def list(self, directory: Path, recursive: bool = False) -> list[FileEntry]:
        """列出目录中的文件

        Args:
            directory: 目录路径
            recursive: 是否包含子目录中的文件

        Returns:
            FileEntry 列表（按路径排序）

        Raises:
            FileNotFoundError: 目录不存在
            NotADirectoryError: 路径不是目录
            PermissionError: 目录不可读
        """
        directory = Path(directory).expanduser().resolve()

        if not directory.exists():
            raise FileNotFoundError(f"目录不存在: {directory}")

        if not directory.is_dir():
            raise NotADirectoryError(f"路径不是目录: {directory}")

        # 根目录不可读时直接抛出
        items = list(directory.iterdir())

        entries: list[FileEntry] = []
        self._collect(items, recursive, entries)
        entries.sort(key=lambda e: str(e.path))
        logger.debug(f"列出 {directory}: {len(entries)} 个文件")
        return entries

    def _collect(
        self, items: list[Path], recursive: bool, entries: list[FileEntry]
    ) -> None:
        for item in items:
            if not self.include_hidden and item.name.startswith("."):
                continue

            try:
                if item.is_dir():
                    # 不跟随目录符号链接，避免循环
                    if recursive and not item.is_symlink():
                        self._collect(list(item.iterdir()), recursive, entries)
                elif item.is_file():
                    if item.suffix.lower() in self.exclude_exts:
                        continue
                    entries.append(
                        FileEntry(name=item.name, path=item, directory=item.parent)
                    )
            except PermissionError:
                logger.warning(f"权限不足，跳过: {item}")
            except OSError as e:
                logger.warning(f"无法访问 {item}: {e}")


def list_files(directory: Path, recursive: bool = False) -> list[FileEntry]:
    """使用默认设置列出文件"""
    return FileLister().list(directory, recursive=recursive)
