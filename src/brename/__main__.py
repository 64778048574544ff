"""brename CLI 入口点"""

import io
import sys

from brename.cli import app


def setup_utf8_output():
    """Windows 下强制 stdout/stderr 使用 UTF-8，避免中文输出乱码"""
    if sys.platform != "win32":
        return
    for name in ("stdout", "stderr"):
        stream = getattr(sys, name)
        if hasattr(stream, "buffer"):
            setattr(
                sys,
                name,
                io.TextIOWrapper(
                    stream.buffer,
                    encoding="utf-8",
                    errors="replace",
                    line_buffering=True,
                ),
            )


def main():
    """CLI 主入口"""
    setup_utf8_output()
    app()


if __name__ == "__main__":
    main()
