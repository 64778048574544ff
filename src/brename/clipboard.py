"""剪贴板处理器

使用 pyperclip 在剪贴板中交换预览和规则 JSON。
"""

import pyperclip

from brename.models import RenamePreview, RenameRule


class ClipboardHandler:
    """剪贴板处理器"""

    @staticmethod
    def copy_preview(preview: RenamePreview) -> str:
        """将预览序列化为 JSON 并复制到剪贴板

        Args:
            preview: 预览结构

        Returns:
            已复制的 JSON 字符串
        """
        json_str = preview.model_dump_json(indent=2)
        pyperclip.copy(json_str)
        return json_str

    @staticmethod
    def paste_rule() -> RenameRule:
        """从剪贴板读取规则 JSON

        Raises:
            pydantic.ValidationError: JSON 格式或结构无效
        """
        return RenameRule.model_validate_json(pyperclip.paste())

    @staticmethod
    def is_available() -> bool:
        try:
            pyperclip.paste()
            return True
        except pyperclip.PyperclipException:
            return False
