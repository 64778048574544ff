"""brename CLI

使用 typer 实现命令行界面。
"""

import logging
from pathlib import Path
from typing import Annotated, Optional

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.prompt import Confirm, Prompt
from rich.table import Table

from brename.clipboard import ClipboardHandler
from brename.models import (
    BatchSummary,
    OutcomeStatus,
    RenameMode,
    RenameOutcome,
    RenamePreview,
    RenamePreviewEntry,
    RenameRule,
)
from brename.scanner import FileLister, normalize_exts
from brename.session import RenameSession

app = typer.Typer(
    name="brename",
    help="文件批量重命名工具 - 支持添加前缀、后缀和替换，先预览再执行",
    no_args_is_help=True,
)
console = Console()
# 日志和状态信息，避免混入 --json 输出
err_console = Console(stderr=True)

MODE_LABELS = {
    RenameMode.PREPEND: "添加到开头",
    RenameMode.APPEND: "添加到结尾",
    RenameMode.REPLACE: "替换",
}

STATUS_LABELS = {
    OutcomeStatus.SUCCEEDED: "[green]成功[/green]",
    OutcomeStatus.FAILED: "[red]失败[/red]",
    OutcomeStatus.CONFLICT: "[yellow]冲突[/yellow]",
}

# ============ 公共选项 ============

DirectoryArg = Annotated[Path, typer.Argument(help="要处理的目录")]
RecursiveOpt = Annotated[
    bool, typer.Option("-r", "--recursive", help="包含子文件夹中的文件")
]
SkipHiddenOpt = Annotated[
    bool, typer.Option("--skip-hidden", help="跳过隐藏文件和目录")
]
ExcludeOpt = Annotated[
    Optional[str],
    typer.Option("-e", "--exclude", help="排除的扩展名，逗号分隔（如 .json,.txt）"),
]
ModeOpt = Annotated[
    RenameMode, typer.Option("-m", "--mode", help="重命名方式")
]
MatchOpt = Annotated[
    str, typer.Option("-t", "--text", help="添加的文本或要查找的文本")
]
ReplacementOpt = Annotated[
    str, typer.Option("-w", "--with", help="替换为（仅 replace 模式）")
]
RuleFileOpt = Annotated[
    Optional[Path],
    typer.Option("--rule", help="从 JSON 文件读取规则（覆盖 -m/-t/-w）"),
]
RuleClipboardOpt = Annotated[
    bool,
    typer.Option("--rule-from-clipboard", help="从剪贴板读取规则 JSON"),
]


@app.callback()
def main(
    verbose: Annotated[
        bool, typer.Option("-v", "--verbose", help="输出调试日志")
    ] = False,
) -> None:
    """配置日志"""
    logger = logging.getLogger("brename")
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    if not any(isinstance(h, RichHandler) for h in logger.handlers):
        logger.addHandler(RichHandler(console=err_console, show_path=False))


def _build_rule(
    mode: RenameMode,
    match_text: str,
    replacement_text: str,
    rule_file: Path | None,
    rule_from_clipboard: bool,
) -> RenameRule:
    """根据命令行选项构造规则"""
    try:
        if rule_file:
            return RenameRule.model_validate_json(rule_file.read_text(encoding="utf-8"))
        if rule_from_clipboard:
            return ClipboardHandler.paste_rule()
    except (OSError, ValidationError) as e:
        console.print(f"[red]规则读取错误:[/red] {escape(str(e))}")
        raise typer.Exit(1)
    return RenameRule(
        mode=mode, match_text=match_text, replacement_text=replacement_text
    )


def _open_session(
    directory: Path,
    recursive: bool,
    skip_hidden: bool,
    exclude: str | None,
    rule: RenameRule | None = None,
) -> RenameSession:
    """创建会话并加载文件，失败时退出"""
    lister = FileLister(
        include_hidden=not skip_hidden,
        exclude_exts=normalize_exts(exclude),
    )
    session = RenameSession(recursive=recursive, rule=rule, lister=lister)
    if not session.select_folder(directory):
        console.print(f"[red]错误:[/red] {escape(session.error or '无法列出文件')}")
        raise typer.Exit(1)
    return session


def _location(entry_path: Path, root: Path | None) -> str:
    if root is None:
        return str(entry_path.parent)
    try:
        rel = entry_path.parent.relative_to(root.resolve())
    except ValueError:
        return str(entry_path.parent)
    return "." if str(rel) == "." else str(rel)


def render_preview(
    preview: list[RenamePreviewEntry],
    root: Path | None = None,
    show_location: bool = False,
) -> Table:
    """生成预览表格，有变化的行高亮"""
    changed = sum(1 for p in preview if p.is_changed)
    table = Table(title=f"预览（{len(preview)} 个文件，{changed} 个将被重命名）")
    if show_location:
        table.add_column("位置", style="cyan")
    table.add_column("原文件名")
    table.add_column("新文件名")

    for p in preview:
        row = [escape(p.original_name), escape(p.proposed_name)]
        if show_location:
            row.insert(0, escape(_location(p.source_path, root)))
        table.add_row(*row, style="yellow" if p.is_changed else "dim")
    return table


def render_outcomes(outcomes: list[RenameOutcome]) -> Table:
    """生成执行结果表格"""
    table = Table(title="执行结果")
    table.add_column("原文件")
    table.add_column("新文件")
    table.add_column("状态")
    table.add_column("详情")

    for o in outcomes:
        table.add_row(
            escape(o.source_path.name),
            escape(o.destination_path.name) if o.destination_path else "-",
            STATUS_LABELS[o.status],
            escape(o.error_detail or ""),
        )
    return table


def report_outcomes(outcomes: list[RenameOutcome]) -> BatchSummary:
    """输出执行结果和统计"""
    summary = BatchSummary.from_outcomes(outcomes)
    if not summary.all_succeeded:
        console.print(render_outcomes(outcomes))
    console.print(f"\n[green]成功:[/green] {summary.succeeded}")
    console.print(f"[red]失败:[/red] {summary.failed}")
    console.print(f"[yellow]冲突:[/yellow] {summary.conflicts}")
    if not summary.all_succeeded:
        console.print("[yellow]部分文件未能重命名，详见上表[/yellow]")
    return summary


@app.command("list")
def list_command(
    directory: DirectoryArg,
    recursive: RecursiveOpt = False,
    skip_hidden: SkipHiddenOpt = False,
    exclude: ExcludeOpt = None,
) -> None:
    """列出目录中的文件"""
    session = _open_session(directory, recursive, skip_hidden, exclude)

    table = Table(title=f"{session.directory}（{len(session.files)} 个文件）")
    table.add_column("位置", style="cyan")
    table.add_column("文件名")
    for entry in session.files:
        table.add_row(
            escape(_location(entry.path, session.directory)), escape(entry.name)
        )
    console.print(table)


@app.command()
def preview(
    directory: DirectoryArg,
    mode: ModeOpt = RenameMode.REPLACE,
    match_text: MatchOpt = "",
    replacement_text: ReplacementOpt = "",
    rule_file: RuleFileOpt = None,
    rule_from_clipboard: RuleClipboardOpt = False,
    recursive: RecursiveOpt = False,
    skip_hidden: SkipHiddenOpt = False,
    exclude: ExcludeOpt = None,
    as_json: Annotated[
        bool, typer.Option("--json", help="以 JSON 输出到标准输出")
    ] = False,
    copy: Annotated[
        bool, typer.Option("--copy", help="将预览 JSON 复制到剪贴板")
    ] = False,
    output: Annotated[
        Optional[Path],
        typer.Option("-o", "--output", help="将预览 JSON 保存到文件"),
    ] = None,
) -> None:
    """预览重命名结果，不修改任何文件"""
    rule = _build_rule(
        mode, match_text, replacement_text, rule_file, rule_from_clipboard
    )
    if copy and not ClipboardHandler.is_available():
        err_console.print("[red]错误:[/red] 剪贴板不可用")
        raise typer.Exit(1)

    session = _open_session(directory, recursive, skip_hidden, exclude, rule)
    entries = session.preview
    export = RenamePreview(rule=session.rule, entries=entries)

    if as_json:
        typer.echo(export.model_dump_json(indent=2))
    else:
        console.print(render_preview(entries, session.directory, recursive))
    status = err_console if as_json else console

    if output:
        output.write_text(export.model_dump_json(indent=2), encoding="utf-8")
        status.print(f"[green]✓[/green] 预览已保存到: {escape(str(output))}")
    if copy:
        ClipboardHandler.copy_preview(export)
        status.print("[green]✓[/green] 预览已复制到剪贴板")


@app.command()
def apply(
    directory: DirectoryArg,
    mode: ModeOpt = RenameMode.REPLACE,
    match_text: MatchOpt = "",
    replacement_text: ReplacementOpt = "",
    rule_file: RuleFileOpt = None,
    rule_from_clipboard: RuleClipboardOpt = False,
    recursive: RecursiveOpt = False,
    skip_hidden: SkipHiddenOpt = False,
    exclude: ExcludeOpt = None,
    yes: Annotated[
        bool, typer.Option("-y", "--yes", help="不确认直接执行")
    ] = False,
) -> None:
    """预览并执行批量重命名"""
    rule = _build_rule(
        mode, match_text, replacement_text, rule_file, rule_from_clipboard
    )
    session = _open_session(directory, recursive, skip_hidden, exclude, rule)
    entries = session.preview
    console.print(render_preview(entries, session.directory, recursive))

    operations = session.pending_operations
    if not operations:
        console.print("[yellow]没有需要重命名的文件[/yellow]")
        return

    if not yes and not typer.confirm(f"重命名 {len(operations)} 个文件？"):
        console.print("已取消")
        raise typer.Abort()

    outcomes = session.apply()
    summary = report_outcomes(outcomes)
    if not summary.all_succeeded:
        raise typer.Exit(1)


def _ask_folder(session: RenameSession) -> bool:
    """循环询问文件夹，直到加载成功或用户取消"""
    while True:
        answer = Prompt.ask("文件夹路径（留空取消）", default="", console=console)
        path = Path(answer.strip()).expanduser() if answer.strip() else None
        if path is None:
            return False
        if session.select_folder(path):
            return True
        console.print(f"[red]错误:[/red] {escape(session.error or '')}")


@app.command()
def interactive(
    directory: Annotated[
        Optional[Path], typer.Argument(help="起始目录（可选）")
    ] = None,
    recursive: RecursiveOpt = False,
) -> None:
    """交互模式：选择文件夹、编辑规则、实时预览、确认执行"""
    session = RenameSession(recursive=recursive)

    if directory is not None and not session.select_folder(directory):
        console.print(f"[red]错误:[/red] {escape(session.error or '')}")
        directory = None
    if directory is None and not _ask_folder(session):
        console.print("已取消")
        return

    while True:
        rule = session.rule
        console.print(render_preview(session.preview, session.directory, session.recursive))
        console.print(
            f"文件夹: [cyan]{escape(str(session.directory))}[/cyan]  "
            f"子文件夹: {'是' if session.recursive else '否'}  "
            f"方式: {MODE_LABELS[rule.mode]}  "
            f"文本: {escape(repr(rule.match_text))}  "
            f"替换为: {escape(repr(rule.replacement_text))}"
        )
        choice = Prompt.ask(
            escape("[m]方式 [t]文本 [w]替换为 [r]子文件夹 [f]文件夹 [a]执行 [q]退出"),
            choices=["m", "t", "w", "r", "f", "a", "q"],
            default="q",
            console=console,
        )

        if choice == "q":
            return
        if choice == "m":
            mode = Prompt.ask(
                "方式",
                choices=[m.value for m in RenameMode],
                default=rule.mode.value,
                console=console,
            )
            session.update_rule(mode=mode)
        elif choice == "t":
            session.update_rule(
                match_text=Prompt.ask("文本", default="", console=console)
            )
        elif choice == "w":
            session.update_rule(
                replacement_text=Prompt.ask("替换为", default="", console=console)
            )
        elif choice == "r":
            if not session.set_recursive(not session.recursive):
                console.print(f"[red]错误:[/red] {escape(session.error or '')}")
        elif choice == "f":
            _ask_folder(session)
        elif choice == "a":
            if not session.has_changes:
                console.print("[yellow]没有需要重命名的文件[/yellow]")
                continue
            count = len(session.pending_operations)
            if Confirm.ask(f"重命名 {count} 个文件？", console=console):
                report_outcomes(session.apply())


if __name__ == "__main__":
    app()
