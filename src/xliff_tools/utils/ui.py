"""Bilingual console output for the command line tools."""

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

console = Console()


class BilingualMessage:
    """Display messages in both Chinese and English."""

    @staticmethod
    def success(zh: str, en: str, title_zh: str = "成功", title_en: str = "Success") -> None:
        text = Text()
        text.append(f"{zh}\n", style="green")
        text.append(en, style="dim green")
        console.print(Panel(text, title=f"{title_zh} / {title_en}", border_style="green"))

    @staticmethod
    def info(zh: str, en: str, title_zh: str = "信息", title_en: str = "Info") -> None:
        text = Text()
        text.append(f"{zh}\n", style="cyan")
        text.append(en, style="dim cyan")
        console.print(Panel(text, title=f"{title_zh} / {title_en}", border_style="cyan"))


def show_state_table(name: str, counts: dict[str, int]) -> None:
    """
    Print a per-state unit count table.

    Args:
        name: Document name shown as the table title
        counts: state -> number of trans-units
    """
    table = Table(title=name)
    table.add_column("状态 / State", style="cyan")
    table.add_column("数量 / Units", justify="right")
    for state in sorted(counts):
        table.add_row(state, str(counts[state]))
    table.add_row("total", str(sum(counts.values())), style="bold")
    console.print(table)
