# src/gemscribe/cli/formatter.py
import json
from typing import List

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from gemscribe.core.models import GemRecord

console = Console()


class GemFormatter:
    """
    Renders collected gem records for the terminal, or as JSON for scripts.
    """

    def __init__(self, out: Console = None):
        self.console = out or console

    def print_records_table(self, records: List[GemRecord], failed: List[GemRecord]):
        table = Table(title="Gemscribe Extraction Report", show_lines=True, header_style="bold magenta")
        table.add_column("Package", style="cyan")
        table.add_column("Version", style="white")
        table.add_column("Requires")
        table.add_column("Result", justify="center")

        for r in records:
            requires = "\n".join(escape(str(c)) for c in r.constraints) or "[dim]-[/dim]"
            result_icon = "⚠️" if r.errors else "✅"
            table.add_row(escape(r.package_name), escape(r.version or "?"), requires, result_icon)

        for r in failed:
            table.add_row(escape(r.path), "[red]-[/red]", "[dim]-[/dim]", "❌")

        self.console.print(table)

    def print_summary(self, records: List[GemRecord], failed: List[GemRecord], exit_code: int):
        warnings = sum(len(r.errors) for r in records)
        self.console.print(Panel(
            f"[bold white]Summary Report[/bold white]\n"
            f"════════════════════════════════════════\n"
            f"Gems Extracted:  [green]{len(records)}[/green]\n"
            f"Gems Failed:     [red]{len(failed)}[/red]\n"
            f"Item Warnings:   [yellow]{warnings}[/yellow]\n"
            f"Exit Status:     {exit_code}",
            border_style="dim"
        ))

    def print_json(self, records: List[GemRecord], failed: List[GemRecord]):
        payload = {
            "records": [r.to_dict() for r in records],
            "failed": [r.to_dict() for r in failed],
        }
        # Plain print so the output stays machine-readable
        print(json.dumps(payload, indent=2))
