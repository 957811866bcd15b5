#!/usr/bin/env python3
"""
GEMSCRIBE DUMP SINK
-------------------
Prints each attribute as it is extracted. Handy for eyeballing what the
parser sees in a gem before feeding a repository writer.

Author: Gemscribe Team
Date: 2026-10-19
"""

from typing import Optional, Tuple

from rich.console import Console
from rich.markup import escape

from gemscribe.core.events import GemEventSink
from gemscribe.core.models import Constraint, Dependency


class DumpSink(GemEventSink):

    def __init__(self, console: Optional[Console] = None, error_console: Optional[Console] = None,
                 show_dependencies: bool = True):
        self.console = console or Console()
        self.error_console = error_console or Console(stderr=True)
        self.show_dependencies = show_dependencies

    def parse_start(self) -> None:
        self.console.print("start!")

    def gem_start(self, path: str) -> None:
        self.console.print(f"[bold cyan]{escape(path)}[/bold cyan]")

    def attribute(self, key: str, value: str) -> None:
        self.console.print(f"  {escape(key)} = {escape(value)}", highlight=False)

    def dependency(self, dependency: Dependency, constraints: Tuple[Constraint, ...]) -> None:
        if not self.show_dependencies:
            return
        for constraint in constraints:
            self.console.print(f"  requires {escape(str(constraint))}", highlight=False)

    def error(self, message: str) -> None:
        self.error_console.print(f"[bold red]Error:[/bold red] {escape(message)}")

    def parse_end(self) -> None:
        self.console.print("end!")
