#!/usr/bin/env python3
"""
devstrap Status Output
Severity-prefixed messages on the right stream
"""

from typing import Optional

from rich.console import Console
from rich.markup import escape


class StatusLog:
    """Informational output to stdout, errors to stderr"""

    def __init__(self, console: Optional[Console] = None, err_console: Optional[Console] = None):
        self.console = console or Console()
        self.err_console = err_console or Console(stderr=True)

    def info(self, message: str):
        self.console.print(f"[cyan]\\[INFO][/cyan] {escape(message)}")

    def error(self, message: str):
        self.err_console.print(f"[bold red]\\[ERROR][/bold red] {escape(message)}")
