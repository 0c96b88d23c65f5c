"""
Rich terminal output utilities for the equalsguard CLI.

Provides tables and syntax-highlighted expressions, with a plain
mode (no markup, no colour) for ``--no-rich`` and piped output.
"""

from typing import List, Optional

from rich.console import Console
from rich.markup import escape
from rich.syntax import Syntax
from rich.table import Table
from rich.text import Text

from equalsguard.analysis.models import EqualsFinding


class RichOutputManager:
    """Manages rich terminal output with a plain-text mode."""

    def __init__(self, use_rich: bool = True, console: Optional[Console] = None):
        """Initialize the output manager."""
        self.use_rich = use_rich
        if console is not None:
            self.console = console
        elif use_rich:
            self.console = Console()
        else:
            self.console = Console(no_color=True, highlight=False, emoji=False)

    def _plain(self, text: str) -> None:
        self.console.print(text, markup=False, highlight=False)

    def print_section(self, title: str) -> None:
        """Print a section separator."""
        if self.use_rich:
            self.console.rule(f"[bold]{title}[/bold]", style="blue")
        else:
            self._plain(f"\n--- {title} ---")

    def print_success(self, message: str) -> None:
        if self.use_rich:
            self.console.print(f"[green]✓[/green] {escape(message)}")
        else:
            self._plain(f"OK {message}")

    def print_warning(self, message: str) -> None:
        if self.use_rich:
            self.console.print(f"[yellow]⚠[/yellow] {escape(message)}")
        else:
            self._plain(f"WARNING {message}")

    def print_error(self, message: str) -> None:
        if self.use_rich:
            self.console.print(f"[red]✗[/red] {escape(message)}")
        else:
            self._plain(f"ERROR {message}")

    def create_table(self, title: str, columns: List[str]) -> Table:
        """Create a table with a bold header row."""
        table = Table(title=title, show_header=True, header_style="bold blue" if self.use_rich else None)
        for column in columns:
            table.add_column(column)
        return table

    def print_table(self, table: Table) -> None:
        self.console.print(table)

    def print_expression(self, expression: str, title: Optional[str] = None) -> None:
        """Print a Java expression, highlighted in rich mode."""
        if title:
            self.print_section(title)

        if self.use_rich:
            self.console.print(Syntax(expression, "java", theme="monokai", word_wrap=True))
        else:
            self._plain(expression)

    def print_findings(self, findings: List[EqualsFinding], title: str = "Replaceable equality checks") -> None:
        """Print findings as a table."""
        table = self.create_table(title, ["Source", "Form", "Expression", "Replacement"])
        for finding in findings:
            table.add_row(
                Text(finding.source_name),
                Text(finding.form.value),
                Text(finding.span_text),
                Text(finding.replacement),
            )
        self.print_table(table)


# Global instance
rich_output = RichOutputManager()


def set_rich_enabled(enabled: bool) -> None:
    """Enable or disable rich output globally."""
    global rich_output
    rich_output = RichOutputManager(use_rich=enabled)


def get_rich_output() -> RichOutputManager:
    """Get the global rich output manager."""
    return rich_output
