# src/osbuild_ks/cli/formatter.py
from typing import Any, Dict, List

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.syntax import Syntax
from rich.table import Table

from osbuild_ks.core.models import Document

# Initialize the Rich console for high-quality terminal output
console = Console()


class KickstartFormatter:
    """
    KickstartFormatter: the visual side of the CLI.
    Renders section tables, section bodies, warnings and the final summary.
    """

    def __init__(self, out: Console = console):
        self.console = out

    def print_header(self, subtitle: str, version: str):
        self.console.print(Panel.fit(
            f"[bold cyan]osbuild-ks v{version}[/bold cyan]\n"
            "══════════════════════════════════════════════════",
            title=f"[bold white]{subtitle}[/bold white]",
            border_style="cyan"
        ))

    def print_section_table(self, document: Document):
        table = Table(title=f"Sections in {escape(document.root.path.name)}", show_lines=True, header_style="bold magenta")
        table.add_column("#", justify="right", style="dim")
        table.add_column("Section", style="cyan")
        table.add_column("Arguments", style="white")
        table.add_column("Lines", justify="right")

        for i, section in enumerate(document.sections, 1):
            table.add_row(str(i), escape(f"%{section.name}") if not section.is_command else "(commands)",
                          escape(" ".join(section.arguments)), str(len(section.body)))

        self.console.print(table)

    def print_section_bodies(self, document: Document):
        for section in document.sections:
            if not section.body:
                continue
            title = "commands" if section.is_command else " ".join([f"%{section.name}"] + section.arguments)
            # Shell is the closest lexer for script and command lines
            syntax = Syntax(section.text.rstrip("\n"), "bash", theme="monokai", line_numbers=True)
            self.console.print(Panel(syntax, title=f"[bold green]{escape(title)}[/bold green]", border_style="green"))

    def print_yaml(self, rendered: str):
        self.console.print(Syntax(rendered, "yaml", theme="ansi_dark", line_numbers=False))

    def show_warnings(self, warnings: List[str]):
        for warning in warnings:
            self.console.print(f"[bold yellow]WARNING:[/bold yellow] {escape(warning)}")

    def print_summary(self, report: Dict[str, Any], summary: Dict[str, Any]):
        if not report["success"]:
            self.console.print(f"[bold red]{report['status']}:[/bold red] {escape(report['error'])}")
        status_color = "green" if report["success"] else "red"
        self.console.print(Panel(
            f"[bold white]Summary Report[/bold white]\n"
            f"════════════════════════════════════════\n"
            f"Files:     {summary['total_files']} ({summary['failed']} failed)\n"
            f"Status:    [{status_color}]{report['status']}[/{status_color}]\n"
            f"Sections:  {report['section_count']}\n"
            f"Commands:  {report['command_count']}\n"
            f"Warnings:  [yellow]{summary['warnings']}[/yellow]",
            border_style="dim"
        ))
