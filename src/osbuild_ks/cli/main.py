#!/usr/bin/env python3
"""
OSBUILD-KS CLI
--------------
Command-line front end: `osbuild-ks SRC [DST] -I INCLUDE`.
Parses a Kickstart file, shows its section tree and optionally writes the
YAML rendering of that tree to DST.

Author: OSBuild-KS Team
Date: 2026-10-18
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from rich.logging import RichHandler
from rich.markup import escape

from osbuild_ks.cli.formatter import KickstartFormatter, console
from osbuild_ks.core.engine import KickstartEngine
from osbuild_ks.parsing.exporter import TreeExporter

VERSION = "0.1.0"
LOG_LEVELS = [logging.WARNING, logging.INFO, logging.DEBUG]


class KickstartCLI:
    """
    CLI wrapper that translates user arguments into Engine actions.
    """

    def __init__(self):
        self.parser = argparse.ArgumentParser(
            prog="osbuild-ks",
            description="osbuild-ks - Kickstart to osbuild section tree parser",
            formatter_class=argparse.RawDescriptionHelpFormatter,
            epilog="Learn more: https://github.com/supakeen/osbuild-ks"
        )
        self.formatter = KickstartFormatter()
        self.exporter = TreeExporter()
        self._setup_args()

    def _setup_args(self):
        self.parser.add_argument("--version", action="version", version=f"osbuild-ks v{VERSION}")
        self.parser.add_argument("src", help="Kickstart input file")
        self.parser.add_argument("dst", nargs="?", help="Write the parsed tree as YAML to this file")
        self.parser.add_argument("-I", "--include", default=".", help="Include path for kickstart files (default: .)")
        self.parser.add_argument("--lenient", action="store_true",
                                 help="Warn instead of failing on stray %%end and nested section starts")
        self.parser.add_argument("--yaml", action="store_true", help="Print the parsed tree as YAML")
        self.parser.add_argument("-v", "--verbose", action="count", default=0,
                                 help="Increase log verbosity (-v info, -vv debug)")

    def _setup_logging(self, verbosity: int) -> logging.Logger:
        """Scoped to the osbuild_ks logger tree; the root logger is left alone."""
        logger = logging.getLogger("osbuild_ks")
        logger.setLevel(LOG_LEVELS[min(verbosity, len(LOG_LEVELS) - 1)])
        if not logger.handlers:
            logger.addHandler(RichHandler(console=console, show_path=False))
        logger.propagate = False
        return logger

    def run(self, argv: Optional[List[str]] = None) -> int:
        args = self.parser.parse_args(argv)
        logger = self._setup_logging(args.verbose)

        engine = KickstartEngine(include_dir=args.include, strict=not args.lenient, logger=logger)
        self.formatter.print_header("Kickstart Section Parser", VERSION)

        report = engine.inspect_file(args.src)
        summary = engine.generate_summary([report])

        if report["success"]:
            document = report["document"]
            self.formatter.show_warnings(report["warnings"])
            self.formatter.print_section_table(document)

            rendered = self.exporter.export(document)
            if args.yaml:
                self.formatter.print_yaml(rendered)
            else:
                self.formatter.print_section_bodies(document)

            if args.dst:
                try:
                    Path(args.dst).write_text(rendered, encoding="utf-8")
                except OSError as e:
                    console.print(f"[bold red]Error:[/bold red] unable to write {escape(repr(args.dst))}: {escape(str(e))}")
                    return 1
                console.print(f"[green]Wrote section tree to {escape(args.dst)}[/green]")

        self.formatter.print_summary(report, summary)
        return 0 if report["success"] else 1


def main():
    """Application entry point with interrupt handling."""
    try:
        sys.exit(KickstartCLI().run())
    except KeyboardInterrupt:
        console.print("\n[bold red]Terminated by user.[/bold red]")
        sys.exit(1)


if __name__ == "__main__":
    main()
