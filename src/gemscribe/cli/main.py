#!/usr/bin/env python3
"""
GEMSCRIBE CLI
-------------
Command-line front end for the extraction engine:

    gemscribe dump PATH...        stream extracted attributes to the terminal
    gemscribe records PATH...     tabulate records and translated constraints
    gemscribe susetags DIR        write a susetags catalog for the gems in DIR

PATH may be a .gem file or a directory holding .gem files. The exit
status is non-zero when any input or archive failed.

Author: Gemscribe Team
Date: 2026-10-19
"""

import sys
import argparse
import logging
from dataclasses import replace
from typing import List, Optional

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.panel import Panel

from gemscribe.cli.formatter import GemFormatter
from gemscribe.core.config import ParserConfig
from gemscribe.core.engine import GemParseEngine
from gemscribe.sinks.collector import RecordCollector
from gemscribe.sinks.dump import DumpSink
from gemscribe.sinks.susetags import SusetagsWriter

VERSION = "0.1.0"

console = Console()
err_console = Console(stderr=True)


class GemscribeCLI:
    """
    CLI wrapper that translates user commands into engine runs with the
    matching sink.
    """

    def __init__(self):
        self.parser = argparse.ArgumentParser(
            prog="gemscribe",
            description="Gemscribe - RubyGems metadata extraction for package repositories",
            formatter_class=argparse.RawDescriptionHelpFormatter,
        )
        self._setup_args()

    def _setup_args(self):
        self.parser.add_argument("-v", "--version", action="version", version=f"gemscribe v{VERSION}")
        self.parser.add_argument("--config", help="YAML file with parser settings")
        self.parser.add_argument("--log-level", default="WARNING",
                                 choices=["DEBUG", "INFO", "WARNING", "ERROR"],
                                 help="Logging verbosity (default: WARNING)")
        self.parser.add_argument("--all-attributes", action="store_true",
                                 help="Report every scalar attribute, not just the package fields")
        self.parser.add_argument("--max-metadata-size", type=int,
                                 help="Abort a gem whose inflated metadata exceeds this many bytes")
        self.parser.add_argument("--prefix", help="Namespace prefix for package names (default: rubygem)")

        subparsers = self.parser.add_subparsers(dest="command", metavar="Command")

        dump_parser = subparsers.add_parser("dump", help="Print extracted attributes")
        dump_parser.add_argument("paths", nargs="+", help="Gem files or directories with gems")
        dump_parser.add_argument("--no-deps", action="store_true", help="Hide translated requirements")

        records_parser = subparsers.add_parser("records", help="Tabulate package records")
        records_parser.add_argument("paths", nargs="+", help="Gem files or directories with gems")
        records_parser.add_argument("--json", action="store_true", help="Emit JSON instead of a table")

        tags_parser = subparsers.add_parser("susetags", help="Write suse/setup/descr catalog files")
        tags_parser.add_argument("directory", help="Directory with gems; metadata is written there")

    def print_header(self, subtitle: str):
        err_console.print(Panel.fit(
            f"[bold cyan]Gemscribe v{VERSION}[/bold cyan]",
            title=f"[bold white]{subtitle}[/bold white]",
            border_style="cyan"
        ))

    def _configure_logging(self, level: str):
        logging.basicConfig(
            level=getattr(logging, level),
            format="%(message)s",
            handlers=[RichHandler(console=err_console, show_path=False)],
        )

    def _build_config(self, args: argparse.Namespace) -> ParserConfig:
        config = ParserConfig.from_file(args.config) if args.config else ParserConfig()
        config = config.with_overrides(
            max_metadata_size=args.max_metadata_size,
            name_prefix=args.prefix,
        )
        if args.all_attributes:
            config = replace(config, attribute_keys=None)
        return config

    def _run_dump(self, args: argparse.Namespace, config: ParserConfig) -> int:
        sink = DumpSink(console=console, error_console=err_console, show_dependencies=not args.no_deps)
        return GemParseEngine(sink, config).parse(args.paths)

    def _run_records(self, args: argparse.Namespace, config: ParserConfig) -> int:
        collector = RecordCollector(prefix=config.name_prefix)
        status = GemParseEngine(collector, config).parse(args.paths)

        formatter = GemFormatter(console)
        if args.json:
            formatter.print_json(collector.records, collector.failed)
        else:
            formatter.print_records_table(collector.records, collector.failed)
            formatter.print_summary(collector.records, collector.failed, status)
        for message in collector.errors:
            err_console.print(f"[bold red]Error:[/bold red] {escape(message)}")
        return status

    def _run_susetags(self, args: argparse.Namespace, config: ParserConfig) -> int:
        try:
            writer = SusetagsWriter(args.directory, config).open()
        except OSError as e:
            err_console.print(f"[bold red]Error:[/bold red] Can't open catalog files: {e.strerror or str(e)}")
            return 1
        try:
            status = GemParseEngine(writer, config).parse([args.directory])
        finally:
            writer.close()
        err_console.print(f"Wrote {writer.written} packages to [white]{writer.descr_dir}[/white]")
        return status

    def run(self, argv: Optional[List[str]] = None) -> int:
        """Primary routing entry point. Returns the process exit status."""
        argv = sys.argv[1:] if argv is None else argv
        if not argv:
            self.print_header("RubyGems Metadata Extraction")
            self.parser.print_help()
            return 0

        args = self.parser.parse_args(argv)
        self._configure_logging(args.log_level)

        try:
            config = self._build_config(args)
        except ValueError as e:
            err_console.print(f"[bold red]CRITICAL ERROR:[/bold red] {escape(str(e))}")
            return 1

        if args.command == "dump":
            return self._run_dump(args, config)
        if args.command == "records":
            return self._run_records(args, config)
        if args.command == "susetags":
            return self._run_susetags(args, config)

        self.parser.print_help()
        return 1


def main():
    """Application entry point with interrupt handling."""
    try:
        sys.exit(GemscribeCLI().run())
    except KeyboardInterrupt:
        err_console.print("\n[bold red]Terminated by user.[/bold red]")
        sys.exit(1)


if __name__ == "__main__":
    main()
