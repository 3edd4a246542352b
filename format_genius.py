#!/usr/bin/env python3
"""
FormatGenius - Normalize citations to Harvard style and re-typeset a document.

Usage:
    python format_genius.py "path/to/document.docx" [options]

Options:
    --output, -o     Output file path (default: filename_formatted.docx)
    --style, -s      Style label for the title line (default: harvard)
    --text           Write processed plain text instead of a .docx
    --dry-run, -n    Print processed text without writing output
    --verbose, -v    Enable detailed logging
"""

import sys
import argparse
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.table import Table
from rich.panel import Panel
from loguru import logger

from formatgenius.config import config
from formatgenius.document_builder import DocumentBuilder
from formatgenius.errors import FormatGeniusError
from formatgenius.file_handler import FileHandler
from formatgenius.logging_setup import configure_cli_logging
from formatgenius.pipeline import CitationPipeline, PipelineResult

console = Console(force_terminal=True)


class FormatGenius:
    """Main application class for formatting a document."""

    def __init__(
        self,
        input_path: str,
        output_path: Optional[str] = None,
        style: Optional[str] = None,
        text_only: bool = False,
        dry_run: bool = False,
        verbose: bool = False,
    ):
        self.input_path = input_path
        self.output_path = output_path
        self.style = style or config.DEFAULT_STYLE
        self.text_only = text_only
        self.dry_run = dry_run
        self.verbose = verbose

        configure_cli_logging(verbose)

        self.file_handler = FileHandler(input_path)
        self.pipeline = CitationPipeline()
        self.builder = DocumentBuilder(style=self.style)

    def run(self) -> bool:
        """Run the formatting pipeline."""
        console.print(Panel.fit(
            "[bold blue]FormatGenius Lite[/bold blue]\n"
            "Normalize citations to Harvard style",
            border_style="blue"
        ))

        try:
            text = self._step_read_file()
            if not text.strip():
                console.print("[yellow]No text found in document. Nothing to process.[/yellow]")
                return False

            result = self._step_process(text)
            self._print_summary(result)

            if self.dry_run:
                console.print("\n[bold]Processed text:[/bold]")
                console.print(result.processed_text, markup=False, highlight=False)
                return True

            self._step_write(result.processed_text)
            return True

        except FormatGeniusError as e:
            console.print(f"[red]Error: {e}[/red]")
            return False
        except Exception as e:
            console.print(f"[red]Error: {e}[/red]")
            logger.exception("Processing failed")
            return False

    def _step_read_file(self) -> str:
        with console.status("[bold green]Reading input file..."):
            text = self.file_handler.read_text()
        file_info = self.file_handler.get_file_info()
        console.print(f"[green][OK][/green] Loaded: {file_info['name']} ({file_info['size_bytes']:,} bytes)")
        return text

    def _step_process(self, text: str) -> PipelineResult:
        with console.status("[bold green]Normalizing citations..."):
            result = self.pipeline.run(text)
        console.print("[green][OK][/green] Citations processed")
        return result

    def _step_write(self, processed_text: str) -> Path:
        if self.text_only:
            output_path = self.file_handler.write_text(processed_text, self.output_path)
        else:
            with console.status("[bold green]Building document..."):
                data = self.builder.to_bytes(processed_text)
            output_path = self.file_handler.write_document(data, self.output_path)
        console.print(f"\n[green][OK][/green] Output written to: {output_path}")
        return output_path

    def _print_summary(self, result: PipelineResult) -> None:
        summary = result.summary()
        table = Table(title="Citation Summary")
        table.add_column("Change", style="cyan")
        table.add_column("Count", justify="right", style="green")

        table.add_row("In-text citations fixed", str(summary['in_text_citations_fixed']))
        if summary['reference_section_found']:
            table.add_row("References formatted", str(summary['references_formatted']))
            for shape, count in summary['reference_shapes'].items():
                table.add_row(f"  {shape.replace('_', ' ')}", str(count))
        else:
            table.add_row("References formatted", "no section found")
        table.add_row("URLs replaced", str(summary['urls_replaced']))
        table.add_row("  fallback sources", str(summary['fallback_sources']))

        console.print(table)


def main():
    parser = argparse.ArgumentParser(
        description="Normalize in-text citations, reference lists and URLs to Harvard style.",
    )
    parser.add_argument("input_file", help="Input .docx, .txt or .md file")
    parser.add_argument("--output", "-o", help="Output file path")
    parser.add_argument("--style", "-s", default=None,
                        help=f"Style label for the title line (default: {config.DEFAULT_STYLE})")
    parser.add_argument("--text", action="store_true", help="Write processed plain text instead of .docx")
    parser.add_argument("--dry-run", "-n", action="store_true", help="Print processed text without writing")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable detailed logging")

    args = parser.parse_args()

    if not Path(args.input_file).exists():
        console.print(f"[red]Error: File not found: {args.input_file}[/red]")
        sys.exit(1)

    app = FormatGenius(
        input_path=args.input_file,
        output_path=args.output,
        style=args.style,
        text_only=args.text,
        dry_run=args.dry_run,
        verbose=args.verbose,
    )

    success = app.run()
    sys.exit(0 if success else 1)


if __name__ == "__main__":
    main()
