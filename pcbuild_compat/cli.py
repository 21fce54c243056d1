#!/usr/bin/env python3
"""Rich CLI: check an exported PC build file for compatibility problems."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from dotenv import load_dotenv
from pydantic import ValidationError
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from pcbuild_compat.checker import CompatibilityChecker
from pcbuild_compat.processing.classifier import classify_many
from pcbuild_compat.state.schema import BuildState, CompatibilityReport


class BuildCheckCli:
    """Prints a compatibility report for one build export."""

    def __init__(self, checker: CompatibilityChecker, console: Optional[Console] = None, expert: bool = False):
        self.checker = checker
        self.console = console or Console()
        self.expert = expert

    def print_components(self, build: BuildState) -> None:
        """Display the parts in the build with their headline specs."""
        table = Table(show_header=True, header_style="bold magenta")
        table.add_column("Paikka", style="cyan", width=16)
        table.add_column("Tuote", style="white")
        table.add_column("Luokka", style="yellow", width=14)
        table.add_column("Tiedot", style="dim")

        categories = classify_many(build.components)
        for slot, record in build.components.items():
            specs = self.checker.key_specs(record, expert=self.expert)
            spec_text = "\n".join(f"{key}: {value}" for key, value in specs)
            table.add_row(self.checker.slot_label(slot, record), record.name, categories[slot], spec_text)

        self.console.print(Panel(table, title="Kokoonpano", border_style="blue"))

    def print_report(self, report: CompatibilityReport, suggestions: List[str]) -> None:
        status = "[bold green]Yhteensopiva[/bold green]" if report.compatible else "[bold red]Ei yhteensopiva[/bold red]"
        self.console.print(f"\nTila: {status}    Arvioitu tehonkulutus: [bold]{report.estimated_power}W[/bold]\n")

        if report.issues:
            lines = []
            for issue in report.issues:
                style = "red" if issue.is_critical else "yellow"
                lines.append(f"[{style}]{issue}[/{style}]")
            self.console.print(Panel("\n".join(lines), title="Ongelmat", border_style="red"))

        if suggestions:
            self.console.print(Panel("\n".join(suggestions), title="Ehdotukset", border_style="cyan"))

    def run(self, build: BuildState, as_json: bool = False) -> int:
        result = self.checker.check(build)
        report: CompatibilityReport = result["report"]

        if as_json:
            payload: Dict[str, Any] = {
                "compatible": report.compatible,
                "estimatedPower": report.estimated_power,
                "issues": [issue.model_dump(mode="json") for issue in report.issues],
                "suggestions": result["suggestions"],
            }
            self.console.print_json(json.dumps(payload, ensure_ascii=False))
        else:
            self.print_components(build)
            self.print_report(report, result["suggestions"])

        return 0 if report.compatible else 1

    def print_export(self, build: BuildState) -> None:
        """Print the build re-exported in the current export format."""
        mode = "expert" if self.expert else "simple"
        self.console.print_json(json.dumps(build.to_export(mode=mode), ensure_ascii=False))


def load_build(path: Path) -> BuildState:
    with open(path, "r", encoding="utf-8") as f:
        return BuildState.from_export(json.load(f))


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Check a PC build export for compatibility problems.")
    parser.add_argument("build", type=Path, help="Build export JSON (components: [{type, name, productCode, specs}])")
    parser.add_argument("--hardware", type=Path, default=None, help="Knowledge Base YAML (default: config/hardware.yaml)")
    parser.add_argument("--specs", type=Path, default=None, help="Spec display YAML (default: config/specs.yaml)")
    parser.add_argument("--json", action="store_true", help="Print the report as JSON")
    parser.add_argument("--expert", action="store_true", help="Show the longer spec list for each part")
    parser.add_argument(
        "--normalize",
        action="store_true",
        help="Print the build re-exported in the current format instead of checking it",
    )
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    load_dotenv()
    args = parse_args(argv)
    console = Console()

    try:
        checker = CompatibilityChecker.from_config(args.hardware, args.specs)
        build = load_build(args.build)
    except (OSError, ValueError, ValidationError) as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        return 2

    cli = BuildCheckCli(checker, console=console, expert=args.expert)
    if args.normalize:
        cli.print_export(build)
        return 0
    return cli.run(build, as_json=args.json)


if __name__ == "__main__":
    sys.exit(main())
