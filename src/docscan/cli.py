"""docscan CLI — Typer application with scan, validate, serve, and init commands."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape

from docscan import __version__

app = typer.Typer(
    name="docscan",
    help="Scan documents against regular-expression rule sets.",
    add_completion=False,
    no_args_is_help=True,
)

console = Console(stderr=True)


def _load_config(config: Optional[str]):
    """Load config from the working directory, exit 2 on failure."""
    from docscan.config.loader import ConfigError, load_config

    try:
        return load_config(Path.cwd(), config)
    except ConfigError as exc:
        console.print(f"[bold red]Config error:[/bold red] {escape(str(exc))}")
        raise typer.Exit(code=2) from exc


# ── scan ──────────────────────────────────────────────────────────────────────


@app.command()
def scan(
    file: Path = typer.Argument(..., help="Document to scan"),
    rules: Optional[str] = typer.Option(None, "--rules", "-r", help="Rule-set file (default: config rules.file)"),
    config: Optional[str] = typer.Option(None, "--config", "-c", help="Path to .docscan.toml"),
    format: str = typer.Option("terminal", "--format", "-f", help="Output format: terminal | json"),
    output: Optional[str] = typer.Option(None, "--output", "-o", help="Write JSON report to file"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose output"),
) -> None:
    """Scan a document and report every rule match."""
    from docscan.engine.evaluator import scan_text
    from docscan.extract import ExtractError, extract_text
    from docscan.output import json_report, terminal
    from docscan.rules.loader import RuleError, load_rules

    if format not in ("terminal", "json"):
        console.print(f"[bold red]Invalid format:[/bold red] {format}")
        raise typer.Exit(code=2)

    cfg = _load_config(config)
    rules_path = rules or cfg.rules.file

    # --- Load rules (strict) ---
    try:
        rule_set = load_rules(rules_path)
    except RuleError as exc:
        console.print(f"[bold red]Rules error:[/bold red] {escape(str(exc))}")
        raise typer.Exit(code=2) from exc

    if verbose:
        console.print(f"[dim]Rules loaded: {len(rule_set)} from {rules_path}[/dim]")

    # --- Extract text ---
    try:
        text = extract_text(file.read_bytes(), file.name)
    except OSError as exc:
        console.print(f"[bold red]Cannot read {file}:[/bold red] {escape(str(exc))}")
        raise typer.Exit(code=2) from exc
    except ExtractError as exc:
        console.print(f"[bold red]Extract error:[/bold red] {escape(str(exc))}")
        raise typer.Exit(code=2) from exc

    report = scan_text(text, file.name, rule_set)

    # --- Output ---
    if format == "json":
        print(json_report.render(report))
    else:
        terminal.render(report, console=console)

    if output:
        Path(output).write_text(json_report.render(report), encoding="utf-8")
        if verbose:
            console.print(f"[dim]Report written to {output}[/dim]")

    if report.findings:
        raise typer.Exit(code=1)


# ── validate ──────────────────────────────────────────────────────────────────


@app.command()
def validate(
    rules: Path = typer.Argument(..., help="Rule-set file to validate"),
) -> None:
    """Check a rule-set file without activating it."""
    from docscan.rules.loader import RuleError, ValidationError, load_rules

    try:
        rule_set = load_rules(rules)
    except ValidationError as exc:
        console.print(f"[red]✗[/red] Invalid rule set: {escape(str(exc))}")
        raise typer.Exit(code=2) from exc
    except RuleError as exc:
        console.print(f"[red]✗[/red] Cannot read rule set: {escape(str(exc))}")
        raise typer.Exit(code=2) from exc

    console.print(f"[green]✓[/green] {len(rule_set)} valid rules in {rules}")


# ── serve ─────────────────────────────────────────────────────────────────────


@app.command()
def serve(
    config: Optional[str] = typer.Option(None, "--config", "-c", help="Path to .docscan.toml"),
    host: Optional[str] = typer.Option(None, "--host", help="Bind address"),
    port: Optional[int] = typer.Option(None, "--port", "-p", help="Listen port"),
) -> None:
    """Load the rules file and run the HTTP service."""
    import uvicorn

    from docscan.api.app import create_app
    from docscan.log import configure_logging
    from docscan.rules.loader import RuleError
    from docscan.rules.store import RuleStore

    cfg = _load_config(config)
    if host:
        cfg.server.host = host
    if port:
        cfg.server.port = port

    configure_logging(cfg.logging, loggers=("docscan", "uvicorn"))

    store = RuleStore()
    try:
        store.load_and_activate(cfg.rules.file)
    except RuleError as exc:
        console.print(f"[bold red]Rules error:[/bold red] {escape(str(exc))}")
        raise typer.Exit(code=2) from exc

    uvicorn.run(
        create_app(store, cfg),
        host=cfg.server.host,
        port=cfg.server.port,
        log_config=None,
    )


# ── init ──────────────────────────────────────────────────────────────────────


@app.command()
def init() -> None:
    """Generate a starter .docscan.toml and rules.yaml in the working directory."""
    from docscan.config.defaults import DEFAULT_RULES_YAML, DEFAULT_TOML
    from docscan.config.loader import CONFIG_FILENAME

    cwd = Path.cwd()
    targets = [(cwd / CONFIG_FILENAME, DEFAULT_TOML), (cwd / "rules.yaml", DEFAULT_RULES_YAML)]

    existing = [p for p, _ in targets if p.exists()]
    if existing:
        for p in existing:
            console.print(f"[yellow]⚠[/yellow]  {p.name} already exists at {p}")
        raise typer.Exit(code=1)

    for path, template in targets:
        path.write_text(template, encoding="utf-8")
        console.print(f"[green]✓[/green] Created {path}")


# ── version ───────────────────────────────────────────────────────────────────


def _version_callback(value: bool) -> None:
    if value:
        print(f"docscan {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False, "--version", "-V", callback=_version_callback,
        is_eager=True, help="Show version and exit",
    ),
) -> None:
    """docscan — scan documents against regular-expression rule sets."""
