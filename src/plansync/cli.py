"""CLI entry point for the plansync pipeline.

Usage:
    plansync run                        # Run full pipeline
    plansync run-step plan_metrics -i '{"snapshot_file": "..."}'
    plansync info                       # Show pipeline info
    plansync show data/processed/plan_record.json
"""

from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from plansync.core.logging import setup_logging

app = typer.Typer(name="plansync", help="Building plan extraction and Airtable sync")
console = Console()

DEFAULT_CONFIG = Path("configs/pipeline.yaml")


@app.command()
def run(
    config: Path = typer.Option(DEFAULT_CONFIG, help="Pipeline config path"),
    log_level: str = typer.Option("INFO", help="Logging level"),
) -> None:
    """Run the full pipeline."""
    try:
        setup_logging(log_level)
    except ValueError as e:
        raise typer.BadParameter(str(e), param_hint="--log-level")
    from plansync.core.errors import PlanSyncError
    from plansync.core.pipeline_runner import run_pipeline

    try:
        results = run_pipeline(config)
    except PlanSyncError as e:
        console.print(f"[red]Pipeline failed:[/red] {e}")
        raise typer.Exit(1)

    sync = results.get("remote_sync")
    if sync is not None:
        console.print(f"[green]Airtable record {sync.record_id} {sync.action}.[/green]")


@app.command()
def run_step(
    step_name: str = typer.Argument(..., help="Step name (e.g. plan_metrics)"),
    config: Path = typer.Option(DEFAULT_CONFIG, help="Pipeline config path"),
    input_json: str = typer.Option(None, "--input", "-i", help="Input as JSON string"),
) -> None:
    """Run a single pipeline step."""
    import json

    setup_logging()
    from plansync.core.errors import PlanSyncError
    from plansync.core.pipeline_runner import load_pipeline_config, import_step_class, load_step_config

    pipeline_cfg = load_pipeline_config(config)
    entry = next((s for s in pipeline_cfg.steps if s.name == step_name), None)
    if entry is None:
        console.print(f"[red]Step '{step_name}' not found in pipeline config[/red]")
        raise typer.Exit(1)

    step_cls = import_step_class(entry.module)
    config_file = Path(entry.config_file) if entry.config_file else None
    step_config = load_step_config(config_file, step_cls.config_type)
    step_instance = step_cls(config=step_config, data_root=pipeline_cfg.data_root)

    input_data = dict(pipeline_cfg.inputs.get(step_name, {}))
    if input_json:
        input_data.update(json.loads(input_json))
    if not input_data:
        schema = step_cls.get_input_schema()
        required = schema.get("required", [])
        if required:
            console.print(f"[yellow]Step '{step_name}' requires input fields: {required}[/yellow]")
            console.print("[yellow]Use --input/-i with JSON string, e.g.:[/yellow]")
            console.print(f'  plansync run-step {step_name} -i \'{{"field": "value"}}\'')
            raise typer.Exit(1)

    console.print(f"[green]Running step: {step_name}[/green]")
    step_input = step_cls.input_type(**input_data)
    try:
        output = step_instance.execute(step_input)
    except PlanSyncError as e:
        console.print(f"[red]Step failed:[/red] {e}")
        raise typer.Exit(1)
    console.print(f"[green]Done. Output:[/green] {output.model_dump_json(indent=2)}")


@app.command()
def info(config: Path = typer.Option(DEFAULT_CONFIG, help="Pipeline config path")) -> None:
    """Show pipeline steps and their status."""
    from plansync.core.pipeline_runner import load_pipeline_config

    pipeline_cfg = load_pipeline_config(config)
    table = Table(title=f"Pipeline: {pipeline_cfg.project_name}")
    table.add_column("#", style="dim")
    table.add_column("Step", style="cyan")
    table.add_column("Module", style="green")
    table.add_column("Enabled", style="yellow")
    table.add_column("Depends On", style="dim")

    for i, step in enumerate(pipeline_cfg.steps, 1):
        table.add_row(
            str(i),
            step.name,
            step.module,
            "Y" if step.enabled else "N",
            ", ".join(step.depends_on) if step.depends_on else "-",
        )
    console.print(table)


@app.command()
def show(record_file: Path = typer.Argument(..., help="Path to plan_record.json")) -> None:
    """Preview an assembled plan record as it will be written to Airtable."""
    from plansync.core.contracts import PlanRecord

    if not record_file.exists():
        console.print(f"[red]Record file not found: {record_file}[/red]")
        raise typer.Exit(1)

    record = PlanRecord.model_validate_json(record_file.read_text(encoding="utf-8"))
    table = Table(title=f"Plan: {record.plan_name}")
    table.add_column("Field", style="cyan")
    table.add_column("Value", style="green")
    for column, value in record.to_fields().items():
        if column in ("Living Area", "Total Area"):
            value = f"{value:,} SF"
        table.add_row(column, str(value))
    console.print(table)


if __name__ == "__main__":
    app()
