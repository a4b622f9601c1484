"""
flatcompat envs - List builtin environments.
"""

import typer
from rich.console import Console
from rich.table import Table

from flatcompat.environments import load_builtin_environments

app = typer.Typer(name="envs", help="List builtin environments", invoke_without_command=True)

console = Console()


@app.callback()
def envs(
    ctx: typer.Context,
    name: str | None = typer.Argument(None, help="Show the globals of one environment"),
) -> None:
    """
    List builtin environments, or the globals of one environment.
    """
    if ctx.invoked_subcommand is not None:
        return

    environments = load_builtin_environments()

    if name is None:
        table = Table(title="Builtin environments", show_header=True)
        table.add_column("Name", style="cyan")
        table.add_column("Globals", justify="right")
        table.add_column("Parser options", style="dim")
        for env_name, fragment in environments.items():
            parser_options = fragment.get("parserOptions") or {}
            table.add_row(
                env_name,
                str(len(fragment.get("globals") or {})),
                ", ".join(f"{k}={v}" for k, v in parser_options.items()),
            )
        console.print(table)
        return

    if name not in environments:
        console.print(f"[red]Unknown environment: {name}[/red]")
        raise typer.Exit(1)

    fragment = environments[name]
    table = Table(title=f"Environment: {name}", show_header=True)
    table.add_column("Global", style="cyan")
    table.add_column("Writable")
    for global_name, writable in (fragment.get("globals") or {}).items():
        table.add_row(global_name, "yes" if writable is True else "no")
    console.print(table)
