"""
Main CLI entry point.
"""

import typer

from flatcompat import __version__
from flatcompat.cli import envs, translate


def version_callback(value: bool):
    """Callback to display version and exit."""
    if value:
        typer.echo(f"flatcompat version {__version__}")
        raise typer.Exit()


app = typer.Typer(
    name="flatcompat",
    help="flatcompat - Translate legacy ESLint configs into flat configs",
    add_completion=False,
)

# Register subcommands
app.add_typer(translate.app, name="translate")
app.add_typer(envs.app, name="envs")


@app.callback(invoke_without_command=True)
def entrypoint(
    ctx: typer.Context,
    version: bool = typer.Option(
        False,
        "--version",
        "-v",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
):
    """
    flatcompat - Translate legacy ESLint configs into flat configs.

    Run 'flatcompat <command> --help' for help on a specific command.
    """
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


def main():
    """Main CLI entry point."""
    app()


if __name__ == "__main__":
    main()
