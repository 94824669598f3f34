
from __future__ import annotations

import typer

from health_export.cli.commands.convert import convert_command
from health_export.cli.commands.stats import stats_command

app = typer.Typer(
    name="health-export",
    help="Convert a health records export.xml into per-type JSON and CSV tables",
    add_completion=False,
)

app.command("convert")(convert_command)
app.command("stats")(stats_command)


def main():
    app()


if __name__ == "__main__":
    main()
