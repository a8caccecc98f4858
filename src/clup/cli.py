"""CLI entry point for clup.

Usage:
    clup                      # Launch the TUI and browse tasks by space
    clup task                 # Create a new task
    clup list                 # Pick any team task with fzf, then view or edit it
"""

import click

from clup.commands.list import list_tasks
from clup.commands.task import task
from clup.core.config import load_credentials
from clup.core.log import setup_logging
from clup.core.machine import start


@click.group(invoke_without_command=True)
@click.option(
    "--debug",
    is_flag=True,
    help="Write a debug log to ~/.clup/clup.log (also enabled by CLUP_DEBUG=1)",
)
@click.version_option()
@click.pass_context
def main(ctx: click.Context, debug: bool) -> None:
    """clup - ClickUp from the terminal.

    Browse the tasks of a space, read and comment on them, change their
    description or status, delete them, or create new ones.

    Running 'clup' without a subcommand launches the TUI.
    """
    setup_logging(debug)

    if ctx.invoked_subcommand is not None:
        return

    from clup.tui.app import ClupApp

    app = ClupApp(start(load_credentials()))
    app.run()


main.add_command(task)
main.add_command(list_tasks)
