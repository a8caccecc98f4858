"""List command - jump straight to one task.

Fetches every task in the team, lets the user pick one with fzf and opens
it in the TUI for viewing or editing.
"""

import asyncio

import click

from clup.core.api import ClickUpClient, ClickUpError
from clup.core.config import load_credentials
from clup.core.fzf import FzfError, select
from clup.core.machine import VIEW_ACTIONS, start_on_task
from clup.core.models import Task
from clup.core.session import Credentials


async def fetch_all_tasks(credentials: Credentials) -> list[Task]:
    async with ClickUpClient(credentials.api_token) as client:
        response = await client.get_tasks(credentials.team_id)
    return list(response.tasks)


def task_line(task: Task) -> str:
    """Line shown in fzf for a task."""
    return f"[{task.id}] {task.name}"


@click.command("list")
def list_tasks() -> None:
    """Find a task with fzf and view or edit it.

    Requires fzf on PATH and configured credentials.
    """
    credentials = load_credentials()
    if not credentials.complete:
        click.echo(
            "API token and team ID must be set in your environment or a config file.",
            err=True,
        )
        raise SystemExit(1)

    try:
        tasks = asyncio.run(fetch_all_tasks(credentials))
    except ClickUpError as e:
        click.echo(f"Error: {e}", err=True)
        raise SystemExit(1)

    by_line = {task_line(task): task for task in tasks}
    try:
        line = select(list(by_line))
    except FzfError as e:
        click.echo(f"Error: {e}", err=True)
        raise SystemExit(1)

    if line is None or line not in by_line:
        click.echo("No task selected.")
        return

    selected = by_line[line]
    click.echo(f"Selected: {selected.name}")
    action = click.prompt(
        "What do you want to do?",
        type=click.Choice(VIEW_ACTIONS),
    )

    from clup.tui.app import ClupApp

    app = ClupApp(start_on_task(credentials, selected, action))
    app.run()
