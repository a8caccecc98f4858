"""Task command - create a new task through the wizard."""

import click

from clup.core.config import load_credentials
from clup.core.machine import start


@click.command()
def task() -> None:
    """Create a new task.

    Pick a space and a list, then enter the title, description, status,
    assignees and priority. The app exits once the task is created.
    """
    from clup.tui.app import ClupApp

    app = ClupApp(start(load_credentials(), creating_task=True))
    app.run()
