"""fzf wrapper for clup.

Used by ``clup list`` to pick one task out of the whole team before the
TUI starts.
"""

import subprocess


class FzfError(Exception):
    """Raised when fzf cannot be run."""

    pass


def select(lines: list[str]) -> str | None:
    """Let the user pick one line with fzf.

    Args:
        lines: Candidate lines, fed to fzf on stdin.

    Returns:
        The chosen line, or None if the user aborted or chose nothing.

    Raises:
        FzfError: If fzf is not installed.
    """
    try:
        result = subprocess.run(
            ["fzf"],
            input="\n".join(lines),
            stdout=subprocess.PIPE,
            text=True,
        )
    except FileNotFoundError as e:
        raise FzfError("fzf is not installed") from e

    # 1 = no match, 130 = interrupted
    if result.returncode != 0:
        return None
    return result.stdout.strip() or None
