"""Interactive questions asked by the CLI."""

from pathlib import Path

import click

from postman_api_gen.config import DEFAULT_DESTINATION

YES_ANSWERS = ("y", "yes")
NO_ANSWERS = ("n", "no")


def ask_collection_url() -> str:
    return click.prompt("Enter the published documentation URL", default="", show_default=False)


def ask_destination() -> Path:
    answer = click.prompt(
        f"Choose a destination directory (default: {DEFAULT_DESTINATION})",
        default="",
        show_default=False,
    )
    return Path(answer.strip() or DEFAULT_DESTINATION)


def ask_overwrite(destination: Path) -> bool:
    """Ask until the answer is yes or no."""
    while True:
        answer = click.prompt(
            f"WARNING: {destination} directory will be removed. "
            "Are you sure you want to continue? (y/n)",
            default="",
            show_default=False,
        ).strip().lower()
        if answer in YES_ANSWERS:
            return True
        if answer in NO_ANSWERS:
            return False
