"""Click command/group classes that take an ``examples=`` keyword.

Commands declared with ``examples`` get an eager ``--examples`` flag that
prints the examples and exits, so ``--help`` stays short.
"""

from __future__ import annotations

from typing import Any

import click


def _examples_option(examples: str) -> click.Option:
    def show(ctx: click.Context, _param: click.Parameter, value: bool) -> None:
        if not value or ctx.resilient_parsing:
            return
        click.echo(f"Examples for '{ctx.command_path}':\n")
        click.echo(examples)
        ctx.exit(0)

    return click.Option(
        ["--examples"],
        is_flag=True,
        expose_value=False,
        is_eager=True,
        callback=show,
        help="Show usage examples and exit.",
    )


class _ExamplesMixin:
    params: list[click.Parameter]

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.examples = examples
        if examples:
            self.params.append(_examples_option(examples))


class FollowCommand(_ExamplesMixin, click.Command):
    """A click Command with optional ``--examples``."""


class FollowGroup(_ExamplesMixin, click.Group):
    """A click Group with optional ``--examples``; subcommands default to FollowCommand."""

    command_class = FollowCommand
