"""Command group: user registration and lookup."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from followgraph.commands._base import FollowGroup
from followgraph.services.directory import DirectoryService

if TYPE_CHECKING:
    from followgraph.commands._context import AppContext

_USER_EXAMPLES = """\
  followctl user create alice
  followctl user list
  followctl user find alice
  followctl --json user show alice"""


@click.group(cls=FollowGroup, examples=_USER_EXAMPLES)
@click.pass_obj
def user(app: AppContext) -> None:
    """Register and look up users."""


@user.command(
    examples="""\
  followctl user create alice
  followctl --json user create bob"""
)
@click.argument("username")
@click.pass_obj
def create(app: AppContext, username: str) -> None:
    """Register a new USERNAME."""
    app.emit(DirectoryService(app.store).create_user(username, deadline=app.deadline()))


@user.command(
    name="list",
    examples="""\
  followctl user list
  followctl -q user list""",
)
@click.pass_obj
def list_cmd(app: AppContext) -> None:
    """List all registered users."""
    app.emit(DirectoryService(app.store).list_users(deadline=app.deadline()))


@user.command(
    examples="""\
  followctl user show alice
  followctl --json user show alice"""
)
@click.argument("username")
@click.pass_obj
def show(app: AppContext, username: str) -> None:
    """Show the record for USERNAME (exact, case-sensitive match)."""
    app.emit(DirectoryService(app.store).get_user(username, deadline=app.deadline()))


@user.command(
    examples="""\
  followctl user find alice
  followctl --json user find bob"""
)
@click.argument("username")
@click.pass_obj
def find(app: AppContext, username: str) -> None:
    """Look up USERNAME; a missing user is reported, not an error."""
    app.emit(DirectoryService(app.store).find_by_username(username, deadline=app.deadline()))
