"""Standalone commands: follow and unfollow."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from followgraph.commands._base import FollowCommand
from followgraph.services.follow_graph import FollowGraphService

if TYPE_CHECKING:
    from followgraph.commands._context import AppContext


@click.command(
    cls=FollowCommand,
    examples="""\
  followctl follow alice bob
  followctl --json follow alice bob""",
)
@click.argument("follower")
@click.argument("followee")
@click.pass_obj
def follow(app: AppContext, follower: str, followee: str) -> None:
    """Make FOLLOWER follow FOLLOWEE."""
    app.emit(FollowGraphService(app.store).follow(follower, followee, deadline=app.deadline()))


@click.command(
    cls=FollowCommand,
    examples="""\
  followctl unfollow alice bob
  followctl -q unfollow alice bob""",
)
@click.argument("follower")
@click.argument("followee")
@click.pass_obj
def unfollow(app: AppContext, follower: str, followee: str) -> None:
    """Make FOLLOWER stop following FOLLOWEE (succeeds even if not following)."""
    app.emit(FollowGraphService(app.store).unfollow(follower, followee, deadline=app.deadline()))
