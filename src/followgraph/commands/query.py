"""Command group: read-only queries over the follow graph."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from followgraph.commands._base import FollowGroup
from followgraph.services.follow_graph import FollowGraphService

if TYPE_CHECKING:
    from followgraph.commands._context import AppContext

_QUERY_EXAMPLES = """\
  followctl query followers carol
  followctl query following alice
  followctl query daily carol
  followctl --json query common alice bob"""


@click.group(cls=FollowGroup, examples=_QUERY_EXAMPLES)
@click.pass_obj
def query(app: AppContext) -> None:
    """Query followers, following, and daily counts."""


@query.command(
    examples="""\
  followctl query followers carol
  followctl -q query followers carol"""
)
@click.argument("username")
@click.pass_obj
def followers(app: AppContext, username: str) -> None:
    """List users who follow USERNAME."""
    app.emit(FollowGraphService(app.store).followers(username, deadline=app.deadline()))


@query.command(
    examples="""\
  followctl query following alice
  followctl --json query following alice"""
)
@click.argument("username")
@click.pass_obj
def following(app: AppContext, username: str) -> None:
    """List users USERNAME follows."""
    app.emit(FollowGraphService(app.store).following(username, deadline=app.deadline()))


@query.command(
    examples="""\
  followctl query daily carol
  followctl -q query daily carol"""
)
@click.argument("username")
@click.pass_obj
def daily(app: AppContext, username: str) -> None:
    """Count new followers of USERNAME since midnight today."""
    app.emit(
        FollowGraphService(app.store).daily_follower_count(username, deadline=app.deadline())
    )


@query.command(
    examples="""\
  followctl query common alice bob
  followctl --json query common alice bob"""
)
@click.argument("username1")
@click.argument("username2")
@click.pass_obj
def common(app: AppContext, username1: str, username2: str) -> None:
    """List users who follow both USERNAME1 and USERNAME2."""
    app.emit(
        FollowGraphService(app.store).common_followers(
            username1, username2, deadline=app.deadline()
        )
    )
