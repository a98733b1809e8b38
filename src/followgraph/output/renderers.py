"""Operation-specific Rich renderers for ServiceResult.

Each renderer writes to a Rich Console (backed by StringIO). The caller
extracts the rendered text via ``get_output(console)``.

Renderers are dispatched by ``result.op`` in :func:`render_result`.
Unknown ops fall through to a generic key-value renderer.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text

from followgraph.output.console import create_console, get_output

if TYPE_CHECKING:
    from rich.console import Console

    from followgraph.services.result import ServiceResult


# ── Public API ────────────────────────────────────────────────────────


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render a ServiceResult to a styled string via Rich.

    Returns plain text (no ANSI) when Rich detects no terminal,
    which is the case inside Click's CliRunner and piped output.
    """
    console = create_console()

    if result.ok:
        renderer = _OP_RENDERERS.get(result.op, _render_generic)
        renderer(result, console)
        if verbose:
            _render_meta(console, result)
    else:
        _render_error(result, console, verbose=verbose)

    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """Render minimal output for ``--quiet`` mode."""
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op} — {msg}"

    items = result.data.get("items")
    if isinstance(items, list):
        return "\n".join(_extract_value(item) for item in items)
    if "daily_followers" in result.data:
        return str(result.data["daily_followers"])
    if "id" in result.data:
        return str(result.data["id"])

    return f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


def _extract_value(item: Any) -> str:
    """Usernames are plain strings; user records render as their username."""
    if isinstance(item, dict):
        return str(item.get("username", item.get("id", "")))
    return str(item)


def _status_line(console: Console, result: ServiceResult) -> None:
    """Print the OK status line."""
    console.print(Text("OK", style="fg.ok"), Text(f"  {result.op}", style="fg.op"), sep="")


def _field(console: Console, key: str, value: Any) -> None:
    """Print a single indented key-value field."""
    k = Text(f"  {key}: ", style="fg.key")
    if key == "id" or key.endswith("_id"):
        v = Text(str(value), style="fg.id")
    elif key in ("username", "follower", "followee"):
        v = Text(str(value), style="fg.username")
    else:
        v = Text(str(value))
    console.print(k, v, sep="")


def _render_meta(console: Console, result: ServiceResult) -> None:
    """Print meta block including the telemetry span tree."""
    if not result.meta:
        return
    console.print(Text("  meta:", style="dim"))
    for key, value in result.meta.items():
        if key == "telemetry":
            _render_span(console, value, indent=4)
        else:
            console.print(f"    {key}: {value}")


def _render_span(console: Console, span: dict[str, Any], indent: int) -> None:
    prefix = " " * indent
    duration = span.get("duration_ms", 0.0)
    extras = ", ".join(f"{k}={v}" for k, v in span.get("annotations", {}).items())
    line = f"{prefix}{duration:>8.2f}ms  {span.get('name', '?')}"
    if extras:
        line += f"  ({extras})"
    console.print(Text(line, style="dim"))
    for child in span.get("children", []):
        _render_span(console, child, indent + 2)


def _render_error(result: ServiceResult, console: Console, *, verbose: bool) -> None:
    error = result.error
    msg = error.message if error else "Unknown error"
    code = error.code if error else "ERROR"
    console.print(
        Text("ERROR", style="fg.error"),
        Text(f"  {result.op}", style="fg.op"),
        Text(f"  [{code}] {msg}"),
        sep="",
    )
    if verbose and error and error.detail:
        for key, value in error.detail.items():
            _field(console, key, value)


# ── Operation renderers ───────────────────────────────────────────────


def _render_generic(result: ServiceResult, console: Console) -> None:
    _status_line(console, result)
    for key, value in result.data.items():
        _field(console, key, value)


def _render_user_table(result: ServiceResult, console: Console) -> None:
    _status_line(console, result)
    table = Table(show_header=True, header_style="bold", box=None, pad_edge=False)
    table.add_column("ID", style="fg.id")
    table.add_column("Username", style="fg.username")
    table.add_column("Created", style="dim")
    for item in result.data.get("items", []):
        table.add_row(item["id"], item["username"], item["created"])
    console.print(table)
    console.print(Text(f"  {result.data.get('count', 0)} user(s)", style="fg.count"))


def _render_username_list(result: ServiceResult, console: Console) -> None:
    _status_line(console, result)
    for name in result.data.get("items", []):
        console.print(Text(f"  {name}", style="fg.username"))
    console.print(Text(f"  {result.data.get('count', 0)} user(s)", style="fg.count"))


def _render_found(result: ServiceResult, console: Console) -> None:
    _status_line(console, result)
    user = result.data.get("user")
    if user is None:
        console.print(Text("  no such user", style="dim"))
        return
    for key, value in user.items():
        _field(console, key, value)


_OP_RENDERERS: dict[str, Callable[[ServiceResult, Console], None]] = {
    "list_users": _render_user_table,
    "followers": _render_username_list,
    "following": _render_username_list,
    "common_followers": _render_username_list,
    "find_user": _render_found,
}
