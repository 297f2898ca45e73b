"""Operation-specific Rich renderers for ServiceResult.

Each renderer writes to a Rich Console (backed by StringIO).  The caller
extracts the rendered text via ``get_output(console)``.

Renderers are dispatched by ``result.op`` in :func:`render_result`.
Unknown ops fall through to a generic key-value renderer.
"""

from __future__ import annotations

import json as _json
from typing import TYPE_CHECKING, Any

from rich.markdown import Markdown
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from shelfctl.output.console import create_console, get_output

if TYPE_CHECKING:
    from rich.console import Console

    from shelfctl.services.result import ServiceResult


# ── Public API ────────────────────────────────────────────────────────


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render a ServiceResult to a styled string via Rich.

    Returns plain text (no ANSI) when Rich detects no terminal,
    which is the case inside Click's CliRunner and piped output.
    """
    console = create_console()

    if result.ok:
        renderer = _OP_RENDERERS.get(result.op, _render_generic)
        renderer(result, console, verbose=verbose)
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
        return "\n".join(str(item["name"]) for item in items if item.get("name"))

    return f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


def _status_line(console: Console, result: ServiceResult) -> None:
    """Print the OK status line."""
    console.print(Text("OK", style="shelf.ok"), Text(f"  {result.op}", style="shelf.op"))


def _field(console: Console, key: str, value: Any) -> None:
    """Print a single indented key-value field."""
    k = Text(f"  {key}: ", style="shelf.key")
    if key == "name":
        v = Text(str(value), style="shelf.name")
    elif key in ("path", "library"):
        v = Text(str(value), style="shelf.path")
    elif key == "title":
        v = Text(str(value), style="shelf.title")
    else:
        v = Text(str(value))
    console.print(k, v, sep="")


def _render_meta(console: Console, result: ServiceResult) -> None:
    """Print meta block including the telemetry span tree (verbose only)."""
    if not result.meta:
        return

    console.print()
    console.print(Text("  meta:", style="dim"))
    for k, v in result.meta.items():
        if k == "telemetry":
            _render_span(console, v, indent=4)
        else:
            console.print(f"    {k}: {v}")


def _render_span(console: Console, span: dict[str, Any], indent: int) -> None:
    prefix = " " * indent
    console.print(f"{prefix}{span.get('name', '?')}  [dim]{span.get('duration_ms', 0.0)}ms[/dim]")
    for child in span.get("children", []):
        _render_span(console, child, indent + 4)


# ── Error renderer ────────────────────────────────────────────────────


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    console.print(
        Text("ERROR", style="shelf.error"),
        Text(f"  {result.op}", style="shelf.op"),
        Text(" — "),
        msg,
        sep="",
    )

    if verbose and err and err.detail:
        console.print(Text("  detail:", style="dim"))
        for k, v in err.detail.items():
            console.print(f"    {k}: {v}")


# ── Document renderers ────────────────────────────────────────────────


def _render_document_table(
    result: ServiceResult, console: Console, *, verbose: bool = False
) -> None:
    """Render list_documents as a table."""
    items = result.data.get("items", [])
    if not items:
        console.print("No documents found.")
        return

    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("Name", style="shelf.name", no_wrap=True)
    table.add_column("Title", style="shelf.title")
    table.add_column("Sections", justify="right")
    if verbose:
        table.add_column("Path", style="shelf.path")

    for item in items:
        row = [
            Text(str(item.get("name", ""))),
            Text(str(item.get("title", ""))),
            Text(str(item.get("section_count", 0))),
        ]
        if verbose:
            row.append(Text(str(item.get("path") or "")))
        table.add_row(*row)

    console.print(table)
    footer = f"{result.data.get('count', len(items))} documents"
    if result.data.get("library_name"):
        footer += f" in {result.data['library_name']}"
    console.print(f"\n{escape(footer)}")
    if verbose:
        _render_meta(console, result)


def _render_document(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render get_document as a titled panel of markdown."""
    d = result.data
    parts: list[str] = []
    preamble = d.get("preamble", "")
    if preamble:
        parts.append(preamble)
    for sec in d.get("sections", []):
        block = f"{'#' * int(sec.get('level', 1))} {sec.get('heading', '')}"
        if sec.get("body"):
            block += f"\n\n{sec['body']}"
        parts.append(block)

    title = f"{d.get('name', '?')} — {d.get('title', 'Untitled')}"
    console.print(Panel(Markdown("\n\n".join(parts)), title=escape(title), border_style="dim"))

    if verbose:
        if d.get("path"):
            _field(console, "path", d["path"])
        for key, value in (d.get("metadata") or {}).items():
            _field(console, key, value)
        _render_meta(console, result)


def _render_outline(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render outline as an indented heading list."""
    d = result.data
    console.print(Text(f"{d.get('name', '?')} — {d.get('title', '')}", style="shelf.title"))
    headings = d.get("headings", [])
    if not headings:
        console.print("  (no headings)")
    for i, h in enumerate(headings, start=1):
        heading = escape(str(h.get("heading", "")))
        console.print(f"  {i:>3}. [shelf.heading]{heading}[/shelf.heading]")
    if verbose:
        _render_meta(console, result)


# ── Check renderer ────────────────────────────────────────────────────


def _render_check(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render check results with issues grouped by category."""
    issues = result.data.get("issues", [])
    count = result.data.get("count", len(issues))

    if count == 0:
        console.print("[shelf.ok]OK[/shelf.ok]  No issues found.")
        return

    severity_styles = {"error": "shelf.error", "warning": "shelf.warning"}

    by_category: dict[str, list[dict[str, Any]]] = {}
    for issue in issues:
        by_category.setdefault(str(issue.get("category", "unknown")), []).append(issue)

    for cat, cat_issues in by_category.items():
        console.print(f"\n[bold]{cat}[/bold]")
        for issue in cat_issues:
            sev = str(issue.get("severity", "warning"))
            style = severity_styles.get(sev, "")
            prefix = f"[{style}]{sev}[/{style}]" if style else sev
            name = escape(f"[{issue.get('name', '')}]")
            console.print(f"  {prefix} {name}: {escape(str(issue.get('message', '')))}")

    errors = sum(1 for i in issues if i.get("severity") == "error")
    console.print(f"\n{errors} errors, {count - errors} warnings")
    if verbose:
        _render_meta(console, result)


# ── Generic fallback ──────────────────────────────────────────────────


def _render_generic(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Fallback renderer: status line + all data as key-value pairs."""
    _status_line(console, result)
    for key, value in result.data.items():
        if isinstance(value, (dict, list)):
            _field(console, key, _json.dumps(value, separators=(",", ":"), default=str))
        else:
            _field(console, key, value)
    if verbose:
        _render_meta(console, result)


# ── Dispatch table ────────────────────────────────────────────────────

_OP_RENDERERS: dict[str, Any] = {
    "list_documents": _render_document_table,
    "get_document": _render_document,
    "outline": _render_outline,
    "check": _render_check,
}
