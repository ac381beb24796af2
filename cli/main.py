"""FAQ schema proxy CLI, the entry-point for local extraction and the API server.

Usage:
    python cli/main.py --help

Commands:
    extract       → fetch a URL and print its FAQ payload as JSON
    extract-file  → run the extraction on a local HTML file
    serve         → start the HTTP API with uvicorn
"""

from __future__ import annotations

import sys
from pathlib import Path

# Ensure the project root is on sys.path so that `from faqproxy.xxx import ...`
# works when the CLI is invoked as `python cli/main.py` from any directory.
_ROOT = Path(__file__).resolve().parent.parent
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))

import json

import typer

from faqproxy.errors import ProxyError
from faqproxy.extraction import extract_faqs
from faqproxy.log import setup_logging

app = typer.Typer(
    name="faqproxy",
    help="FAQ structured-data extraction CLI.",
    no_args_is_help=True,
)


def _print_payload(payload: dict, compact: bool) -> None:
    typer.echo(json.dumps(payload, indent=None if compact else 2, ensure_ascii=False))


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log at DEBUG level."),
) -> None:
    """Configure logging for every sub-command."""
    # stdout carries the JSON payload, so logs go to stderr
    if verbose:
        setup_logging("DEBUG", stream=sys.stderr)


# ---------------------------------------------------------------------------
# Extraction commands
# ---------------------------------------------------------------------------
@app.command("extract")
def extract(
    url: str = typer.Option(..., help="Page URL to extract FAQs from."),
    compact: bool = typer.Option(False, help="Print single-line JSON."),
) -> None:
    """Fetch a URL and print the extracted FAQ payload."""
    from faqproxy.api.guards import validate_target_url
    from faqproxy.scraper import fetch_document

    try:
        target = validate_target_url(url)
        page = fetch_document(target)
        result = extract_faqs(page.html, page.url)
    except ProxyError as exc:
        typer.echo(f"[extract] {exc.message}", err=True)
        raise typer.Exit(1)

    _print_payload(result.to_payload(target), compact)
    if result.outcome != "success":
        raise typer.Exit(2)


@app.command("extract-file")
def extract_file(
    path: Path = typer.Option(..., exists=True, dir_okay=False, help="Local HTML file."),
    base_url: str = typer.Option(
        ..., "--base-url", help="URL the page was served from (resolves relative links)."
    ),
    compact: bool = typer.Option(False, help="Print single-line JSON."),
) -> None:
    """Run the extraction on a saved HTML page."""
    html = path.read_text(encoding="utf-8", errors="replace")
    try:
        result = extract_faqs(html, base_url)
    except ProxyError as exc:
        typer.echo(f"[extract-file] {exc.message}", err=True)
        raise typer.Exit(1)

    _print_payload(result.to_payload(base_url), compact)
    if result.outcome != "success":
        raise typer.Exit(2)


# ---------------------------------------------------------------------------
# Server
# ---------------------------------------------------------------------------
@app.command("serve")
def serve(
    host: str = typer.Option("127.0.0.1", help="Interface to bind."),
    port: int = typer.Option(8000, help="Port to listen on."),
    reload: bool = typer.Option(False, help="Reload on code changes."),
) -> None:
    """Start the HTTP API."""
    import uvicorn

    typer.echo(f"[serve] Listening on http://{host}:{port}")
    uvicorn.run("faqproxy.api.app:app", host=host, port=port, reload=reload)


# ---------------------------------------------------------------------------
# Entry-point
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    app()
