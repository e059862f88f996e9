"""CLI entrypoint for the Apple docs search service."""

from __future__ import annotations

import json
import os
from urllib.parse import quote
from typing import List, Optional

import requests
import typer

app = typer.Typer(name="adocs", help="Apple documentation search command-line interface")

DEFAULT_HOST = "http://127.0.0.1:5180"


def _resolve_host(override: Optional[str]) -> str:
    if override:
        return override.rstrip('/')
    env_host = os.environ.get("ADOCS_HOST")
    if env_host:
        return env_host.rstrip('/')
    return DEFAULT_HOST


def _request(method: str, path: str, host: Optional[str] = None, **kwargs) -> requests.Response:
    base = _resolve_host(host)
    url = f"{base}{path}"
    resp = requests.request(method, url, timeout=60, **kwargs)
    if not resp.ok:
        try:
            detail = resp.json()
        except Exception:  # noqa: BLE001
            detail = resp.text
        typer.echo(f"Request failed ({resp.status_code}): {detail}", err=True)
        raise typer.Exit(code=1)
    return resp


@app.command()
def search(
    query: str = typer.Argument(..., help="Search query, e.g. 'SwiftUI custom transition animation'"),
    limit: Optional[int] = typer.Option(None, "--limit", help="Number of results to return (server default 10)"),
    min_similarity: Optional[float] = typer.Option(None, "--min-similarity", help="Similarity floor (server default 0.3)"),
    related: bool = typer.Option(True, "--related/--no-related", help="Include related documents"),
    code_preview: bool = typer.Option(False, "--code-preview", help="Show the first code block of each hit"),
    host: Optional[str] = typer.Option(None, "--host", help="Override backend host"),
) -> None:
    """Semantic search over the documentation corpus."""
    payload = {
        "query": query,
        "limit": limit,
        "min_similarity": min_similarity,
        "include_related": related,
        "show_code_preview": code_preview,
    }
    resp = _request("POST", "/search", host=host, json=payload)
    typer.echo(json.dumps(resp.json(), indent=2, ensure_ascii=False))


@app.command()
def doc(
    ids: List[str] = typer.Argument(..., help="One or more document IDs (max 10)"),
    host: Optional[str] = typer.Option(None, "--host", help="Override backend host"),
) -> None:
    """Fetch full documents."""
    if len(ids) == 1:
        resp = _request("GET", f"/documents/{quote(ids[0], safe='')}", host=host)
    else:
        resp = _request("POST", "/documents", host=host, json={"ids": ids})
    typer.echo(json.dumps(resp.json(), indent=2, ensure_ascii=False))


@app.command()
def code(
    doc_id: str = typer.Argument(..., help="Document ID from search results"),
    host: Optional[str] = typer.Option(None, "--host", help="Override backend host"),
) -> None:
    """Extract code examples from one document."""
    resp = _request("GET", f"/documents/{quote(doc_id, safe='')}/code-examples", host=host)
    typer.echo(json.dumps(resp.json(), indent=2, ensure_ascii=False))


@app.command()
def stats(
    host: Optional[str] = typer.Option(None, "--host", help="Override backend host"),
) -> None:
    """Show corpus statistics."""
    resp = _request("GET", "/stats", host=host)
    typer.echo(json.dumps(resp.json(), indent=2, ensure_ascii=False))


if __name__ == "__main__":
    app()
