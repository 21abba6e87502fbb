"""newsdesk CLI — crawl articles, search news, and summarise results.

Usage:
    python cli/main.py --help

Commands:
    crawl    → extract article text from one or more URLs
    search   → list news search results for a query
    analyze  → search, crawl each hit, and print LLM summaries
"""

from __future__ import annotations

import sys
from pathlib import Path

# Ensure the project root is on sys.path so that `from newsdesk.xxx import ...`
# works when the CLI is invoked as `python cli/main.py` from any directory.
_ROOT = Path(__file__).resolve().parent.parent
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))

import asyncio
from typing import List

import typer

from newsdesk.errors import NewsdeskError
from newsdesk.logging_setup import configure_logging

app = typer.Typer(
    name="newsdesk",
    help="newsdesk backend CLI.",
    no_args_is_help=True,
)


@app.callback()
def main(verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging.")) -> None:
    configure_logging("DEBUG" if verbose else None)


# ---------------------------------------------------------------------------
# Crawl
# ---------------------------------------------------------------------------
@app.command("crawl")
def crawl(
    urls: List[str] = typer.Argument(..., help="Article URLs to crawl."),
) -> None:
    """Crawl URLs concurrently and print the extracted text of each."""
    from newsdesk.crawler import fetch_many

    typer.echo(f"[crawl] Fetching {len(urls)} URL(s) …")
    mapping = asyncio.run(fetch_many(urls))
    for url in urls:
        text = mapping.get(url, "")
        typer.echo("")
        typer.echo("=" * 72)
        typer.echo(f"[crawl] {url}")
        if text:
            typer.echo(f"[crawl] Length : {len(text)}")
            typer.echo(text)
        else:
            typer.echo("[crawl] No article text found.")


# ---------------------------------------------------------------------------
# Search
# ---------------------------------------------------------------------------
@app.command("search")
def search(
    query: str = typer.Argument(..., help="Search query, e.g. 경제."),
) -> None:
    """Print news search results for QUERY."""
    from newsdesk.news.client import NaverNewsClient

    try:
        items = asyncio.run(NaverNewsClient().search(query))
    except NewsdeskError as exc:
        typer.echo(f"[search] ❌ {exc}")
        raise typer.Exit(code=1)

    if not items:
        typer.echo(f"[search] No results for {query!r}.")
        return
    for item in items:
        typer.echo(f"  {item.pub_date}  {item.title}")
        typer.echo(f"      {item.article_url}")


# ---------------------------------------------------------------------------
# Analyze
# ---------------------------------------------------------------------------
@app.command("analyze")
def analyze(
    query: str = typer.Argument(..., help="Search query, e.g. 부동산."),
) -> None:
    """Search QUERY, crawl each article, and print its LLM summary."""
    from newsdesk.llm.client import LlmClient
    from newsdesk.news.analysis import analyze_news
    from newsdesk.news.client import NaverNewsClient

    async def _run():
        news = NaverNewsClient()
        llm = LlmClient()
        items = await news.search(query)
        return await analyze_news(items, llm)

    try:
        analyzed = asyncio.run(_run())
    except NewsdeskError as exc:
        typer.echo(f"[analyze] ❌ {exc}")
        raise typer.Exit(code=1)

    for item in analyzed:
        typer.echo("")
        typer.echo(f"■ {item.title}  ({item.published})")
        typer.echo(f"  {item.article_url}")
        typer.echo(f"  {item.summary or '(no summary)'}")


# ---------------------------------------------------------------------------
# Entry-point
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    app()
