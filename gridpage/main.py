from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import typer

from . import config
from .errors import ConfigError, DocumentIOError, FontResolutionError
from .models import Document, DocumentStatus, reset_engine
from .pipeline.ingest import ingest_documents, list_documents, slug_from_title
from .pipeline.render_preview import render_preview
from .pipeline.run import render_document, run_pipeline

app = typer.Typer(help="Grid page generator for checklists, trackers and note pages")


def _use_out_dir(out: Optional[Path]) -> None:
    if out:
        config.set_out_dir(out)
        reset_engine()


@app.callback()
def main(verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging")) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )


@app.command()
def render(
    layout: str = typer.Argument(..., help="habits | checklist | cornell | projects"),
    title: str = typer.Option("", "--title", help="Document title"),
    page_size: str = typer.Option(config.DEFAULT_PAGE_SIZE, "--page-size", help="Page size name"),
    month: Optional[str] = typer.Option(None, "--month", help="YYYY-MM for monthly layouts"),
    items: Optional[str] = typer.Option(None, "--items", help="Semicolon separated labels"),
    double_sided: bool = typer.Option(False, "--double-sided", help="Add a flipped second page"),
    out: Optional[Path] = typer.Option(None, "--out", help="Output directory"),
    preview: bool = typer.Option(False, "--preview", help="Also write a PNG of page 1"),
) -> None:
    _use_out_dir(out)
    title = title or layout.title()
    doc = Document(
        layout=layout,
        title=title,
        slug=slug_from_title(title),
        page_size=page_size,
        month=month,
        items=items,
        double_sided=double_sided,
    )
    try:
        path = render_document(doc)
    except (ConfigError, FontResolutionError, DocumentIOError, ValueError) as exc:
        typer.echo(f"FAILED: {exc}", err=True)
        raise typer.Exit(code=1)
    typer.echo(f"Wrote {path}")
    if preview:
        typer.echo(f"Wrote {render_preview(doc.slug, path)}")


@app.command()
def build(
    csv: Path = typer.Option(..., "--csv", help="CSV with layout,title[,page_size,month,items,double_sided]"),
    out: Optional[Path] = typer.Option(None, "--out", help="Output directory"),
    layout: Optional[str] = typer.Option(None, "--layout", help="Filter by layout"),
    dry_run_ingest: bool = typer.Option(False, "--dry-run-ingest", help="Only ingest CSV"),
) -> None:
    _use_out_dir(out)
    documents = ingest_documents(csv)
    typer.echo(f"Ingested {len(documents)} documents")
    if dry_run_ingest:
        return
    documents = list_documents([DocumentStatus.DRAFT], layout=layout)
    if not documents:
        typer.echo("No documents to render")
        return
    results = run_pipeline(documents)
    typer.echo(f"READY: {len(results['READY'])}")
    typer.echo(f"FAILED: {len(results['FAILED'])}")
    for slug in results["FAILED"]:
        typer.echo(f"FAILED: {slug}")


@app.command()
def retry(
    out: Optional[Path] = typer.Option(None, "--out", help="Output directory"),
) -> None:
    _use_out_dir(out)
    documents = list_documents([DocumentStatus.FAILED])
    if not documents:
        typer.echo("No documents to retry")
        return
    results = run_pipeline(documents)
    typer.echo(f"READY: {len(results['READY'])}")
    typer.echo(f"FAILED: {len(results['FAILED'])}")


@app.command()
def preview(
    pdf: Path = typer.Argument(..., help="PDF to preview"),
    out: Optional[Path] = typer.Option(None, "--out", help="Output directory"),
) -> None:
    _use_out_dir(out)
    if not pdf.exists():
        typer.echo(f"Not found: {pdf}", err=True)
        raise typer.Exit(code=1)
    typer.echo(f"Wrote {render_preview(pdf.stem, pdf)}")


if __name__ == "__main__":
    app()
