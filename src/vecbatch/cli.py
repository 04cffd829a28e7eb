"""CLI entrypoint for vecbatch."""

from __future__ import annotations

import asyncio
from pathlib import Path
import time
from typing import Optional

import typer

from vecbatch.config import EmbeddingsSettings, load_dotenv
from vecbatch.embeddings.batch import embed_documents
from vecbatch.embeddings.client import create_embeddings_client
from vecbatch.embeddings.errors import EmbeddingError
from vecbatch.embeddings.models import MODEL_DIMS, model_dims
from vecbatch.embeddings.types import Embedding
from vecbatch.observability import configure_logging
from vecbatch.ratelimit import parse_ratelimit_duration
from vecbatch.storage import append_jsonl, read_documents, write_jsonl
from vecbatch.ui.progress import build_progress
from vecbatch.ui.render import (
    render_banner,
    render_error,
    render_info,
    render_models_table,
    render_success,
    render_summary_table,
)

app = typer.Typer(add_completion=False, help="Batched text embeddings with rate-limit backoff.")
ratelimit_app = typer.Typer(add_completion=False, help="Rate-limit header utilities.")
app.add_typer(ratelimit_app, name="ratelimit")


@app.callback(invoke_without_command=True)
def root(ctx: typer.Context) -> None:
    """vecbatch embeddings CLI."""
    load_dotenv()
    try:
        settings = EmbeddingsSettings.from_env()
    except ValueError as exc:
        render_error(f"Invalid configuration: {exc}")
        raise typer.Exit(code=1) from exc
    configure_logging(settings.log_level, json_output=settings.log_json)
    ctx.obj = settings
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit(code=0)


@app.command("embed")
def embed(
    ctx: typer.Context,
    input_path: Path = typer.Argument(..., help="Text file with one document per line."),
    output: Path = typer.Option(Path("embeddings.jsonl"), "--output", "-o"),
    model: Optional[str] = typer.Option(None, "--model", "-m"),
    mode: Optional[str] = typer.Option(None, "--mode", help="openai or mock."),
    batch_size: Optional[int] = typer.Option(None, "--batch-size", "-b", min=1),
    append: bool = typer.Option(False, "--append", help="Append to the output instead of overwriting."),
) -> None:
    """Embed every line of INPUT_PATH and write JSONL records."""
    settings: EmbeddingsSettings = ctx.obj
    resolved_mode = mode or settings.mode
    resolved_model = model or settings.model
    resolved_batch = batch_size or settings.batch_size

    if not input_path.is_file():
        render_error(f"Input file not found: {input_path}")
        raise typer.Exit(code=1)
    documents = read_documents(input_path)
    if not documents:
        render_error(f"No documents in {input_path}.")
        raise typer.Exit(code=1)

    render_banner("vecbatch", f"Embedding {len(documents)} documents with {resolved_model} ({resolved_mode})")
    start = time.monotonic()
    try:
        embeddings = asyncio.run(
            _run_embed(settings, resolved_mode, resolved_model, documents, resolved_batch)
        )
    except (EmbeddingError, ValueError) as exc:
        render_error(f"Embedding failed: {exc}")
        raise typer.Exit(code=1) from exc
    elapsed_s = time.monotonic() - start

    records = [
        {"index": index, **embedding.to_dict()}
        for index, embedding in enumerate(embeddings)
    ]
    if append:
        for record in records:
            append_jsonl(output, record)
    else:
        write_jsonl(output, records)

    dims = len(embeddings[0].vec) if embeddings else 0
    render_success(f"Wrote {len(records)} embeddings.")
    render_summary_table(
        [
            ("Model", resolved_model),
            ("Mode", resolved_mode),
            ("Documents", str(len(documents))),
            ("Dimensions", str(dims)),
            ("Batch size", str(resolved_batch)),
            ("Elapsed", f"{elapsed_s:.2f}s"),
            ("Output", str(output)),
        ]
    )


@app.command("models")
def models(ctx: typer.Context) -> None:
    """List known embedding models."""
    settings: EmbeddingsSettings = ctx.obj
    render_models_table(MODEL_DIMS, settings.model)


@ratelimit_app.command("parse")
def ratelimit_parse(value: str = typer.Argument(..., help="Header value such as 6m10s or 500ms.")) -> None:
    """Show the wait a rate-limit reset header asks for."""
    duration = parse_ratelimit_duration(value)
    if duration is None:
        render_error(f"Could not determine a retry duration from {value!r}.")
        raise typer.Exit(code=1)
    typer.echo(f"{duration.total_seconds():g}")
    render_info(f"{value} -> {duration}")


async def _run_embed(
    settings: EmbeddingsSettings,
    mode: str,
    model: str,
    documents: list[str],
    batch_size: int,
) -> list[Embedding]:
    if mode == "openai":
        client = create_embeddings_client(
            mode,
            model,
            api_key=settings.api_key,
            base_url=settings.base_url,
            timeout_s=settings.timeout_s,
        )
    else:
        client = create_embeddings_client(mode, model, dims=model_dims(model) or 1536)

    try:
        with build_progress() as progress:
            task_id = progress.add_task("Embedding", total=len(documents))

            def on_batch(done: int, total: int) -> None:
                progress.update(task_id, completed=done, total=total)

            return await embed_documents(client, documents, batch_size=batch_size, on_batch=on_batch)
    finally:
        await client.aclose()


def main() -> None:
    app()


if __name__ == "__main__":
    main()
