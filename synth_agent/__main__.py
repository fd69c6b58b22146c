#  Copyright © 2025 Dr.-Ing. Paul Wilhelm <paul@wilhelm.dev>
#  This file is part of Synth Agent.

import typer
import logging
from pathlib import Path

from synth_agent.core.ContextManager import ContextManager
from synth_agent.generate.GenerationError import GenerationError
from synth_agent.generate.GenerationSchema import DataFormat, GenerationRequest, SizeTier
from synth_agent.server.GenerateServer import GenerateServer
from synth_agent.util.format import format_file, format_history_record


logger = logging.getLogger(__name__)


app = typer.Typer(
    invoke_without_command=True,
    add_completion=False,
    help="Generate synthetic datasets (JSON, CSV, text) with an LLM.",
)


@app.callback()
def root(ctx: typer.Context) -> None:
    """
    Root callback that runs when no subcommand is provided.
    """
    if ctx.invoked_subcommand is not None:
        return  # Handle subcommand.

    typer.echo(ctx.get_help())

    logger.info("💡 Generate your first dataset ('synth-agent generate \"user profiles\"')")

    raise typer.Exit()


@app.command()
def config() -> None:
    """
    Show current profile config.
    """
    context = ContextManager()

    logger.info(f"Config file: {format_file(context.config.file_path)}")
    for key, value in context.config.data.items():
        logger.info(f"- {key}: {value!r}")


# noinspection PyShadowingBuiltins
@app.command()
def generate(
        prompt: str = typer.Argument(None),
        format: DataFormat = typer.Option(
            DataFormat.JSON,
            "--format",
            case_sensitive=False,
            help="Output format."
        ),
        size: SizeTier = typer.Option(
            SizeTier.SMALL,
            "--size",
            case_sensitive=False,
            help="Size tier: small (1 chunk), medium (3 chunks), large (8 chunks)."
        ),
        to_file: Path = typer.Option(
            None,
            "--to-file",
            help="Write generated data to file."
        ),
        nostore: bool = typer.Option(
            False,
            "--nostore",
            help="Do not store the generation in the history."
        ),
        verbose: bool = typer.Option(
            False,
            "--verbose",
            help="Show prompts and raw model output of every chunk."
        ),
) -> None:
    """
    Generate a dataset from a prompt.
    """
    context = ContextManager(verbose=verbose)

    if prompt is None:
        prompt = context.cli.prompt("🧪 Describe the data to generate…", is_cmd=True)

    request = GenerationRequest(prompt=prompt, format=format, size_tier=size)

    try:
        output = context.get_generator().generate(request)
    except GenerationError as e:
        logger.error(f"Generation failed: {e}")
        raise typer.Exit(code=1)

    context.cli.format_output(output)

    if to_file is not None:
        to_file.parent.mkdir(parents=True, exist_ok=True)
        to_file.write_text(output.data, encoding="utf-8")
        logger.info(f"Writing data to file: {format_file(to_file)}")

    if not nostore:
        context.history.store(request, output)

    context.usage()

    logger.info("⚡  Process finished")


@app.command()
def history() -> None:
    """
    Show the list of stored generations.
    """
    context = ContextManager()

    records = context.history.list()
    if not records:
        logger.info("💡 Nothing generated yet ('synth-agent generate')")
        return

    logger.info(f"Found ({len(records)}) stored generation(s):")
    for record in records:
        logger.info(f"- {record.get('id')}: {format_history_record(record)}")


@app.command()
def serve() -> None:
    """
    Start HTTP server.
    """
    context = ContextManager()

    logger.info("💡 Server is starting…")

    server = GenerateServer(
        get_generator=lambda: context.get_generator(interactive=False),
        history=context.history,
        host=context.config.data[context.config.SERVER_HOST],
        port=int(context.config.data[context.config.SERVER_PORT]),
    )
    server.start()


if __name__ == "__main__":
    app()
