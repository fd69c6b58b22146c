#  Copyright © 2025 Dr.-Ing. Paul Wilhelm <paul@wilhelm.dev>
#  This file is part of Synth Agent.

import json
import logging
import threading
from contextlib import contextmanager
from typing import Callable, Dict, Any

import typer
from rich.console import Console, Group
from rich.live import Live
from rich.logging import RichHandler
from rich.panel import Panel
from rich.pretty import Pretty
from rich.progress import Progress, SpinnerColumn, BarColumn, TextColumn, TimeElapsedColumn
from rich.table import Table

from synth_agent.ai.AiResult import AiResult
from synth_agent.generate.GenerationSchema import DataFormat, GenerationOutput


class CliManager:
    """
    CLI manager.
    """

    VERBOSE_GENERATE: bool = False  # enabled by --verbose flag
    VERBOSE_USAGE: bool = False  # enabled by --verbose flag

    def __init__(self, verbose: bool = False):
        """
        Initialize CLI manager.
        :param verbose: Verbosity switch.
        """
        CliManager.VERBOSE_GENERATE = verbose
        CliManager.VERBOSE_USAGE = verbose

        self.logger = logging.getLogger()

        self.console = self._get_log_console()

        self.ai_usage_stats: Dict[str, int] = {
            "generate": 0,
        }
        self.lock = threading.Lock()

    def _get_log_console(self) -> Console:
        """
        Get the console of the configured RichHandler, so progress bars and log lines share one console.
        :return: Console.
        """
        for handler in self.logger.handlers:
            if isinstance(handler, RichHandler):
                return handler.console
        return Console(markup=False)

    def update_ai_usage(self, stats: Dict[str, int]):
        """
        Thread-safe method to update AI usage statistics.
        :param stats: A dictionary with token counts to add.
        """
        with self.lock:
            for category, value in stats.items():
                if category in self.ai_usage_stats:
                    self.ai_usage_stats[category] += value

    def get_ai_usage_renderable(self) -> Table:
        """
        Create a Rich Table to display AI usage statistics.
        :return: A Rich Table object.
        """
        table = Table(
            title="AI Usage",
            show_header=False,
            show_edge=False,
            pad_edge=False,
            box=None,
            padding=(0, 2)
        )

        with self.lock:
            table.add_column(style="cyan", no_wrap=True)
            for _ in self.ai_usage_stats:
                table.add_column(justify="right", style="magenta")

            table.add_row("Category", *[c.capitalize() for c in self.ai_usage_stats.keys()])
            table.add_row("Tokens", *[str(v) for v in self.ai_usage_stats.values()])

        return table

    def usage(self) -> None:
        """
        Show AI token usage.
        """
        with self.lock:
            tokens = sum(self.ai_usage_stats.values())

        if tokens > 0:
            self.logger.info(f"Used ({tokens}) AI API token(s) for generation")
        else:
            self.logger.info("No AI API tokens used")

    @contextmanager
    def progress_context(self, title: str, total: int) -> Any:
        """
        A context manager for displaying a progress bar together with AI usage stats.
        Log records are printed above the live display, as they share the same console.
        :param title: The title for the overall progress bar.
        :param total: The total number of items for the progress bar.
        """
        progress = Progress(
            SpinnerColumn(),
            TextColumn("[bold magenta]{task.description}"),
            BarColumn(),
            TextColumn("[progress.percentage]{task.percentage:>3.0f}%"),
            TimeElapsedColumn(),
        )
        overall_task_id = progress.add_task(f"[bold blue]{title}", total=total)

        def get_renderable() -> Group:
            return Group(
                progress,
                self.get_ai_usage_renderable()
            )

        with Live(get_renderable(), console=self.console, screen=False, transient=True, refresh_per_second=8) as live:
            def advance() -> None:
                progress.advance(overall_task_id)
                live.update(get_renderable())

            yield advance

    def format_json(self, text: str) -> None:
        """
        Format text as JSON.
        :param text: Text.
        """
        try:
            data = json.loads(text)
            pretty = Pretty(data, expand_all=True)
            self.console.print(Panel(pretty, title="Structured output", style="blue", border_style="blue"))
        except json.JSONDecodeError:
            self.console.print(Panel(f"{text}", title="Raw output", style="red", border_style="red"))

    def prompt(self, message: str, is_cmd: bool, **kwargs) -> str:
        """
        Prompt user with message.
        :param message: Message.
        :param is_cmd: Enables "> " command style prompt.
        :param kwargs: Additional arguments for typer.prompt.
        :return: User input.
        """
        if is_cmd:
            self.logger.info(f"⚡ Synth Agent: {message}")
            return typer.prompt("", prompt_suffix="> ", **kwargs)
        else:
            self.logger.info(f"⚡ Synth Agent")
            return typer.prompt(message, prompt_suffix="", **kwargs)

    def format_ai_generate(
            self,
            callback: Callable[[], AiResult],
            prompt: str,
            chunk_index: int,
            chunks_total: int,
    ) -> AiResult:
        """
        Format prompt and AI result of generate callback.
        :param callback: Generate callback returning AI result.
        :param prompt: Prompt.
        :param chunk_index: Chunk index (0-based).
        :param chunks_total: Total number of chunks.
        :return: AI result.
        """
        if CliManager.VERBOSE_GENERATE:
            self.console.print(Panel(
                f"{prompt}",
                title=f"Prompt ({chunk_index + 1}/{chunks_total})",
                style="magenta",
                border_style="magenta",
            ))
            self.logger.info("✨ Awaiting AI generation…")

        result: AiResult = callback()

        self.update_ai_usage({"generate": result.total_tokens})

        if CliManager.VERBOSE_USAGE:
            self.logger.info(f"Used ({result.total_tokens}) AI API token(s) for chunk ({chunk_index + 1}/{chunks_total})")

        if CliManager.VERBOSE_GENERATE:
            self.console.print(Panel(f"{result.output_text}", title="Raw output", style="blue", border_style="blue"))

        return result

    def format_output(self, output: GenerationOutput) -> None:
        """
        Format generation output.
        :param output: Generation output.
        """
        if output.format == DataFormat.JSON:
            self.format_json(output.data)
        else:
            self.console.print(Panel(f"{output.data}", title=f"{output.format.value} output", style="blue", border_style="blue"))

        self.logger.info(
            f"Generated ({output.total_records}) record(s) in ({output.chunks_count}) chunk(s)"
        )
