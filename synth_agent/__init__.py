#  Copyright © 2025 Dr.-Ing. Paul Wilhelm <paul@wilhelm.dev>
#  This file is part of Synth Agent.

from importlib.metadata import version, PackageNotFoundError

from rich.logging import RichHandler
import logging

from rich.highlighter import ReprHighlighter
from rich.text import Text
import re


class CustomLogHighlighter(ReprHighlighter):
    """
    A highlighter that keeps Rich's formatting of numbers and strings,
    mutes noisy domain words, and highlights the outcome of each chunk.
    """

    def __init__(self) -> None:
        """
        Initialize with keyword-to-style mapping.
        """
        super().__init__()

        self.custom_keywords: dict[str, str] = {
            "accepted": "cyan3",
            "dropped": "deep_pink1",
            "merged": "bold green",
            "stored": "bold green",
            "failed": "bold red",
        }

        self.unwanted_words: tuple[str, ...] = (
            "chunk",
            "record",
            "token",
            "format",
            "temperature",
            "prompt",
        )

    def highlight(self, text: Text) -> None:
        """
        Apply ReprHighlighter, strip styles from muted words, and apply keyword styles.

        :param text: The rich Text object to be highlighted.
        """
        super().highlight(text)

        raw_text = text.plain

        for word in self.unwanted_words:
            for match in re.finditer(rf"\b{re.escape(word)}\b", raw_text, re.IGNORECASE):
                text.stylize("default", match.start(), match.end())

        for word, style in self.custom_keywords.items():
            for match in re.finditer(rf"\b{re.escape(word)}\b", raw_text, re.IGNORECASE):
                text.stylize(style, match.start(), match.end())


# Setup logging
logging.basicConfig(
    level=logging.INFO,
    format="%(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
    handlers=[
        RichHandler(
            markup=False,
            rich_tracebacks=True,
            highlighter=CustomLogHighlighter(),
            show_path=False,
        )
    ]
)

logging.getLogger("httpx").setLevel(logging.WARNING)

# Get version
try:
    __version__ = version("synth-agent")
except PackageNotFoundError:
    __version__ = "unknown"
