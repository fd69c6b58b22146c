#  Copyright © 2025 Dr.-Ing. Paul Wilhelm <paul@wilhelm.dev>
#  This file is part of Synth Agent.

import logging
from typing import Optional

from synth_agent.ai.AiResult import AiResult
from synth_agent.ai_provider.AiProvider import AiProvider

from synth_agent.core.CliManager import CliManager
from synth_agent.util.RetryManager import RetryManager

logger = logging.getLogger(__name__)


class AiManager(RetryManager):
    """
    AI manager.
    NOTE: Holds retry state, so use one instance per generation (see `AiManagerFactory`).
    """

    def __init__(
            self,
            ai_provider: AiProvider,
            retries: int = 10,
            cli: Optional[CliManager] = None,
    ):
        """
        Initialize AI manager.
        :param ai_provider: AI provider.
        :param retries: Maximum number of attempts per completion.
        :param cli: CLI manager (optional, enables console output).
        """
        self.ai_provider = ai_provider
        self.cli = cli

        RetryManager.__init__(
            self,
            delay_min=1.0,
            delay_max=60,
            backoff_exponent=2,
            retries=retries,
        )

    def generate(
            self,
            system_prompt: str,
            prompt: str,
            temperature: float,
            max_tokens: int,
            chunk_index: int = 0,
            chunks_total: int = 1,
    ) -> AiResult:
        """
        Generate one chunk of raw output.
        :param system_prompt: System instruction.
        :param prompt: Prompt.
        :param temperature: Sampling temperature.
        :param max_tokens: Maximum number of output tokens.
        :param chunk_index: Chunk index (0-based, for display).
        :param chunks_total: Total number of chunks (for display).
        :return: AI result (output text may be empty).
        :raises CompletionError: If all attempts fail or a request times out.
        """
        callback = lambda: self.ai_provider.generate_callback(
            system_prompt=system_prompt,
            prompt=prompt,
            temperature=temperature,
            max_tokens=max_tokens,
        )

        if self.cli is not None:
            result: AiResult = self.cli.format_ai_generate(
                callback=lambda: self.retry(callback),
                prompt=prompt,
                chunk_index=chunk_index,
                chunks_total=chunks_total,
            )
        else:
            result = self.retry(callback)

        if result.finish_reason == 'length':
            logger.warning(f"Chunk ({chunk_index + 1}/{chunks_total}) hit the token limit ({max_tokens}); output may be truncated")

        return result
