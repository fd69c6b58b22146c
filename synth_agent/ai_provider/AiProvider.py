#  Copyright © 2025 Dr.-Ing. Paul Wilhelm <paul@wilhelm.dev>
#  This file is part of Synth Agent.

import logging
from abc import ABC, abstractmethod

from synth_agent.ai.AiResult import AiResult

from synth_agent.ai_provider.AiProviderParams import AiProviderParams

logger = logging.getLogger(__name__)


class AiProvider(ABC):
    """
    AI provider.
    """

    def __init__(
            self,
            params: AiProviderParams,
            server_url: str,
    ):
        """
        Initialize AI provider.
        :param params: AI provider parameters.
        :param server_url: Server URL.
        """
        self.params = params
        self.server_url = server_url

    @abstractmethod
    def _perform_generate_callback(
            self,
            system_prompt: str,
            prompt: str,
            temperature: float,
            max_tokens: int,
    ) -> AiResult:
        """
        Perform generate callback.
        :param system_prompt: System instruction.
        :param prompt: User prompt.
        :param temperature: Sampling temperature.
        :param max_tokens: Maximum number of output tokens.
        :return: AI result (output text may be empty).
        :raises AiProviderError: On retryable error.
        :raises AiProviderTimeoutError: On timeout.
        """
        raise NotImplementedError

    def generate_callback(
            self,
            system_prompt: str,
            prompt: str,
            temperature: float,
            max_tokens: int,
    ) -> AiResult:
        """
        Generate callback.
        NOTE: This call is NOT cached, as every chunk is expected to yield novel data.
        :param system_prompt: System instruction.
        :param prompt: User prompt.
        :param temperature: Sampling temperature.
        :param max_tokens: Maximum number of output tokens.
        :return: AI result.
        :raises AiProviderError: On retryable error.
        :raises AiProviderTimeoutError: On timeout.
        """
        logger.debug(
            f"Requesting '{self.params.model_generate}' @ {self.server_url} "
            f"(temperature={temperature:.2f}, max_tokens={max_tokens})"
        )
        return self._perform_generate_callback(
            system_prompt=system_prompt,
            prompt=prompt,
            temperature=temperature,
            max_tokens=max_tokens,
        )
