#  Copyright © 2025 Dr.-Ing. Paul Wilhelm <paul@wilhelm.dev>
#  This file is part of Synth Agent.

import typer
import logging
import os
import json

from openai import OpenAI, APITimeoutError

from synth_agent.ai_provider.AiProvider import AiProvider
from synth_agent.ai_provider.AiProviderError import AiProviderError, AiProviderTimeoutError
from synth_agent.ai.AiResult import AiResult
from synth_agent.ai_provider.AiProviderParams import AiProviderParams

logger = logging.getLogger(__name__)


class OpenAiProvider(AiProvider):
    """
    OpenAI provider (also serves OpenAI-compatible APIs such as Groq).
    """

    def __init__(
            self,
            params: AiProviderParams,
            server_url: str,
    ):
        """
        Initialize OpenAI provider.
        :param params: AI provider parameters.
        :param server_url: Server URL.
        """
        AiProvider.__init__(
            self,
            params=params,
            server_url=server_url,
        )

        api_key_env = self.params.api_key_env or "OPENAI_API_KEY"
        api_key = os.getenv(api_key_env)
        if not api_key:
            logger.error(
                f"Missing {api_key_env}.\n"
                f"Please complete AI Provider Setup."
            )
            raise typer.Exit(code=1)

        self.client = OpenAI(base_url=self.server_url, api_key=api_key, timeout=self.params.timeout_s)

    def _perform_generate_callback(
            self,
            system_prompt: str,
            prompt: str,
            temperature: float,
            max_tokens: int,
    ) -> AiResult:
        """
        Generate callback.
        :param system_prompt: System instruction.
        :param prompt: User prompt.
        :param temperature: Sampling temperature.
        :param max_tokens: Maximum number of output tokens.
        :return: AI result.
        :raises AiProviderError: On retryable error.
        :raises AiProviderTimeoutError: On timeout.
        """
        try:
            # noinspection PyTypeChecker
            response = self.client.chat.completions.create(
                model=self.params.model_generate,
                messages=[
                    {"role": "system", "content": system_prompt},
                    {"role": "user", "content": prompt},
                ],
                temperature=temperature,
                max_tokens=max_tokens,
            )
        except APITimeoutError as e:
            raise AiProviderTimeoutError(f"Request timed out after {self.params.timeout_s} seconds: {e}") from e

        if not response.choices:
            formatted_response = json.dumps(response.model_dump(), indent=2, default=str)
            raise AiProviderError(f"Missing choices in response\n{formatted_response}")

        choice = response.choices[0]

        if getattr(choice.message, 'refusal', None):
            raise AiProviderError(f"Generate refusal: {choice.message.refusal}")

        return AiResult(
            total_tokens=response.usage.total_tokens if response.usage else 0,
            output_text=choice.message.content or "",
            finish_reason=choice.finish_reason or "",
        )
