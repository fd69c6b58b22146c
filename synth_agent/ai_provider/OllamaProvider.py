#  Copyright © 2025 Dr.-Ing. Paul Wilhelm <paul@wilhelm.dev>
#  This file is part of Synth Agent.

import httpx
from ollama import Client as OllamaClient

from synth_agent.ai_provider.AiProvider import AiProvider
from synth_agent.ai_provider.AiProviderError import AiProviderTimeoutError
from synth_agent.ai.AiResult import AiResult
from synth_agent.ai_provider.AiProviderParams import AiProviderParams


class OllamaProvider(AiProvider):
    """
    Ollama provider.
    """

    def __init__(
            self,
            params: AiProviderParams,
            server_url: str,
    ):
        """
        Initialize Ollama provider.
        :param params: AI provider parameters.
        :param server_url: Server URL.
        """
        AiProvider.__init__(
            self,
            params=params,
            server_url=server_url,
        )

        self.client = OllamaClient(host=self.server_url, timeout=self.params.timeout_s)

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
        :raises AiProviderTimeoutError: On timeout.
        """
        try:
            response = self.client.chat(
                model=self.params.model_generate,
                messages=[
                    {"role": "system", "content": system_prompt},
                    {"role": "user", "content": prompt},
                ],
                options={
                    "temperature": temperature,
                    "num_predict": max_tokens,
                },
            )
        except httpx.TimeoutException as e:
            raise AiProviderTimeoutError(f"Request timed out after {self.params.timeout_s} seconds: {e}") from e

        return AiResult(
            total_tokens=(response.get("prompt_eval_count") or 0) + (response.get("eval_count") or 0),
            output_text=response["message"]["content"] or "",
            finish_reason=response.get("done_reason") or "",
        )
