#  Copyright © 2025 Dr.-Ing. Paul Wilhelm <paul@wilhelm.dev>
#  This file is part of Synth Agent.

from openai import OpenAI

from synth_agent.ai_provider.OpenAiProvider import OpenAiProvider
from synth_agent.ai_provider.AiProvider import AiProvider
from synth_agent.ai_provider.AiProviderParams import AiProviderParams


class LMStudioProvider(OpenAiProvider):
    """
    LM Studio provider (OpenAI-compatible local server, no API key).
    """

    def __init__(
            self,
            params: AiProviderParams,
            server_url: str,
    ):
        """
        Initialize LM Studio provider.
        :param params: AI provider parameters.
        :param server_url: Server URL.
        """
        # Skip the API key check of `OpenAiProvider`.
        AiProvider.__init__(
            self,
            params=params,
            server_url=server_url,
        )

        self.client = OpenAI(base_url=self.server_url, api_key="lm-studio", timeout=self.params.timeout_s)
