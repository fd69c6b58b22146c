#  Copyright © 2025 Dr.-Ing. Paul Wilhelm <paul@wilhelm.dev>
#  This file is part of Synth Agent.

from typing import Optional, Type

from synth_agent.ai.AiManager import AiManager

from synth_agent.ai_provider.AiProvider import AiProvider, AiProviderParams

from synth_agent.core.CliManager import CliManager


class AiManagerFactory:

    def __init__(
            self,
            ai_provider_class: Type[AiProvider],
            ai_provider_params: AiProviderParams,
            server_url: str,
            retries: int,
            cli: Optional[CliManager] = None,
    ):
        """
        Initialize AI manager factory.
        The AI provider (and its HTTP client) is created once and shared by all AI managers.
        :param ai_provider_class: AI provider class.
        :param ai_provider_params: AI provider parameters.
        :param server_url: Server URL.
        :param retries: Maximum number of attempts per completion.
        :param cli: CLI manager (optional).
        """
        self.retries = retries
        self.cli = cli

        self.ai_provider: AiProvider = ai_provider_class(
            params=ai_provider_params,
            server_url=server_url,
        )

    def get_ai(self) -> AiManager:
        """
        Get new AI manager instance.
        """
        return AiManager(
            ai_provider=self.ai_provider,
            retries=self.retries,
            cli=self.cli,
        )
