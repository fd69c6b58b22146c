#  Copyright © 2025 Dr.-Ing. Paul Wilhelm <paul@wilhelm.dev>
#  This file is part of Synth Agent.

import logging
import os
from pathlib import Path
from typing import Optional, Type

from synth_agent.ai.AiManagerFactory import AiManagerFactory
from synth_agent.ai_provider.AiProviderParams import AiProviderParams
from synth_agent.config.ConfigManager import ConfigManager
from synth_agent.core.CliManager import CliManager
from synth_agent.core.GenerationManager import GenerationManager
from synth_agent.core.HistoryManager import HistoryManager, InsertRetryPolicy

from synth_agent.ai_provider.ai_provider_registry import ai_provider_registry
from synth_agent.ai_provider.AiProvider import AiProvider


logger = logging.getLogger(__name__)


SETTINGS_PATH_ENV = "SYNTH_AGENT_SETTINGS"
PROFILE_NAME_ENV = "SYNTH_AGENT_PROFILE"


class ContextManager:
    """
    Context manager.

    Builds every collaborator once and hands them out explicitly; there are no module-level clients.
    """

    def __init__(
            self,
            profile_name: Optional[str] = None,
            verbose: bool = False,
            settings_path: Optional[Path] = None,
    ):
        """
        Initialize context manager.
        :param profile_name: Optional profile name (defaults to $SYNTH_AGENT_PROFILE or "default").
        :param verbose: Set CLI verbosity.
        :param settings_path: Optional settings path (defaults to $SYNTH_AGENT_SETTINGS or ~/.synth-agent-settings).
        """
        if settings_path is None:
            settings_path = Path(os.getenv(SETTINGS_PATH_ENV, Path.home() / ".synth-agent-settings"))

        self.profile_name = profile_name or os.getenv(PROFILE_NAME_ENV, "default")

        self.cli = CliManager(verbose=verbose)

        self.config = ConfigManager(
            cli=self.cli,
            settings_path=settings_path,
            profile_name=self.profile_name,
        )

        self.ai_factory = AiManagerFactory(
            ai_provider_class=self._get_ai_provider_class(),
            ai_provider_params=self._get_ai_provider_params(),
            server_url=self.config.data[self.config.AI_SERVER_URL],
            retries=int(self.config.data[self.config.AI_RETRIES]),
            cli=self.cli,
        )

        self.history = HistoryManager(
            history_path=settings_path / self.profile_name / "history",
            retry_policy=InsertRetryPolicy(max_retries=int(self.config.data[self.config.HISTORY_MAX_RETRIES])),
        )

    def _get_ai_provider_class(self) -> Type[AiProvider]:
        """
        Get AI provider class from config.
        :return: AI provider class.
        """
        ai_provider_name = self.config.data[self.config.AI_PROVIDER]

        if ai_provider_name not in ai_provider_registry:
            raise ValueError(
                f"Invalid AI provider: '{ai_provider_name}' (must be one of {list(ai_provider_registry.keys())})"
            )

        ai_server_url = self.config.data[self.config.AI_SERVER_URL]
        logger.info(f"Using AI provider: '{ai_provider_name}' @ {ai_server_url}")

        return ai_provider_registry[ai_provider_name]["class"]

    def _get_ai_provider_params(self) -> AiProviderParams:
        """
        Get AI provider params.
        :return: AI provider params.
        """
        return AiProviderParams(
            model_generate=self.config.data[self.config.AI_MODEL_GENERATE],
            timeout_s=float(self.config.data[self.config.AI_TIMEOUT_S]),
            api_key_env=self.config.data[self.config.AI_API_KEY_ENV],
        )

    def get_generator(self, interactive: bool = True) -> GenerationManager:
        """
        Get new generation manager (one per request).
        :param interactive: Show progress on the console (disable for server requests).
        :return: Generation manager.
        """
        ai = self.ai_factory.get_ai()
        if not interactive:
            ai.cli = None
        return GenerationManager(ai=ai, cli=self.cli if interactive else None)

    def usage(self) -> None:
        """
        Show AI token usage.
        """
        self.cli.usage()
