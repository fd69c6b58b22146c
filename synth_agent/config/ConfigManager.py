#  Copyright © 2025 Dr.-Ing. Paul Wilhelm <paul@wilhelm.dev>
#  This file is part of Synth Agent.

import click
from copy import deepcopy
from pathlib import Path
from typing import List, Optional

from synth_agent.ai_provider.AiProviderKeys import AiProviderKeys
from synth_agent.ai_provider.ai_provider_registry import ai_provider_registry

from synth_agent.core.CliManager import CliManager

from synth_agent.util.StorageManager import StorageManager


class ConfigManager(StorageManager, AiProviderKeys):
    """
    Config manager.
    """

    CONFIG_VERSION = 'config_version'

    SERVER_HOST = 'server_host'
    SERVER_PORT = 'server_port'

    HISTORY_MAX_RETRIES = 'history_max_retries'

    DEFAULT_CONFIG = {
        CONFIG_VERSION: 1,

        SERVER_HOST: "127.0.0.1",
        SERVER_PORT: 8009,

        HISTORY_MAX_RETRIES: 3,

        # deferred to `_prompt_ai_provider`
        AiProviderKeys.AI_PROVIDER: "",
        AiProviderKeys.AI_SERVER_URL: "",
        AiProviderKeys.AI_MODEL_GENERATE: "",
        AiProviderKeys.AI_API_KEY_ENV: "",

        AiProviderKeys.AI_TIMEOUT_S: 60,
        AiProviderKeys.AI_RETRIES: 10,
    }

    def __init__(
            self,
            cli: CliManager,
            settings_path: Path,
            profile_name: str,
            ai_provider_name: Optional[str] = None,
    ) -> None:
        """
        Initialize config manager.
        :param cli: CLI manager.
        :param settings_path: Settings path.
        :param profile_name: Profile name.
        :param ai_provider_name: AI provider for a new profile (prompted for if not given).
        """
        self.cli = cli

        self.default_config = deepcopy(self.DEFAULT_CONFIG)

        file_path = settings_path / profile_name / "config.json"

        if not file_path.exists():
            self.cli.logger.info(f"Creating profile: '{profile_name}'")
            self._set_ai_provider_defaults(ai_provider_name)
        else:
            self.cli.logger.info(f"Using profile: '{profile_name}'")

        StorageManager.__init__(self, file_path=file_path, default=self.default_config)

    def _set_ai_provider_defaults(self, ai_provider_name: Optional[str]) -> None:
        """
        Fill in deferred AI provider option values, prompting for the AI provider if not given.
        :param ai_provider_name: AI provider (optional).
        """
        if ai_provider_name is None:
            ai_provider_name = self.cli.prompt(
                "Select AI provider:",
                is_cmd=False,
                default=list(ai_provider_registry.keys())[0],
                type=click.Choice(list(ai_provider_registry.keys()), case_sensitive=False),
                show_choices=True,
            )

        if ai_provider_name not in ai_provider_registry:
            raise ValueError(
                f"Invalid AI provider: '{ai_provider_name}' (must be one of {list(ai_provider_registry.keys())})"
            )

        self.default_config.update(ai_provider_registry[ai_provider_name]["defaults"])

    def validate(self) -> List[str]:
        """
        Validate data.
        :return: Problems found (empty if data is valid).
        """
        problems = []

        if self.data.get(self.AI_PROVIDER) not in ai_provider_registry:
            problems.append(
                f"Unknown AI provider '{self.data.get(self.AI_PROVIDER)}' "
                f"(must be one of {list(ai_provider_registry.keys())})"
            )

        if not float(self.data.get(self.AI_TIMEOUT_S, 0)) > 0:
            problems.append(f"Option '{self.AI_TIMEOUT_S}' must be positive")

        for key in (self.AI_RETRIES, self.HISTORY_MAX_RETRIES):
            if not int(self.data.get(key, 0)) >= 1:
                problems.append(f"Option '{key}' must be at least 1")

        return problems
