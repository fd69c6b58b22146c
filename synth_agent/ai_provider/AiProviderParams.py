#  Copyright © 2025 Dr.-Ing. Paul Wilhelm <paul@wilhelm.dev>
#  This file is part of Synth Agent.


class AiProviderParams:
    """
    AI provider parameters.
    """

    def __init__(
            self,
            model_generate: str,
            timeout_s: float,
            api_key_env: str = "",
    ):
        """
        Initialize AI provider parameters.
        :param model_generate: Model for data generation.
        :param timeout_s: Timeout per completion request (in seconds).
        :param api_key_env: Name of the environment variable holding the API key (leave empty if not needed).
        """
        self.model_generate = model_generate
        self.timeout_s = timeout_s
        self.api_key_env = api_key_env
