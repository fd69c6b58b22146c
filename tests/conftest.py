#  Copyright © 2025 Dr.-Ing. Paul Wilhelm <paul@wilhelm.dev>
#  This file is part of Synth Agent.

from typing import Any, Callable, Dict, List, Sequence

import pytest

from synth_agent.ai.AiManager import AiManager
from synth_agent.ai.AiResult import AiResult
from synth_agent.ai_provider.AiProvider import AiProvider
from synth_agent.ai_provider.AiProviderParams import AiProviderParams
from synth_agent.core.GenerationManager import GenerationManager


class ScriptedAiProvider(AiProvider):
    """
    AI provider replaying scripted outputs; exceptions in the script are raised instead.
    """

    def __init__(self, outputs: Sequence[Any], tokens_per_call: int = 10):
        AiProvider.__init__(
            self,
            params=AiProviderParams(model_generate="scripted", timeout_s=1.0),
            server_url="http://scripted.invalid",
        )
        self.outputs = list(outputs)
        self.tokens_per_call = tokens_per_call
        self.calls: List[Dict[str, Any]] = []

    def _perform_generate_callback(
            self,
            system_prompt: str,
            prompt: str,
            temperature: float,
            max_tokens: int,
    ) -> AiResult:
        self.calls.append({
            "system_prompt": system_prompt,
            "prompt": prompt,
            "temperature": temperature,
            "max_tokens": max_tokens,
        })

        output = self.outputs.pop(0)
        if isinstance(output, Exception):
            raise output

        return AiResult(total_tokens=self.tokens_per_call, output_text=output, finish_reason="stop")


@pytest.fixture
def no_sleep(monkeypatch):
    """
    Skip backoff delays.
    """
    monkeypatch.setattr("synth_agent.util.RetryManager.time.sleep", lambda _s: None)
    monkeypatch.setattr("synth_agent.core.HistoryManager.time.sleep", lambda _s: None)


@pytest.fixture
def make_generator(no_sleep) -> Callable[..., GenerationManager]:
    """
    Build a generation manager on top of a scripted AI provider.
    The provider is reachable as `generator.ai.ai_provider`.
    """
    def _make(outputs: Sequence[Any], retries: int = 3) -> GenerationManager:
        ai = AiManager(ai_provider=ScriptedAiProvider(outputs), retries=retries)
        return GenerationManager(ai=ai)

    return _make
