#  Copyright © 2025 Dr.-Ing. Paul Wilhelm <paul@wilhelm.dev>
#  This file is part of Synth Agent.

import time
import logging
from typing import Callable, Optional, Any, Dict

import httpx

from synth_agent.ai_provider.AiProviderError import AiProviderError, AiProviderTimeoutError
from synth_agent.generate.GenerationError import CompletionError

from openai import OpenAIError, APITimeoutError

from ollama import RequestError, ResponseError

logger = logging.getLogger(__name__)


class RetryManager:
    """
    Retry manager.

    Completion calls are retried on provider, rate-limit and transport errors with exponential backoff.
    Timeouts are never retried. Both exhaustion and timeouts surface as `CompletionError`.
    """

    TIMEOUT_ERRORS = (
        AiProviderTimeoutError,
        APITimeoutError,
        httpx.TimeoutException,
    )

    RETRYABLE_ERRORS = (
        AiProviderError,
        OpenAIError,  # includes rate limiting
        RequestError,
        ResponseError,
        httpx.HTTPError,
    )

    def __init__(
            self,
            retries: int = 1,
            delay_min: float = 1.0,
            delay_max: float = 60.0,
            backoff_exponent: float = 2.0,
    ):
        """
        Initialize retry manager.
        :param retries: Maximum number of attempts per call.
        :param delay_min: Delay after the first failed attempt (in seconds).
        :param delay_max: Maximum backoff delay (in seconds).
        :param backoff_exponent: Exponential backoff multiplier.
        """
        self.retries = retries
        self.delay_min = delay_min
        self.delay_max = delay_max
        self.backoff_exponent = backoff_exponent

        self.backoff_delay = self.delay_min
        self.fail_budget = self.retries

    def apply_delay(self) -> None:
        """
        Wait, then grow the delay for the next failure (capped at `delay_max`).
        """
        logger.warning(f"Waiting for {self.backoff_delay} seconds (exponential backoff) …")
        time.sleep(self.backoff_delay)
        self.backoff_delay = min(self.backoff_delay * self.backoff_exponent, self.delay_max)

    def retry(self, func: Callable[..., Any], kwargs: Optional[Dict[str, Any]] = None) -> Any:
        """
        Call function until it succeeds or the attempt budget is spent.
        Every call starts with a fresh budget and backoff.
        :param func: Callable to execute with retries.
        :param kwargs: Optional keyword arguments passed to the callable.
        :return: The result returned by the callable.
        :raises CompletionError: If all attempts fail, or an attempt times out.
        """
        self.backoff_delay = self.delay_min
        self.fail_budget = self.retries

        last_error: Optional[Exception] = None

        while self.fail_budget > 0:
            try:
                return func(**(kwargs or {}))

            except self.TIMEOUT_ERRORS as e:
                logger.error(f"Request timed out – not retrying: {e}")
                raise CompletionError(f"Completion timed out: {e}") from e

            except self.RETRYABLE_ERRORS as e:
                last_error = e
                self.fail_budget -= 1
                logger.warning(f"Attempt {self.retries - self.fail_budget} of {self.retries} failed: {e}")
                if self.fail_budget > 0:
                    self.apply_delay()

        logger.error("All attempts failed – not recoverable")
        raise CompletionError(f"Completion failed after {self.retries} attempt(s): {last_error}") from last_error
