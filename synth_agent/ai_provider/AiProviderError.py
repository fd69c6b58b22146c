#  Copyright © 2025 Dr.-Ing. Paul Wilhelm <paul@wilhelm.dev>
#  This file is part of Synth Agent.


class AiProviderError(Exception):
    """
    AI provider error (retryable).
    """
    pass


class AiProviderTimeoutError(Exception):
    """
    AI provider error: request exceeded its timeout (non-retryable).
    A hanging chunk aborts the whole generation instead of blocking it.
    """
    pass
