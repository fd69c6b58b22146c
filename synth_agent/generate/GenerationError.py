#  Copyright © 2025 Dr.-Ing. Paul Wilhelm <paul@wilhelm.dev>
#  This file is part of Synth Agent.


class GenerationError(Exception):
    """
    Generation error.
    """
    pass


class CompletionError(GenerationError):
    """
    Completion error: the model call failed, timed out, or returned empty content.
    """
    pass


class ExtractionError(GenerationError):
    """
    Extraction error: the model output does not yield valid data for the requested format.
    """
    pass


class MergeError(GenerationError):
    """
    Merge error (recoverable).
    Only ever logged; the merger falls back to a degraded output instead of raising.
    """
    pass
