#  Copyright © 2025 Dr.-Ing. Paul Wilhelm <paul@wilhelm.dev>
#  This file is part of Synth Agent.

from dataclasses import dataclass, field


@dataclass
class AiResult:
    """
    AI result.
    """

    total_tokens: int = field(default=0)

    output_text: str = field(default="")

    finish_reason: str = field(default="")
