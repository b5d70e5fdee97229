"""Configuration of the arithmetic engine."""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional

# math.fma exists from Python 3.13 on; it is a correctly rounded fused multiply-add.
HAS_FMA: bool = hasattr(math, 'fma')


@dataclass(frozen=True)
class ArithmeticConfig:
    """Capabilities used when building an ExpansionArithmetic.

    Attributes
    ----------
    use_fma : bool or None
        Compute product tails with a fused multiply-add. ``None`` uses FMA
        whenever the interpreter provides one. Requesting FMA on an
        interpreter without it falls back to Dekker's product; both give
        bit-identical results.
    """
    use_fma: Optional[bool] = None

    def resolve_fma(self) -> bool:
        if self.use_fma is None:
            return HAS_FMA
        return bool(self.use_fma) and HAS_FMA


DEFAULT_CONFIG = ArithmeticConfig()

__all__ = ['HAS_FMA', 'ArithmeticConfig', 'DEFAULT_CONFIG']
