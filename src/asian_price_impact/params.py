"""Parameter classes for path-enumeration configuration.

The pricing functions take an optional ``params`` argument; ``None`` means
the defaults below.
"""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class EnumerationParams:
    """Parameters for exhaustive binomial path enumeration.

    Attributes
    ==========
    block_size:
        Number of move sequences expanded and reduced at once. Bounds the
        working memory to O(block_size * n) regardless of the 2^n total.
        Paths are always visited in index order; the block size only changes
        how partial sums are grouped.
        Default: 16384.
    log_timings:
        Emit a debug log line with the wall-clock time of each pricing call.
        Default: False.
    warn_steps:
        Input validation warns when the number of steps exceeds this value,
        since 2^n paths are enumerated. Default: 20.
    """

    block_size: int = 16_384
    log_timings: bool = False
    warn_steps: int = 20

    def __post_init__(self):
        if self.block_size < 1:
            raise ValueError(f"block_size must be >= 1, got {self.block_size}")
        if self.warn_steps < 0:
            raise ValueError(f"warn_steps must be >= 0, got {self.warn_steps}")


DEFAULT_PARAMS = EnumerationParams()
