"""Error kinds raised by pool operations.

Every error leaves ledger state exactly as it was before the operation.
"""


class AMMError(Exception):
    """Base class for rejected pool operations."""

    message = "AMM operation failed"

    def __init__(self, detail: str = ""):
        self.detail = detail
        super().__init__(f"{self.message}: {detail}" if detail else self.message)


class PoolNotFound(AMMError):
    message = "Pool does not exist"


class PoolAlreadyExists(AMMError):
    message = "Pool already exists"


class InsufficientLiquidity(AMMError):
    message = "Insufficient liquidity"


class InvalidSwap(AMMError):
    message = "Invalid swap parameters"


class SlippageTooHigh(AMMError):
    message = "Slippage too high"


class MinLiquidityNotMet(AMMError):
    message = "Minimum liquidity not met"
