"""Market parameter, state and accrual result models."""

from dataclasses import dataclass, field
from typing import List


@dataclass(frozen=True)
class MarketParams:
    """Immutable parameters of a Morpho Blue market."""

    quote_asset: str  # Loan token address
    collateral_asset: str  # Collateral token address
    oracle: str  # Oracle address
    rate_model: str  # Interest Rate Model address
    liquidation_threshold: int  # LLTV, WAD-scaled

    def as_tuple(self) -> tuple:
        """Encode in the on-chain MarketParams struct order."""
        return (
            self.quote_asset,
            self.collateral_asset,
            self.oracle,
            self.rate_model,
            self.liquidation_threshold,
        )


@dataclass(frozen=True)
class MarketState:
    """Point-in-time state of a Morpho Blue market."""

    total_supply_assets: int
    total_borrow_assets: int
    last_update: int  # Unix seconds of the last on-chain accrual
    fee: int  # Protocol fee, WAD-scaled in [0, WAD]

    # Carried so the state can be handed back to an on-chain IRM unchanged
    total_supply_shares: int = 0
    total_borrow_shares: int = 0

    def as_tuple(self) -> tuple:
        """Encode in the on-chain Market struct order."""
        return (
            self.total_supply_assets,
            self.total_supply_shares,
            self.total_borrow_assets,
            self.total_borrow_shares,
            self.last_update,
            self.fee,
        )


@dataclass(frozen=True)
class BlockRef:
    """Reference block pinning every read of one evaluation cycle."""

    number: int
    timestamp: int


@dataclass(frozen=True)
class AccrualSnapshot:
    """Exact WAD-scale figures produced by one accrual."""

    elapsed: int
    interest: int
    accrued_supply: int
    accrued_borrow: int
    utilization: int
    borrow_apy: int
    supply_apy: int


@dataclass(frozen=True)
class AccrualResult:
    """Human-facing yield of one market, in percent."""

    market_id: str
    borrow_apy: float
    supply_apy: float


@dataclass(frozen=True)
class MarketFailure:
    """A market whose evaluation raised."""

    market_id: str
    error: Exception


@dataclass
class EvaluationReport:
    """Ordered outcome of evaluating a list of market identifiers."""

    results: List[AccrualResult] = field(default_factory=list)
    failures: List[MarketFailure] = field(default_factory=list)
    skipped: List[str] = field(default_factory=list)

    @property
    def failed_ids(self) -> List[str]:
        return [f.market_id for f in self.failures]
