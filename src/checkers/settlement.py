"""
Stake Settlement
-----

Both stakes are escrowed (taken from the players' balances) before the game starts.
Settlement computes what changes on top of that once the winner is known:

* the loser lost their stake:            loser_delta  = -stake
* the platform takes its cut of the win: commission   = stake * commission_rate
* the winner gains the rest:             winner_delta = stake - commission

Pure arithmetic on Decimals. Calling it twice for the same game is a bug in the caller:
the Game only settles inside the transition into a terminal status.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Self

from src.core.exceptions import SettlementError

Money = Decimal


def to_money(value: Decimal | int | float | str) -> Money:
    """Floats go through str() so 0.1 stays 0.1 instead of 0.1000000000000000055511151231257827"""
    return value if isinstance(value, Decimal) else Decimal(str(value))


@dataclass(frozen=True)
class Settlement:
    winner: str
    loser: str
    stake: Money
    winner_delta: Money
    loser_delta: Money
    commission: Money

    @property
    def payout(self) -> Money:
        """What to credit the winner's balance with: their own escrowed stake back + the net win"""
        return self.stake + self.winner_delta

    def to_dict(self) -> dict[str, str]:
        return {
            "winner": self.winner,
            "loser": self.loser,
            "stake": str(self.stake),
            "winner_delta": str(self.winner_delta),
            "loser_delta": str(self.loser_delta),
            "commission": str(self.commission),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Self:
        return cls(
            winner=data["winner"],
            loser=data["loser"],
            stake=to_money(data["stake"]),
            winner_delta=to_money(data["winner_delta"]),
            loser_delta=to_money(data["loser_delta"]),
            commission=to_money(data["commission"]),
        )


def settle(
    stake: Decimal | int | float | str,
    commission_rate: Decimal | int | float | str,
    winner: str,
    loser: str,
) -> Settlement:
    stake = to_money(stake)
    commission_rate = to_money(commission_rate)

    if stake <= 0:
        raise SettlementError(f"Stake must be positive, got {stake}")
    if not (0 <= commission_rate <= 1):
        raise SettlementError(f"Commission rate must lie between 0 and 1, got {commission_rate}")
    if winner == loser:
        raise SettlementError(f"Winner and loser must be different players, got {winner!r} twice")

    commission = stake * commission_rate
    return Settlement(
        winner=winner,
        loser=loser,
        stake=stake,
        winner_delta=stake - commission,
        loser_delta=-stake,
        commission=commission,
    )
