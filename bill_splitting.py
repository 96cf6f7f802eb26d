import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Dict, Iterator, List, Sequence, Tuple


logger = logging.getLogger(__name__)


# ==================== Denomination Sets ====================

# Greedy scan also carries the 10 bill; the chain does not. Both are kept as-is.
GREEDY_DENOMINATIONS: Tuple[int, ...] = (100, 50, 20, 10, 5, 1)
CHAIN_DENOMINATIONS: Tuple[int, ...] = (100, 50, 20, 5, 1)


# ==================== Errors ====================

class SplitterConfigError(ValueError):
    """Raised when a splitter is built with an unusable denomination set"""


class ChainExhaustedError(RuntimeError):
    """Raised when a remainder is left over after the last denomination"""

    def __init__(self, amount: int, remainder: int, denominations: Sequence[int]):
        super().__init__(
            f"Cannot resolve remainder {remainder} of {amount} "
            f"with denominations {list(denominations)}"
        )
        self.amount = amount
        self.remainder = remainder
        self.denominations = tuple(denominations)


def _validate_denominations(denominations: Sequence[int]) -> Tuple[int, ...]:
    denoms = tuple(denominations)
    if not denoms:
        raise SplitterConfigError("At least one denomination is required")
    for denom in denoms:
        if isinstance(denom, bool) or not isinstance(denom, int) or denom <= 0:
            raise SplitterConfigError(f"Denomination must be a positive integer: {denom!r}")
    for larger, smaller in zip(denoms, denoms[1:]):
        if smaller >= larger:
            raise SplitterConfigError(
                f"Denominations must be strictly descending: {list(denoms)}"
            )
    return denoms


# ==================== Breakdown ====================

@dataclass(frozen=True)
class BillBreakdown:
    """
    Bills handed out for one dispense request, largest first.
    An empty breakdown means there was nothing valid to dispense.
    """
    bills: Tuple[int, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not self.bills

    def total(self) -> int:
        return sum(self.bills)

    def counts(self) -> Dict[int, int]:
        """Get denomination -> number of bills, in dispensing order"""
        counts: Dict[int, int] = {}
        for bill in self.bills:
            counts[bill] = counts.get(bill, 0) + 1
        return counts

    def __iter__(self) -> Iterator[int]:
        return iter(self.bills)

    def __len__(self) -> int:
        return len(self.bills)

    def __repr__(self) -> str:
        if self.is_empty:
            return "BillBreakdown(EMPTY)"
        return f"BillBreakdown({', '.join(str(bill) for bill in self.bills)})"


EMPTY_BREAKDOWN = BillBreakdown()


# ==================== Strategy ====================

class MoneyCountingStrategy(ABC):
    """Splits a requested amount into bills"""

    def __init__(self, denominations: Sequence[int]):
        self._denominations = _validate_denominations(denominations)

    @property
    def denominations(self) -> Tuple[int, ...]:
        return self._denominations

    def split(self, amount: int) -> BillBreakdown:
        """Split amount into bills; non-positive amounts give EMPTY_BREAKDOWN"""
        if isinstance(amount, bool) or not isinstance(amount, int):
            raise TypeError(f"Amount must be an int, got {type(amount).__name__}")
        if amount <= 0:
            logger.debug("%s: nothing to split for amount %s", self.name, amount)
            return EMPTY_BREAKDOWN

        bills = self._split_positive(amount)
        logger.debug("%s: split %s into %d bill(s)", self.name, amount, len(bills))
        return BillBreakdown(tuple(bills))

    @property
    def name(self) -> str:
        return type(self).__name__

    @abstractmethod
    def _split_positive(self, amount: int) -> List[int]:
        pass


class GreedyScanSplitter(MoneyCountingStrategy):
    """
    Scans the denominations largest to smallest, taking each bill as long as
    it still fits before moving on. Passes repeat until nothing is left.
    """

    def __init__(self, denominations: Sequence[int] = GREEDY_DENOMINATIONS):
        super().__init__(denominations)

    def _split_positive(self, amount: int) -> List[int]:
        remaining = amount
        bills: List[int] = []

        while remaining > 0:
            before = remaining
            for denom in self._denominations:
                while remaining >= denom:
                    remaining -= denom
                    bills.append(denom)

            if remaining == before:
                # Smallest bill is larger than what is left
                raise ChainExhaustedError(amount, remaining, self._denominations)

        return bills


# ==================== Chain of Responsibility ====================

@dataclass(frozen=True)
class MoneyHandler:
    """One link of the chain: hands out a single denomination"""
    denomination: int

    def take(self, remaining: int, bills: List[int]) -> int:
        """Append as many bills as fit and return what is left"""
        count, remainder = divmod(remaining, self.denomination)
        bills.extend([self.denomination] * count)
        return remainder


class OrderedChainSplitter(MoneyCountingStrategy):
    """
    Passes the amount along a fixed chain of handlers, one per denomination.
    Each handler takes its share and forwards only the remainder.
    """

    def __init__(self, denominations: Sequence[int] = CHAIN_DENOMINATIONS):
        super().__init__(denominations)
        self._chain: Tuple[MoneyHandler, ...] = tuple(
            MoneyHandler(denom) for denom in self._denominations
        )

    @property
    def chain(self) -> Tuple[MoneyHandler, ...]:
        return self._chain

    def _split_positive(self, amount: int) -> List[int]:
        bills: List[int] = []
        remaining = amount

        for handler in self._chain:
            if remaining == 0:
                break
            remaining = handler.take(remaining, bills)

        if remaining > 0:
            raise ChainExhaustedError(amount, remaining, self._denominations)

        return bills
