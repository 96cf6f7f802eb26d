import logging
import sys
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Optional, Sequence

from bill_splitting import (
    BillBreakdown,
    GreedyScanSplitter,
    MoneyCountingStrategy,
    OrderedChainSplitter,
)


logger = logging.getLogger(__name__)

EXPECTED_PIN = "1234"


# ==================== Enums ====================

class StateKind(Enum):
    """Steps of a single ATM session"""
    AWAITING_PIN = "AWAITING_PIN"
    AWAITING_AMOUNT = "AWAITING_AMOUNT"
    DISPENSING = "DISPENSING"
    ERROR = "ERROR"


_MESSAGES = {
    StateKind.AWAITING_PIN: "Please insert your PIN number.",
    StateKind.AWAITING_AMOUNT: "Insert the number of money your want to get out.",
    StateKind.DISPENSING: "Take your money.",
    StateKind.ERROR: "There was an error with the PIN.",
}


# ==================== State ====================

@dataclass(frozen=True)
class ATMState:
    """Immutable session state; only DISPENSING carries an amount"""
    kind: StateKind
    amount: Optional[int] = None

    def __post_init__(self):
        if self.kind is StateKind.DISPENSING:
            if self.amount is None:
                raise ValueError("Dispensing state needs an amount")
        elif self.amount is not None:
            raise ValueError(f"{self.kind.value} state does not carry an amount")

    @classmethod
    def awaiting_pin(cls) -> 'ATMState':
        return cls(StateKind.AWAITING_PIN)

    @classmethod
    def awaiting_amount(cls) -> 'ATMState':
        return cls(StateKind.AWAITING_AMOUNT)

    @classmethod
    def dispensing(cls, amount: int) -> 'ATMState':
        return cls(StateKind.DISPENSING, amount)

    @classmethod
    def error(cls) -> 'ATMState':
        return cls(StateKind.ERROR)

    @property
    def message(self) -> str:
        return _MESSAGES[self.kind]

    def __str__(self) -> str:
        return self.message


# ==================== Observer ====================

class ATMListener(ABC):
    """Anything that reacts to ATM state changes"""

    @abstractmethod
    def update(self) -> None:
        """Called after every state change; read the bus for the new state"""
        pass


class NotificationBus:
    """Holds the current state and fans every change out to its listeners"""

    def __init__(self):
        self._state: Optional[ATMState] = None
        self._listeners: List[ATMListener] = []

    def get_state(self) -> Optional[ATMState]:
        return self._state

    def get_listeners(self) -> List[ATMListener]:
        return list(self._listeners)

    def attach(self, listener: ATMListener) -> None:
        self._listeners.append(listener)

    def set_state(self, state: ATMState) -> None:
        """
        Store the new state, then notify every listener in attach order.
        Exceptions from a listener propagate and stop the remaining ones.
        """
        self._state = state
        logger.debug("State -> %s, notifying %d listener(s)",
                     state.kind.value, len(self._listeners))
        self.notify_all()

    def notify_all(self) -> None:
        for listener in self._listeners:
            listener.update()


# ==================== Collaborators ====================

class CashSlot:
    """Physical money slot; prints what it hands out"""

    def __init__(self, output: Callable[[str], None] = print):
        self._output = output

    def dispense(self, breakdown: BillBreakdown) -> None:
        bills = ", ".join(str(bill) for bill in breakdown)
        self._output(f"ATM money slot: {bills}")

    def report_error(self) -> None:
        self._output("ATM slot error!!!")


# ==================== Listeners ====================

class DisplayListener(ATMListener):
    """Shows the message of whatever state the ATM is in"""

    def __init__(self, bus: NotificationBus, output: Callable[[str], None] = print):
        self._bus = bus
        self._output = output

    def update(self) -> None:
        self._output(str(self._bus.get_state()))


class DispenserListener(ATMListener):
    """Dispenses bills when the ATM enters the dispensing state"""

    def __init__(self, bus: NotificationBus, strategy: MoneyCountingStrategy,
                 cash_slot: Optional[CashSlot] = None):
        self._bus = bus
        self._strategy = strategy
        self._cash_slot = cash_slot or CashSlot()

    @property
    def strategy(self) -> MoneyCountingStrategy:
        return self._strategy

    @strategy.setter
    def strategy(self, strategy: MoneyCountingStrategy) -> None:
        self._strategy = strategy

    def update(self) -> None:
        state = self._bus.get_state()
        if state is None or state.kind is not StateKind.DISPENSING:
            return

        breakdown = self._strategy.split(state.amount)
        if breakdown.is_empty:
            logger.warning("Cannot dispense amount %s", state.amount)
            self._cash_slot.report_error()
        else:
            self._cash_slot.dispense(breakdown)


# ==================== State Machine ====================

class TransactionStateMachine:
    """
    Current step of the ATM session. Every assignment is pushed to the bus,
    even when the same state is set twice in a row.
    The state is None until ATMSession.start_session() sets AWAITING_PIN.
    """

    def __init__(self, strategy: Optional[MoneyCountingStrategy] = None,
                 bus: Optional[NotificationBus] = None,
                 output: Callable[[str], None] = print):
        self._state: Optional[ATMState] = None
        self._bus = bus or NotificationBus()

        self._display = DisplayListener(self._bus, output)
        self._dispenser = DispenserListener(
            self._bus, strategy or OrderedChainSplitter(), CashSlot(output)
        )
        self._bus.attach(self._display)
        self._bus.attach(self._dispenser)

    def get_bus(self) -> NotificationBus:
        return self._bus

    def get_dispenser(self) -> DispenserListener:
        return self._dispenser

    def get_state(self) -> Optional[ATMState]:
        return self._state

    def set_state(self, state: ATMState) -> None:
        self._state = state
        self._bus.set_state(state)


# ==================== Driver ====================

class ATMSession:
    """Drives one customer through PIN entry and a single withdrawal"""

    def __init__(self, machine: TransactionStateMachine, expected_pin: str = EXPECTED_PIN):
        self._machine = machine
        self._expected_pin = expected_pin

    def get_machine(self) -> TransactionStateMachine:
        return self._machine

    def start_session(self) -> None:
        self._machine.set_state(ATMState.awaiting_pin())

    def submit_pin(self, pin: str) -> bool:
        if pin == self._expected_pin:
            self._machine.set_state(ATMState.awaiting_amount())
            return True

        logger.info("PIN rejected")
        self._machine.set_state(ATMState.error())
        return False

    def submit_amount(self, amount: int) -> None:
        state = self._machine.get_state()
        if state is None or state.kind is not StateKind.AWAITING_AMOUNT:
            raise ValueError("Amount can only be submitted after a valid PIN")
        self._machine.set_state(ATMState.dispensing(amount))


# ==================== Logging ====================

def configure_logging(level: int = logging.WARNING) -> None:
    """Configure default logging if no handlers are present"""
    root = logging.getLogger()
    if root.handlers:
        return
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=[logging.StreamHandler(sys.stderr)],
    )


# ==================== Console ====================

def _read_amount(read: Callable[[str], str], output: Callable[[str], None]) -> int:
    while True:
        raw = read("").strip()
        try:
            return int(raw)
        except ValueError:
            output("Invalid amount.")


def main(argv: Optional[Sequence[str]] = None,
         read: Callable[[str], str] = input,
         output: Callable[[str], None] = print) -> int:
    """Run one interactive ATM session on the console"""
    args = list(sys.argv[1:] if argv is None else argv)
    configure_logging(logging.DEBUG if "--debug" in args else logging.WARNING)

    strategy = GreedyScanSplitter() if "--greedy" in args else OrderedChainSplitter()
    session = ATMSession(TransactionStateMachine(strategy, output=output))

    session.start_session()
    try:
        if not session.submit_pin(read("").strip()):
            return 1
        amount = _read_amount(read, output)
    except EOFError:
        logger.warning("Input closed before the session finished")
        return 1

    session.submit_amount(amount)
    return 0


if __name__ == "__main__":
    sys.exit(main())
