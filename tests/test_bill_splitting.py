import pytest

from bill_splitting import (
    CHAIN_DENOMINATIONS,
    EMPTY_BREAKDOWN,
    GREEDY_DENOMINATIONS,
    BillBreakdown,
    ChainExhaustedError,
    GreedyScanSplitter,
    MoneyHandler,
    OrderedChainSplitter,
    SplitterConfigError,
)


def _min_bill_count(amount, denominations):
    best = [0] + [None] * amount
    for value in range(1, amount + 1):
        options = [best[value - d] for d in denominations if d <= value and best[value - d] is not None]
        best[value] = min(options) + 1 if options else None
    return best[amount]


SPLITTERS = [GreedyScanSplitter, OrderedChainSplitter]


@pytest.mark.parametrize("splitter_cls", SPLITTERS)
@pytest.mark.parametrize("amount", [0, -1, -100])
def test_non_positive_amount_is_empty(splitter_cls, amount):
    breakdown = splitter_cls().split(amount)

    assert breakdown is EMPTY_BREAKDOWN
    assert breakdown.is_empty
    assert len(breakdown) == 0


@pytest.mark.parametrize("splitter_cls", SPLITTERS)
def test_breakdown_sums_to_amount_and_uses_known_bills(splitter_cls):
    splitter = splitter_cls()
    for amount in range(1, 400):
        breakdown = splitter.split(amount)
        assert breakdown.total() == amount
        assert set(breakdown) <= set(splitter.denominations)
        assert list(breakdown) == sorted(breakdown, reverse=True)


@pytest.mark.parametrize("splitter_cls", SPLITTERS)
def test_breakdown_uses_fewest_bills(splitter_cls):
    splitter = splitter_cls()
    for amount in range(1, 300):
        assert len(splitter.split(amount)) == _min_bill_count(amount, splitter.denominations)


def test_default_denomination_sets():
    assert GreedyScanSplitter().denominations == GREEDY_DENOMINATIONS == (100, 50, 20, 10, 5, 1)
    assert OrderedChainSplitter().denominations == CHAIN_DENOMINATIONS == (100, 50, 20, 5, 1)


def test_split_186():
    assert GreedyScanSplitter().split(186).bills == (100, 50, 20, 10, 5, 1)
    assert OrderedChainSplitter().split(186).bills == (100, 50, 20, 5, 5, 5, 1)


def test_greedy_and_chain_differ_where_ten_fits():
    greedy = GreedyScanSplitter().split(30)
    chain = OrderedChainSplitter().split(30)

    assert greedy.bills == (20, 10)
    assert chain.bills == (20, 5, 5)
    assert len(greedy) == 2
    assert len(chain) == 3


def test_same_denominations_give_same_breakdown():
    greedy = GreedyScanSplitter(CHAIN_DENOMINATIONS)
    chain = OrderedChainSplitter()
    for amount in range(1, 250):
        assert greedy.split(amount) == chain.split(amount)


def test_greedy_exhausts_each_denomination_first():
    assert GreedyScanSplitter().split(300).bills == (100, 100, 100)
    assert GreedyScanSplitter().split(4).bills == (1, 1, 1, 1)


def test_repeated_splits_are_independent():
    chain = OrderedChainSplitter()

    first = chain.split(75)
    second = chain.split(75)

    assert first == second == BillBreakdown((50, 20, 5))


def test_chain_handlers_follow_denominations():
    chain = OrderedChainSplitter()

    assert [handler.denomination for handler in chain.chain] == [100, 50, 20, 5, 1]


def test_money_handler_forwards_remainder():
    bills = []

    remainder = MoneyHandler(20).take(67, bills)

    assert remainder == 7
    assert bills == [20, 20, 20]


@pytest.mark.parametrize("splitter_cls", SPLITTERS)
def test_missing_last_bill_is_fatal(splitter_cls):
    splitter = splitter_cls((100, 50, 20))

    with pytest.raises(ChainExhaustedError) as exc_info:
        splitter.split(135)

    assert exc_info.value.amount == 135
    assert exc_info.value.remainder == 15


@pytest.mark.parametrize("splitter_cls", SPLITTERS)
@pytest.mark.parametrize("denominations", [(), (50, 0), (5, 20, 1), (20, 20, 1), (-5, -10)])
def test_bad_denominations_rejected(splitter_cls, denominations):
    with pytest.raises(SplitterConfigError):
        splitter_cls(denominations)


def test_breakdown_counts_keep_dispensing_order():
    breakdown = OrderedChainSplitter().split(186)

    assert breakdown.counts() == {100: 1, 50: 1, 20: 1, 5: 3, 1: 1}
    assert list(breakdown.counts()) == [100, 50, 20, 5, 1]
    assert repr(breakdown) == "BillBreakdown(100, 50, 20, 5, 5, 5, 1)"
    assert repr(EMPTY_BREAKDOWN) == "BillBreakdown(EMPTY)"


@pytest.mark.parametrize("splitter_cls", SPLITTERS)
@pytest.mark.parametrize("amount", [True, False, 12.5, "30", None])
def test_non_int_amount_rejected(splitter_cls, amount):
    with pytest.raises(TypeError):
        splitter_cls().split(amount)


@pytest.mark.parametrize("splitter_cls", SPLITTERS)
def test_bool_denomination_rejected(splitter_cls):
    with pytest.raises(SplitterConfigError):
        splitter_cls((100, 50, True))
