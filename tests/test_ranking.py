from purchase_history import bottom_purchases, top_purchases
from tests.helpers.records import purchase


def _products(ranking):
    return [p.product for p in ranking]


def test_top_excludes_cancelled_and_sorts_descending():
    ps = [
        purchase(product="small", amount="1.00"),
        purchase(product="cancelled-big", amount="999.00", status="Cancelled"),
        purchase(product="big", amount="50.00"),
        purchase(product="mid", amount="20.00"),
    ]
    assert _products(top_purchases(ps)) == ["big", "mid", "small"]


def test_top_keeps_zero_and_negative_amounts():
    ps = [purchase(product="zero", amount="0"), purchase(product="refund", amount="-4.00")]
    assert _products(top_purchases(ps)) == ["zero", "refund"]


def test_bottom_excludes_cancelled_and_non_positive():
    ps = [
        purchase(product="zero", amount="$0.00"),
        purchase(product="refund", amount="-$2.00"),
        purchase(product="cheap-cancelled", amount="0.50", status="Cancelled"),
        purchase(product="cheap", amount="1.00"),
        purchase(product="pricey", amount="30.00"),
    ]
    assert _products(bottom_purchases(ps)) == ["cheap", "pricey"]


def test_truncates_to_n():
    ps = [purchase(product=str(i), amount=f"{i}.00") for i in range(1, 9)]
    assert _products(top_purchases(ps)) == ["8", "7", "6", "5", "4"]
    assert _products(bottom_purchases(ps, 3)) == ["1", "2", "3"]


def test_ties_keep_input_order():
    ps = [purchase(product=name, amount="5.00") for name in ("first", "second", "third")]
    assert _products(top_purchases(ps)) == ["first", "second", "third"]
    assert _products(bottom_purchases(ps)) == ["first", "second", "third"]


def test_non_positive_n_returns_empty():
    ps = [purchase(amount="5.00")]
    assert top_purchases(ps, 0) == ()
    assert bottom_purchases(ps, -1) == ()


def test_status_match_is_literal():
    ps = [purchase(product="lower", amount="3.00", status="cancelled")]
    assert _products(top_purchases(ps)) == ["lower"]


def test_compact_status_header_is_recognised():
    p = purchase(product="x", amount="3.00", status="")
    cancelled = purchase(product="y", amount="4.00", status="", OrderStatus="Cancelled")
    assert _products(top_purchases([p, cancelled])) == ["x"]
