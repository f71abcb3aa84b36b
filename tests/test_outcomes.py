"""Shape classification and outcome building."""

import pytest

from fakes import event, market
from polymath.errors import ErrorKind, ResolverError
from polymath.models import SHAPE_MARKET_PER_OPTION, SHAPE_MULTI_OUTCOME
from polymath.normalize import build_outcomes, classify_shape, mid_price, summarize
from polymath.polymarket.gamma import parse_event


def _event(*markets):
    return parse_event(event(*markets)[0], "test-event")


def test_yes_no_single_market_is_binary_and_label_matched():
    ev = _event(market("Rain?", ["Yes", "No"], ["0.4", "0.6"], ["y", "n"]))
    shape, outcomes = build_outcomes(ev)
    assert shape == SHAPE_MARKET_PER_OPTION
    assert len(outcomes) == 1
    o = outcomes[0]
    assert o.type == "binary"
    assert o.price == 0.4
    assert o.no_price == 0.6
    assert o.token_id == "y" and o.yes_token_id == "y" and o.no_token_id == "n"
    assert o.name == "Rain?"


def test_label_order_is_respected_over_position():
    ev = _event(market("Flipped", ["No", "Yes"], ["0.35", "0.65"], ["n", "y"]))
    _, [o] = build_outcomes(ev)
    assert o.price == 0.65
    assert o.no_price == 0.35
    assert o.yes_token_id == "y"
    assert o.no_token_id == "n"


def test_labels_matched_case_insensitive_and_trimmed():
    ev = _event(market("Q", ["  NO ", "yes"], ["0.8", "0.2"], ["n", "y"]))
    _, [o] = build_outcomes(ev)
    assert o.price == 0.2
    assert o.no_price == 0.8


def test_five_outcomes_with_five_tokens_is_multi_outcome():
    labels = ["A", "B", "C", "D", "E"]
    prices = ["0.1", "0.2", "0.3", "0.25", "0.15"]
    ev = _event(market("Who?", labels, prices, [f"t{i}" for i in range(5)]))
    shape, outcomes = build_outcomes(ev)
    assert shape == SHAPE_MULTI_OUTCOME
    assert [o.index for o in outcomes] == [0, 1, 2, 3, 4]
    assert [o.name for o in outcomes] == labels
    assert [o.price for o in outcomes] == [0.1, 0.2, 0.3, 0.25, 0.15]
    assert [o.token_id for o in outcomes] == ["t0", "t1", "t2", "t3", "t4"]
    assert all(o.type == "multi-outcome" and o.no_price is None for o in outcomes)


def test_multi_outcome_defaults_missing_prices():
    ev = _event(market("Who?", ["A", "B", "C"], ["0.2"], ["t0", "t1", "t2"]))
    _, outcomes = build_outcomes(ev)
    assert [o.price for o in outcomes] == [0.2, 0.5, 0.5]


def test_token_count_mismatch_falls_back_to_market_per_option():
    ev = _event(market("Who?", ["A", "B", "C"], ["0.6", "0.3", "0.1"], ["t0", "t1"]))
    assert classify_shape(ev.markets) == SHAPE_MARKET_PER_OPTION
    _, [o] = build_outcomes(ev)
    # No yes/no labels: positional [YES, NO]
    assert o.price == 0.6
    assert o.no_price == 0.3
    assert o.token_id == "t0"


def test_two_named_outcomes_classified_as_binary():
    ev = _event(market("Match", ["Lakers", "Celtics"], ["0.7", "0.3"], ["l", "c"]))
    shape, [o] = build_outcomes(ev)
    assert shape == SHAPE_MARKET_PER_OPTION
    assert o.price == 0.7
    assert o.no_price == 0.3


def test_multiple_markets_are_never_multi_outcome():
    m = market("Q", ["A", "B", "C"], ["0.1", "0.2", "0.7"], ["a", "b", "c"])
    assert classify_shape(_event(m, m).markets) == SHAPE_MARKET_PER_OPTION


def test_single_price_derives_no_price():
    ev = _event(market("Q", None, ["0.2"], ["y"]))
    _, [o] = build_outcomes(ev)
    assert o.price == 0.2
    assert o.no_price == pytest.approx(0.8)
    assert o.no_token_id is None


def test_unnamed_market_gets_synthetic_name():
    ev = _event(
        market("First", ["Yes", "No"], ["0.5", "0.5"], ["a", "b"]),
        market(None, ["Yes", "No"], ["0.1", "0.9"], ["c", "d"]),
    )
    _, outcomes = build_outcomes(ev)
    assert outcomes[1].name == "Market 2"
    assert outcomes[1].index == 1


def test_native_lists_are_accepted():
    ev = _event(market("Q", ["Yes", "No"], [0.45, 0.55], ["y", "n"], encode=False))
    _, [o] = build_outcomes(ev)
    assert o.price == 0.45


def test_single_label_market_is_unsupported():
    ev = _event(market("Odd", ["Only"], ["1"], ["t"]))
    with pytest.raises(ResolverError) as exc:
        build_outcomes(ev)
    assert exc.value.kind is ErrorKind.UNSUPPORTED_SHAPE
    assert exc.value.status_code == 422


def test_uninterpretable_markets_are_skipped_but_keep_positions():
    raw = event(
        "not-a-market",
        market("Real", ["Yes", "No"], ["0.3", "0.7"], ["y", "n"]),
    )[0]
    ev = parse_event(raw, "test-event")
    _, outcomes = build_outcomes(ev)
    assert [o.index for o in outcomes] == [1]


def test_build_outcomes_is_idempotent(three_candidate_event):
    ev = parse_event(three_candidate_event[0], "test-event")
    assert build_outcomes(ev) == build_outcomes(ev)


def test_summary_volume_and_mid(three_candidate_event):
    summary = summarize(parse_event(three_candidate_event[0], "test-event"))
    assert summary.volume == 600.0
    assert summary.mid_price == 0.55
    assert summary.title == "Test Event"
    assert len(summary.outcomes) == 3


def test_mid_price_first_max_wins():
    ev = _event(
        market("A", ["Yes", "No"], ["0.4", "0.6"], ["a", "b"]),
        market("B", ["Yes", "No"], ["0.4", "0.6"], ["c", "d"]),
    )
    _, outcomes = build_outcomes(ev)
    assert mid_price(outcomes) == 0.4
    assert mid_price([]) == 0.5


def test_all_prices_within_unit_interval():
    ev = _event(
        market("A", ["Yes", "No"], ["1.4", "-2"], ["a", "b"]),
        market("B", ["Yes", "No"], ["nan", "x"], ["c", "d"]),
    )
    _, outcomes = build_outcomes(ev)
    for o in outcomes:
        assert 0 <= o.price <= 1
        assert o.no_price is None or 0 <= o.no_price <= 1
