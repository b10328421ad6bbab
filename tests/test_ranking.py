import pytest

from optistats.services.ranking import (
    ALL,
    parse_display_count,
    percentage_of,
    rank,
    round1,
    share_of_total,
)


def test_brand_ranking_with_all():
    result = rank(
        [{"brand": "X", "totalSales": 100}, {"brand": "Y", "totalSales": 300}],
        "totalSales",
        ALL,
        key="brand",
    )

    assert [(s.category_key, s.percentage, s.rank) for s in result.ranked] == [
        ("Y", 75.0, 1),
        ("X", 25.0, 2),
    ]
    assert result.total == 400


def test_ties_keep_input_order():
    entries = [
        {"categoryKey": "A", "value": 50},
        {"categoryKey": "B", "value": 50},
        {"categoryKey": "C", "value": 70},
        {"categoryKey": "D", "value": 50},
    ]
    result = rank(entries, "value")
    assert [s.category_key for s in result.ranked] == ["C", "A", "B", "D"]


def test_truncation_keeps_population_percentages():
    entries = [{"categoryKey": str(i), "value": i + 1} for i in range(25)]

    everything = {s.category_key: s.percentage for s in rank(entries, "value", ALL).ranked}
    top5 = rank(entries, "value", 5)

    assert len(top5.ranked) == 5
    assert [s.rank for s in top5.ranked] == [1, 2, 3, 4, 5]
    assert top5.total == sum(range(1, 26))
    for share in top5.ranked:
        assert share.percentage == everything[share.category_key]


def test_percentages_sum_to_about_100():
    entries = [{"categoryKey": k, "value": 1} for k in "ABC"]
    ranked = rank(entries, "value", ALL).ranked
    assert sum(s.percentage for s in ranked) == pytest.approx(100, abs=0.1 * len(ranked))


def test_zero_total_gives_zero_percentages():
    ranked = rank([{"categoryKey": "A", "value": 0}, {"categoryKey": "B", "value": 0}], "value").ranked
    assert [s.percentage for s in ranked] == [0.0, 0.0]


def test_callable_metric_and_secondary():
    entries = [
        {"name": "Ray", "stats": {"sales": 10}, "qty": 4},
        {"name": "Oak", "stats": {"sales": 30}, "qty": "2"},
    ]
    result = rank(entries, lambda e: e["stats"]["sales"], key="name", secondary="qty")
    assert [s.category_key for s in result.ranked] == ["Oak", "Ray"]
    assert [s.metric_secondary for s in result.ranked] == [2.0, 4.0]
    assert result.ranked[0].as_dict() == {
        "rank": 1,
        "categoryKey": "Oak",
        "metricPrimary": 30.0,
        "percentage": 75.0,
        "metricSecondary": 2.0,
    }


def test_entries_without_numeric_metric_are_left_out():
    entries = [
        {"categoryKey": "A", "value": None},
        {"categoryKey": "B", "value": "n/a"},
        {"categoryKey": "C", "value": "12"},
    ]
    result = rank(entries, "value")
    assert [s.category_key for s in result.ranked] == ["C"]
    assert result.total == 12


def test_round1_rounds_halves_up():
    assert round1(0.25) == 0.3
    assert round1(12.25) == 12.3
    assert round1(33.333333) == 33.3
    assert percentage_of(1, 3) == 33.3
    assert percentage_of(5, 0) == 0.0


def test_parse_display_count():
    assert parse_display_count("5") == 5
    assert parse_display_count("20") == 20
    assert parse_display_count("all") == ALL
    assert parse_display_count("ALL") == ALL
    assert parse_display_count("7") == 10
    assert parse_display_count("abc", 5) == 5
    assert parse_display_count(None) == 10


def test_share_of_total_preserves_input_order():
    stores = [
        {"locationId": "L1", "salesCount": 1},
        {"locationId": "L2", "salesCount": 3},
    ]
    result = share_of_total(stores, "salesCount", key="locationId")
    assert [(s.category_key, s.percentage) for s in result.ranked] == [("L1", 25.0), ("L2", 75.0)]
    assert all(s.rank is None for s in result.ranked)
