"""Unit tests for status normalization, bucketing and totals."""

import pytest

from parcels.models.stats import Bucket
from parcels.services.stats import (
    bucket_for,
    normalize_status,
    round_money,
    sum_revenue_and_weight,
    to_number,
)


def test_normalize_status_trims_lowercases_and_strips_accents():
    assert normalize_status("  En Tránsito ") == "en transito"
    assert normalize_status("RECIBÍDO") == "recibido"


@pytest.mark.parametrize(
    "label, bucket",
    [
        ("listo_recoger", Bucket.READY),
        ("Recibido", Bucket.RECEIVED),
        ("en_transito", Bucket.IN_TRANSIT),
        ("En tránsito", Bucket.IN_TRANSIT),
        ("in transit", Bucket.IN_TRANSIT),
        ("En Aduana", Bucket.CUSTOMS),
    ],
)
def test_bucket_for_keywords(label, bucket):
    assert bucket_for(label) is bucket


def test_bucket_precedence_first_rule_wins():
    # Both "recib" and "listo" appear; ready is checked first.
    assert bucket_for("recibido, listo para recoger") is Bucket.READY
    assert bucket_for("aduana recibio") is Bucket.RECEIVED


def test_bucket_for_unmatched_or_empty():
    assert bucket_for("perdido") is None
    assert bucket_for("") is None
    assert bucket_for(None) is None


def test_to_number_coercion():
    assert to_number(None) == 0.0
    assert to_number("") == 0.0
    assert to_number("12.5") == 12.5
    assert to_number(3) == 3.0
    assert to_number("x") is None
    assert to_number("nan") is None


def test_round_money_half_away_from_zero():
    assert round_money(1.005) == 1.01
    assert round_money(2.675) == 2.68
    assert round_money(-1.005) == -1.01
    assert round_money(0.1 + 0.2) == 0.3


def test_unparseable_weight_drops_row_from_both_sums():
    shipments = [
        {"peso_libras": 10, "tarifa_usd": 2.5},
        {"peso_libras": "x", "tarifa_usd": 3},
    ]
    assert sum_revenue_and_weight(shipments) == (25.0, 10.0)


def test_missing_or_bad_rate_counts_as_zero_revenue():
    shipments = [
        {"peso_libras": 4, "tarifa_usd": None},
        {"peso_libras": 6, "tarifa_usd": "n/a"},
        {"peso_libras": None, "tarifa_usd": 5},
    ]
    assert sum_revenue_and_weight(shipments) == (0.0, 10.0)
