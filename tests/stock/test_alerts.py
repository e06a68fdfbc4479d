"""
Tests de l'évaluateur d'alertes de stock.
"""
import logging
from decimal import Decimal

import pytest
from pydantic import ValidationError

from inventory.products.entities import ProductSnapshot
from inventory.stock.alerts import (
    AlertPolicy,
    StockAlertEvaluator,
    count_by_level,
    filter_alerts,
)
from inventory.stock.constants import DEFAULT_LOW_STOCK_THRESHOLD, AlertLevel


def snapshot(product_id=1, quantity=0, threshold=10, name="Widget", category="Tools", price="5.00"):
    return ProductSnapshot(
        id=product_id,
        name=name,
        price=Decimal(price),
        quantity=quantity,
        low_stock_threshold=threshold,
        category=category,
    )


@pytest.fixture
def evaluator() -> StockAlertEvaluator:
    return StockAlertEvaluator()


@pytest.mark.parametrize(
    "quantity, threshold, expected",
    [
        (0, 20, AlertLevel.CRITICAL),
        (5, 10, AlertLevel.HIGH),
        (6, 10, AlertLevel.MEDIUM),
        (8, 10, AlertLevel.MEDIUM),
        (10, 10, AlertLevel.MEDIUM),
        (11, 10, AlertLevel.NONE),
        (45, 15, AlertLevel.NONE),
        (1, 10, AlertLevel.HIGH),
    ],
)
def test_evaluate_levels(evaluator, quantity, threshold, expected):
    assert evaluator.evaluate(snapshot(quantity=quantity, threshold=threshold)) == expected


def test_zero_quantity_is_critical_whatever_the_threshold(evaluator):
    for threshold in (0, 1, 10, 1000):
        assert evaluator.evaluate(snapshot(quantity=0, threshold=threshold)) == AlertLevel.CRITICAL


def test_odd_threshold_splits_at_floor_of_half(evaluator):
    # 11 / 2 = 5.5: 5 est "high", 6 est "medium"
    assert evaluator.evaluate(snapshot(quantity=5, threshold=11)) == AlertLevel.HIGH
    assert evaluator.evaluate(snapshot(quantity=6, threshold=11)) == AlertLevel.MEDIUM


def test_missing_threshold_uses_default(evaluator):
    product = snapshot(quantity=DEFAULT_LOW_STOCK_THRESHOLD, threshold=None)
    assert evaluator.effective_threshold(product) == DEFAULT_LOW_STOCK_THRESHOLD
    assert evaluator.evaluate(product) == AlertLevel.MEDIUM
    assert evaluator.evaluate(snapshot(quantity=DEFAULT_LOW_STOCK_THRESHOLD + 1, threshold=None)) == AlertLevel.NONE


def test_evaluate_is_deterministic(evaluator):
    product = snapshot(quantity=7, threshold=10)
    assert evaluator.evaluate(product) == evaluator.evaluate(product)
    assert evaluator.build_alert(product) == evaluator.build_alert(product)


def test_negative_values_are_clamped_and_logged(evaluator, caplog):
    with caplog.at_level(logging.WARNING):
        assert evaluator.evaluate(snapshot(quantity=-3, threshold=10)) == AlertLevel.CRITICAL
        # Seuil négatif ramené à 0: tout stock positif est hors alerte
        assert evaluator.evaluate(snapshot(quantity=4, threshold=-2)) == AlertLevel.NONE
    assert "ramené à 0" in caplog.text


def test_custom_policy_cut_points():
    evaluator = StockAlertEvaluator(AlertPolicy(default_threshold=20, high_ratio=0.25))
    assert evaluator.evaluate(snapshot(quantity=5, threshold=None)) == AlertLevel.HIGH
    assert evaluator.evaluate(snapshot(quantity=6, threshold=None)) == AlertLevel.MEDIUM
    assert evaluator.evaluate(snapshot(quantity=21, threshold=None)) == AlertLevel.NONE


def test_evaluate_all_filters_none_and_keeps_input_order(evaluator):
    products = [
        snapshot(product_id=1, quantity=8, name="Mouse"),
        snapshot(product_id=2, quantity=45, threshold=15, name="Desk"),
        snapshot(product_id=3, quantity=0, threshold=20, name="Laptop"),
        snapshot(product_id=4, quantity=5, name="Chair", category="Furniture"),
    ]
    alerts = evaluator.evaluate_all(products)

    assert [alert.product_id for alert in alerts] == [1, 3, 4]
    assert [alert.alert_level for alert in alerts] == [AlertLevel.MEDIUM, AlertLevel.CRITICAL, AlertLevel.HIGH]
    chair = alerts[2]
    assert chair.product_name == "Chair"
    assert chair.current_stock == 5
    assert chair.threshold == 10
    assert chair.category == "Furniture"
    assert "Chair" in chair.message


def test_filter_alerts_by_severity_and_search(evaluator):
    alerts = evaluator.evaluate_all([
        snapshot(product_id=1, quantity=0, name="Laptop Dell", category="Electronics"),
        snapshot(product_id=2, quantity=3, name="Office Chair", category="Furniture"),
        snapshot(product_id=3, quantity=0, name="Desk Lamp", category="Furniture"),
    ])

    critical = filter_alerts(alerts, severity=AlertLevel.CRITICAL)
    assert [alert.product_id for alert in critical] == [1, 3]

    furniture = filter_alerts(alerts, search="  FURNITURE ")
    assert [alert.product_id for alert in furniture] == [2, 3]

    assert [alert.product_id for alert in filter_alerts(alerts, severity=AlertLevel.CRITICAL, search="lamp")] == [3]
    assert filter_alerts(alerts, search="printer") == []


def test_count_by_level(evaluator):
    alerts = evaluator.evaluate_all([
        snapshot(product_id=1, quantity=0),
        snapshot(product_id=2, quantity=0),
        snapshot(product_id=3, quantity=9),
    ])
    assert count_by_level(alerts) == {"critical": 2, "high": 0, "medium": 1}


def test_snapshot_policy_and_alert_are_immutable():
    product = snapshot(quantity=3)
    alert = StockAlertEvaluator().build_alert(product)

    with pytest.raises(ValidationError):
        product.quantity = 50
    with pytest.raises(ValidationError):
        alert.alert_level = AlertLevel.NONE
    with pytest.raises(ValidationError):
        AlertPolicy().high_ratio = 0.9
    assert ProductSnapshot.model_validate(product, from_attributes=True) == product
