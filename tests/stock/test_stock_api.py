"""
Tests d'intégration des endpoints d'alertes de stock et de synthèse.
"""
import pytest
import pytest_asyncio
from datetime import timedelta
from decimal import Decimal
from httpx import AsyncClient
from fastapi import status

from inventory.config import settings
from inventory.core.utils import start_of_month, utc_now
from inventory.stock_movements.constants import StockDirection
from inventory.stock_movements.models import StockInRequest, StockMovement, StockOutRequest

API_PREFIX = settings.API_V1_PREFIX

pytestmark = pytest.mark.asyncio


@pytest_asyncio.fixture
async def stocked_products(make_product, test_category):
    """Quatre produits: rupture, bas (high), bas (medium), suffisant."""
    return [
        await make_product(name="Ampoule", quantity=0, category_id=test_category.id),
        await make_product(name="Pile", quantity=3, low_stock_threshold=10),
        await make_product(name="Chargeur", quantity=8, category_id=test_category.id),
        await make_product(name="Rallonge", quantity=50),
    ]


async def test_list_alerts(test_client: AsyncClient, stocked_products):
    response = await test_client.get(f"{API_PREFIX}/stock/alerts")

    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["total"] == 3
    assert [alert["product_name"] for alert in data["items"]] == ["Ampoule", "Pile", "Chargeur"]
    assert [alert["alert_level"] for alert in data["items"]] == ["critical", "high", "medium"]
    assert data["counts"] == {"critical": 1, "high": 1, "medium": 1}

    first = data["items"][0]
    assert first["current_stock"] == 0
    assert first["threshold"] == 10
    assert first["category"] == "Electronics"
    assert first["message"]


async def test_list_alerts_filter_severity(test_client: AsyncClient, stocked_products):
    response = await test_client.get(f"{API_PREFIX}/stock/alerts", params={"severity": "high"})

    data = response.json()
    assert data["total"] == 1
    assert data["items"][0]["product_name"] == "Pile"
    # Les compteurs portent sur toutes les alertes
    assert data["counts"]["critical"] == 1


async def test_list_alerts_search_category(test_client: AsyncClient, stocked_products):
    response = await test_client.get(f"{API_PREFIX}/stock/alerts", params={"search": "ELECTRONICS"})

    data = response.json()
    assert [alert["product_name"] for alert in data["items"]] == ["Ampoule", "Chargeur"]


async def test_list_alerts_pagination(test_client: AsyncClient, stocked_products):
    response = await test_client.get(f"{API_PREFIX}/stock/alerts", params={"limit": 1, "offset": 1})

    data = response.json()
    assert data["total"] == 3
    assert [alert["product_name"] for alert in data["items"]] == ["Pile"]


async def test_list_alerts_rejects_none_severity(test_client: AsyncClient):
    response = await test_client.get(f"{API_PREFIX}/stock/alerts", params={"severity": "none"})
    assert response.status_code == status.HTTP_400_BAD_REQUEST


async def test_list_alerts_rejects_unknown_severity(test_client: AsyncClient):
    response = await test_client.get(f"{API_PREFIX}/stock/alerts", params={"severity": "urgent"})
    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY


async def test_alerts_follow_stock_movements(test_client: AsyncClient, make_product, movement_service):
    product_id = (await make_product(name="Fusible", quantity=12)).id

    response = await test_client.get(f"{API_PREFIX}/stock/alerts")
    assert response.json()["total"] == 0

    await movement_service.stock_out(StockOutRequest(product_id=product_id, quantity=12, reason="Sale"))
    response = await test_client.get(f"{API_PREFIX}/stock/alerts")
    assert [alert["alert_level"] for alert in response.json()["items"]] == ["critical"]


async def test_inventory_summary(test_client: AsyncClient, stocked_products, movement_service):
    pile = stocked_products[1]
    await movement_service.stock_in(
        StockInRequest(product_id=pile.id, quantity=2, supplier="Acme", purchase_price="7.00")
    )

    response = await test_client.get(f"{API_PREFIX}/stock/summary")

    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["total_products"] == 4
    assert data["total_categories"] == 1
    # (0 + 5 + 8 + 50) x 10.00
    assert Decimal(data["inventory_value"]) == Decimal("630.00")
    assert data["stock_alerts"] == 3
    assert data["alerts_by_level"] == {"critical": 1, "high": 1, "medium": 1}
    assert data["stock_in_count"] == 1
    assert data["stock_out_count"] == 0
    assert data["stock_in_this_month"] == 1
    assert data["stock_out_this_month"] == 0


async def test_inventory_summary_month_window(test_client: AsyncClient, db_session, make_product, movement_service):
    product_id = (await make_product(name="Sécateur", quantity=20)).id
    await movement_service.stock_out(StockOutRequest(product_id=product_id, quantity=2, reason="Sale"))
    # Mouvement d'un mois précédent, ajouté directement dans l'historique
    db_session.add(StockMovement(
        product_id=product_id,
        direction=StockDirection.OUT,
        quantity_change=-1,
        quantity_before=21,
        quantity_after=20,
        reason="Sale",
        created_at=start_of_month(utc_now()) - timedelta(days=40),
    ))
    await db_session.commit()

    response = await test_client.get(f"{API_PREFIX}/stock/summary")

    data = response.json()
    assert data["stock_out_count"] == 2
    assert data["stock_out_this_month"] == 1
    assert data["stock_in_this_month"] == 0
    assert data["period_start"].startswith(start_of_month(utc_now()).strftime("%Y-%m-01T00:00:00"))
