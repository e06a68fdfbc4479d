"""
Tests d'intégration pour les endpoints de l'API du module Produit.
"""
import pytest
from httpx import AsyncClient
from fastapi import status

from inventory.config import settings
from inventory.stock_movements.models import StockOutRequest

API_PREFIX = settings.API_V1_PREFIX

pytestmark = pytest.mark.asyncio

# --- Création ---

async def test_create_product_success(test_client: AsyncClient, test_category):
    product_data = {
        "name": "Clavier",
        "price": "49.90",
        "quantity": 12,
        "low_stock_threshold": 5,
        "category_id": test_category.id,
    }
    response = await test_client.post(f"{API_PREFIX}/products/", json=product_data)

    assert response.status_code == status.HTTP_201_CREATED
    data = response.json()
    assert data["name"] == "Clavier"
    assert data["quantity"] == 12
    assert data["category"] == "Electronics"
    assert data["stock_status"] == "IN_STOCK"
    assert data["alert_level"] == "none"
    assert "id" in data


async def test_create_product_unknown_category(test_client: AsyncClient):
    response = await test_client.post(
        f"{API_PREFIX}/products/", json={"name": "Orphelin", "price": 1, "category_id": 9999}
    )
    assert response.status_code == status.HTTP_400_BAD_REQUEST


async def test_create_product_negative_quantity(test_client: AsyncClient):
    response = await test_client.post(
        f"{API_PREFIX}/products/", json={"name": "Négatif", "price": 1, "quantity": -1}
    )
    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY

# --- Lecture ---

async def test_read_product_status_and_alert(test_client: AsyncClient, make_product):
    product = await make_product(name="Souris", quantity=0)

    response = await test_client.get(f"{API_PREFIX}/products/{product.id}")

    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["stock_status"] == "OUT_OF_STOCK"
    assert data["alert_level"] == "critical"
    assert data["category"] is None


async def test_read_product_not_found(test_client: AsyncClient):
    response = await test_client.get(f"{API_PREFIX}/products/9999")
    assert response.status_code == status.HTTP_404_NOT_FOUND


async def test_list_products_search_by_category_name(test_client: AsyncClient, make_product, test_category):
    await make_product(name="Écran", quantity=3, category_id=test_category.id)
    await make_product(name="Chaise", quantity=30)

    response = await test_client.get(f"{API_PREFIX}/products/", params={"search": "electro"})

    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["total"] == 1
    assert data["items"][0]["name"] == "Écran"
    assert data["items"][0]["stock_status"] == "LOW_STOCK"


async def test_list_products_filter_by_category(test_client: AsyncClient, make_product, test_category):
    await make_product(name="Câble", category_id=test_category.id)
    await make_product(name="Bureau")

    response = await test_client.get(f"{API_PREFIX}/products/", params={"category_id": test_category.id})

    data = response.json()
    assert data["total"] == 1
    assert [item["name"] for item in data["items"]] == ["Câble"]

# --- Mise à jour ---

async def test_update_product_ignores_quantity(test_client: AsyncClient, make_product):
    product = await make_product(name="Lampe", quantity=8)

    response = await test_client.patch(
        f"{API_PREFIX}/products/{product.id}",
        json={"name": "Lampe LED", "quantity": 500, "low_stock_threshold": 4},
    )

    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["name"] == "Lampe LED"
    assert data["quantity"] == 8
    assert data["low_stock_threshold"] == 4
    assert data["alert_level"] == "none"


async def test_update_product_reset_threshold(test_client: AsyncClient, make_product):
    product = await make_product(quantity=8, low_stock_threshold=4)

    response = await test_client.patch(
        f"{API_PREFIX}/products/{product.id}", json={"low_stock_threshold": None}
    )

    data = response.json()
    assert data["low_stock_threshold"] is None
    assert data["alert_level"] == "medium"

# --- Suppression ---

async def test_delete_product(test_client: AsyncClient, make_product):
    product_id = (await make_product()).id

    response = await test_client.delete(f"{API_PREFIX}/products/{product_id}")
    assert response.status_code == status.HTTP_204_NO_CONTENT

    response = await test_client.get(f"{API_PREFIX}/products/{product_id}")
    assert response.status_code == status.HTTP_404_NOT_FOUND


async def test_delete_product_with_movements(test_client: AsyncClient, make_product, movement_service):
    product_id = (await make_product(quantity=5)).id
    await movement_service.stock_out(StockOutRequest(product_id=product_id, quantity=1, reason="Sale"))

    response = await test_client.delete(f"{API_PREFIX}/products/{product_id}")
    assert response.status_code == status.HTTP_409_CONFLICT


async def test_create_product_quantity_beyond_storage(test_client: AsyncClient):
    response = await test_client.post(
        f"{API_PREFIX}/products/", json={"name": "Géant", "price": 1, "quantity": 10**20}
    )
    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY


async def test_update_product_sets_updated_at(test_client: AsyncClient, make_product):
    product_id = (await make_product(name="Arrosoir", quantity=4)).id

    response = await test_client.patch(f"{API_PREFIX}/products/{product_id}", json={"price": "12.00"})

    assert response.status_code == status.HTTP_200_OK
    assert response.json()["updated_at"] is not None
