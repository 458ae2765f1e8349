"""
API tests for the floor plan, ordering and invoicing flow
"""

import pytest
from decimal import Decimal
import uuid

from httpx import AsyncClient

API = "/api/v1"


async def create_table(client: AsyncClient, number: int) -> dict:
    response = await client.post(f"{API}/tables/", json={"number": number})
    assert response.status_code == 201, response.text
    return response.json()


async def create_product(client: AsyncClient, name: str, price: str, category: str = "Bebidas") -> dict:
    response = await client.post(f"{API}/products/", json={"name": name, "price": price, "category": category})
    assert response.status_code == 201, response.text
    return response.json()


@pytest.mark.asyncio
async def test_health(client: AsyncClient):
    response = await client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


@pytest.mark.asyncio
async def test_full_table_flow(client: AsyncClient):
    """Create table 5, open, order coffee and cake, close and check history"""
    table = await create_table(client, 5)
    coffee = await create_product(client, "Coffee", "3.00")
    cake = await create_product(client, "Cake", "5.00", "Postres")
    assert table["status"] == "FREE"
    assert table["current_session_id"] is None

    response = await client.post(f"{API}/tables/{table['id']}/open")
    assert response.status_code == 201
    opened = response.json()
    assert Decimal(opened["total_amount"]) == 0

    response = await client.post(
        f"{API}/orders/table/{table['id']}",
        json={"items": [{"product_id": coffee["id"], "quantity": 2}]},
    )
    assert response.status_code == 201
    assert Decimal(response.json()["total_amount"]) == Decimal("6")

    response = await client.post(
        f"{API}/orders/table/{table['id']}",
        json={"items": [{"product_id": cake["id"], "quantity": 1}]},
    )
    assert Decimal(response.json()["total_amount"]) == Decimal("11")

    detail = (await client.get(f"{API}/tables/{table['id']}")).json()
    assert detail["status"] == "OCCUPIED"
    assert detail["current_session_id"] == opened["id"]
    assert len(detail["current_session"]["orders"]) == 2
    assert Decimal(detail["current_session"]["total_amount"]) == Decimal("11")

    response = await client.post(f"{API}/tables/{table['id']}/close")
    assert response.status_code == 200
    invoice = response.json()
    assert invoice["table_number"] == 5
    assert invoice["session_id"] == opened["id"]
    assert Decimal(invoice["total_amount"]) == Decimal("11")
    assert invoice["end_time"] is not None
    assert [line["product_name"] for line in invoice["lines"]] == ["Coffee", "Cake"]

    detail = (await client.get(f"{API}/tables/{table['id']}")).json()
    assert detail["status"] == "FREE"
    assert detail["current_session"] is None

    summary = (await client.get(f"{API}/invoices/")).json()
    assert summary["total_sessions"] == 1
    assert Decimal(summary["total_sales"]) == Decimal("11")
    assert summary["sessions"][0]["table_number"] == 5

    receipt = await client.get(f"{API}/invoices/{opened['id']}/receipt")
    assert receipt.status_code == 200
    assert receipt.headers["content-type"].startswith("text/plain")
    assert "TOTAL" in receipt.text

    session_detail = (await client.get(f"{API}/table-sessions/{opened['id']}")).json()
    assert session_detail["is_open"] is False


@pytest.mark.asyncio
async def test_open_twice_is_conflict(client: AsyncClient):
    table = await create_table(client, 1)
    await client.post(f"{API}/tables/{table['id']}/open")

    response = await client.post(f"{API}/tables/{table['id']}/open")

    assert response.status_code == 409
    body = response.json()
    assert body["code"] == "invalid_state"
    assert "only FREE tables" in body["error"]


@pytest.mark.asyncio
async def test_duplicate_table_number(client: AsyncClient):
    await create_table(client, 3)

    response = await client.post(f"{API}/tables/", json={"number": 3})

    assert response.status_code == 409
    assert response.json()["code"] == "conflict"


@pytest.mark.asyncio
async def test_disable_hides_table_from_floor_plan(client: AsyncClient):
    first = await create_table(client, 1)
    await create_table(client, 2)

    response = await client.put(f"{API}/tables/{first['id']}/status", json={"status": "DISABLED"})
    assert response.status_code == 200
    assert response.json()["status"] == "DISABLED"

    everything = (await client.get(f"{API}/tables/")).json()
    floor_plan = (await client.get(f"{API}/tables/", params={"include_disabled": "false"})).json()
    assert [t["number"] for t in everything] == [1, 2]
    assert [t["number"] for t in floor_plan] == [2]


@pytest.mark.asyncio
async def test_disable_occupied_table_fails(client: AsyncClient):
    table = await create_table(client, 1)
    await client.post(f"{API}/tables/{table['id']}/open")

    response = await client.put(f"{API}/tables/{table['id']}/status", json={"status": "DISABLED"})

    assert response.status_code == 409
    assert response.json()["code"] == "invalid_transition"


@pytest.mark.asyncio
async def test_free_occupied_table_by_hand_fails(client: AsyncClient):
    table = await create_table(client, 1)
    opened = (await client.post(f"{API}/tables/{table['id']}/open")).json()

    response = await client.put(f"{API}/tables/{table['id']}/status", json={"status": "FREE"})

    assert response.status_code == 409
    assert response.json()["code"] == "invalid_transition"
    detail = (await client.get(f"{API}/tables/{table['id']}")).json()
    assert detail["status"] == "OCCUPIED"
    assert detail["current_session_id"] == opened["id"]


@pytest.mark.asyncio
async def test_add_items_validation(client: AsyncClient):
    table = await create_table(client, 1)
    coffee = await create_product(client, "Coffee", "3.00")

    response = await client.post(
        f"{API}/orders/table/{table['id']}",
        json={"items": [{"product_id": coffee["id"], "quantity": 1}]},
    )
    assert response.status_code == 409

    await client.post(f"{API}/tables/{table['id']}/open")
    response = await client.post(
        f"{API}/orders/table/{table['id']}",
        json={"items": [{"product_id": coffee["id"], "quantity": 0}]},
    )
    assert response.status_code == 422
    assert response.json()["code"] == "validation_error"

    response = await client.post(
        f"{API}/orders/table/{table['id']}",
        json={"items": [{"product_id": str(uuid.uuid4()), "quantity": 1}]},
    )
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_unknown_table_is_404(client: AsyncClient):
    response = await client.get(f"{API}/tables/{uuid.uuid4()}")

    assert response.status_code == 404
    assert response.json()["error"] == "Table not found"


@pytest.mark.asyncio
async def test_product_lifecycle(client: AsyncClient):
    product = await create_product(client, "Nachos", "7.5", "Comidas")
    assert Decimal(product["price"]) == Decimal("7.50")

    response = await client.patch(f"{API}/products/{product['id']}", json={"price": "8.00"})
    assert Decimal(response.json()["price"]) == Decimal("8.00")

    response = await client.delete(f"{API}/products/{product['id']}")
    assert response.status_code == 204

    listed = (await client.get(f"{API}/products/")).json()
    assert listed == []
    listed = (await client.get(f"{API}/products/", params={"include_inactive": "true"})).json()
    assert listed[0]["is_active"] is False


@pytest.mark.asyncio
async def test_negative_price_rejected(client: AsyncClient):
    response = await client.post(f"{API}/products/", json={"name": "Bad", "price": "-1", "category": "Bebidas"})

    assert response.status_code == 422


@pytest.mark.asyncio
async def test_delete_table(client: AsyncClient):
    table = await create_table(client, 9)

    response = await client.delete(f"{API}/tables/{table['id']}")

    assert response.status_code == 204
    assert (await client.get(f"{API}/tables/{table['id']}")).status_code == 404


@pytest.mark.asyncio
async def test_product_categories(client: AsyncClient):
    response = await client.get(f"{API}/products/categories")

    assert response.status_code == 200
    assert response.json() == ["Bebidas", "Comidas", "Postres"]
