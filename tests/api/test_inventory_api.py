"""HTTP tests for vehicles and sale records. Services run on the in-memory store via overrides."""

from typing import Annotated

import pytest
from fastapi import Depends
from httpx import AsyncClient

from dealer_inventory.api.v1.dependencies import (
    get_sale_record_service,
    get_tenant_id,
    get_vehicle_service,
)
from dealer_inventory.application.use_cases.sale_records import SaleRecordService
from dealer_inventory.application.use_cases.vehicles import VehicleService
from dealer_inventory.main import app

VEHICLE_BODY = {
    "vin": "1HGCM82633A004352",
    "year": 2019,
    "make": "Honda",
    "model": "Civic",
    "price": "17500.00",
}


@pytest.fixture
def wired(store):
    """Route vehicle and sale record services to the in-memory store, scoped by token tenant."""

    async def vehicle_service(tenant_id: Annotated[str, Depends(get_tenant_id)]) -> VehicleService:
        session = store.session(tenant_id)
        return VehicleService(session.vehicle_repo, session.uow)

    async def sale_record_service(
        tenant_id: Annotated[str, Depends(get_tenant_id)],
    ) -> SaleRecordService:
        session = store.session(tenant_id)
        return SaleRecordService(session.sale_record_repo, session.vehicle_repo, session.uow)

    app.dependency_overrides[get_vehicle_service] = vehicle_service
    app.dependency_overrides[get_sale_record_service] = sale_record_service
    return store


async def test_list_vehicles_without_token_returns_401(client: AsyncClient, wired) -> None:
    response = await client.get("/api/v1/vehicles")
    assert response.status_code == 401
    assert response.json()["error"] == "AUTHENTICATION_ERROR"
    assert response.headers["WWW-Authenticate"] == "Bearer"


async def test_invalid_token_returns_401(client: AsyncClient, wired) -> None:
    response = await client.get(
        "/api/v1/vehicles", headers={"Authorization": "Bearer not-a-jwt"}
    )
    assert response.status_code == 401


async def test_token_with_unsafe_dealership_id_returns_401(
    client: AsyncClient, wired, make_auth_headers
) -> None:
    """Dealership ids that could break cache key scoping are refused at the door."""
    response = await client.get("/api/v1/vehicles", headers=make_auth_headers("a:b*"))
    assert response.status_code == 401


async def test_list_vehicles_returns_page(client: AsyncClient, wired, auth_headers) -> None:
    wired.seed_vehicle(make="Ford")
    wired.seed_vehicle("dealer-b")
    response = await client.get("/api/v1/vehicles", headers=auth_headers)
    assert response.status_code == 200
    data = response.json()
    assert data["total_count"] == 1
    assert data["page"] == 1
    assert data["limit"] == 10
    assert data["rows"][0]["make"] == "Ford"


async def test_list_vehicles_bad_sort_returns_400(client: AsyncClient, wired, auth_headers) -> None:
    response = await client.get("/api/v1/vehicles?sort=price", headers=auth_headers)
    assert response.status_code == 400
    body = response.json()
    assert body["error"] == "INVALID_QUERY"
    assert body["details"]["reason"] == "bad format"


async def test_list_vehicles_unsortable_field_returns_400(
    client: AsyncClient, wired, auth_headers
) -> None:
    response = await client.get("/api/v1/vehicles?sort=vin:ASC", headers=auth_headers)
    assert response.status_code == 400
    assert response.json()["details"]["reason"] == "field not sortable"


@pytest.mark.parametrize("query", ["limit=0", "page=0"])
async def test_list_vehicles_out_of_range_paging_returns_422(
    client: AsyncClient, wired, auth_headers, query: str
) -> None:
    response = await client.get(f"/api/v1/vehicles?{query}", headers=auth_headers)
    assert response.status_code == 422
    assert response.json()["error"] == "VALIDATION_ERROR"


async def test_list_vehicles_accepts_large_limit(client: AsyncClient, wired, auth_headers) -> None:
    wired.seed_vehicle()
    response = await client.get("/api/v1/vehicles?limit=150", headers=auth_headers)
    assert response.status_code == 200
    assert response.json()["limit"] == 150
    assert response.json()["total_count"] == 1


async def test_create_vehicle_then_duplicate_vin(client: AsyncClient, wired, auth_headers) -> None:
    first = await client.post("/api/v1/vehicles", json=VEHICLE_BODY, headers=auth_headers)
    assert first.status_code == 201
    assert first.json()["vin"] == VEHICLE_BODY["vin"]
    assert first.json()["status"] == "AVAILABLE"

    second = await client.post("/api/v1/vehicles", json=VEHICLE_BODY, headers=auth_headers)
    assert second.status_code == 409
    assert second.json()["message"] == "VIN number already exists in your inventory"


async def test_create_vehicle_invalid_vin_returns_422(client: AsyncClient, wired, auth_headers) -> None:
    response = await client.post(
        "/api/v1/vehicles", json={**VEHICLE_BODY, "vin": "SHORT"}, headers=auth_headers
    )
    assert response.status_code == 422


async def test_get_vehicle_of_other_dealership_returns_404(
    client: AsyncClient, wired, make_auth_headers
) -> None:
    vehicle = wired.seed_vehicle("dealer-b")
    response = await client.get(
        f"/api/v1/vehicles/{vehicle.id}", headers=make_auth_headers("dealer-a")
    )
    assert response.status_code == 404
    assert response.json()["error"] == "RESOURCE_NOT_FOUND"


async def test_patch_delete_restore_vehicle(client: AsyncClient, wired, auth_headers) -> None:
    vehicle = wired.seed_vehicle()
    patched = await client.patch(
        f"/api/v1/vehicles/{vehicle.id}",
        json={"price": "15000.00", "status": "PENDING"},
        headers=auth_headers,
    )
    assert patched.status_code == 200
    assert patched.json()["status"] == "PENDING"

    deleted = await client.delete(f"/api/v1/vehicles/{vehicle.id}", headers=auth_headers)
    assert deleted.status_code == 204
    gone = await client.get(f"/api/v1/vehicles/{vehicle.id}", headers=auth_headers)
    assert gone.status_code == 404
    tombstone = await client.get(
        f"/api/v1/vehicles/{vehicle.id}?includeDeleted=true", headers=auth_headers
    )
    assert tombstone.status_code == 200
    assert tombstone.json()["deleted_at"] is not None

    restored = await client.post(f"/api/v1/vehicles/{vehicle.id}/restore", headers=auth_headers)
    assert restored.status_code == 200
    assert restored.json()["deleted_at"] is None


async def test_patch_null_image_url_clears_it(client: AsyncClient, wired, auth_headers) -> None:
    vehicle = wired.seed_vehicle(image_url="https://img.example/car.jpg")
    url = f"/api/v1/vehicles/{vehicle.id}"

    kept = await client.patch(url, json={"price": "19000.00"}, headers=auth_headers)
    assert kept.json()["image_url"] == "https://img.example/car.jpg"

    cleared = await client.patch(url, json={"image_url": None}, headers=auth_headers)
    assert cleared.status_code == 200
    assert cleared.json()["image_url"] is None


async def test_second_sold_record_returns_409(client: AsyncClient, wired, auth_headers) -> None:
    vehicle = wired.seed_vehicle()
    body = {
        "vehicle_id": vehicle.id,
        "final_price": "17000.00",
        "buyer_name": "Jane Buyer",
        "buyer_address": "1 Main St",
    }
    first = await client.post("/api/v1/sale-records", json=body, headers=auth_headers)
    assert first.status_code == 201
    assert first.json()["status"] == "SOLD"

    second = await client.post("/api/v1/sale-records", json=body, headers=auth_headers)
    assert second.status_code == 409
    assert second.json()["message"] == "item already sold via another record"


async def test_list_sale_records_of_vehicle(client: AsyncClient, wired, auth_headers) -> None:
    vehicle = wired.seed_vehicle()
    other = wired.seed_vehicle()
    wired.seed_sale_record(vehicle.id)
    wired.seed_sale_record(other.id)

    nested = await client.get(f"/api/v1/vehicles/{vehicle.id}/sale-records", headers=auth_headers)
    assert nested.status_code == 200
    assert [r["vehicle_id"] for r in nested.json()["rows"]] == [vehicle.id]

    filtered = await client.get(
        f"/api/v1/sale-records?vehicleId={other.id}", headers=auth_headers
    )
    assert [r["vehicle_id"] for r in filtered.json()["rows"]] == [other.id]


async def test_sale_records_of_unknown_vehicle_returns_404(
    client: AsyncClient, wired, auth_headers
) -> None:
    response = await client.get("/api/v1/vehicles/9999/sale-records", headers=auth_headers)
    assert response.status_code == 404
