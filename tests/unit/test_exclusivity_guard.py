"""ExclusivityGuard tests, including concurrent SOLD creates for one vehicle.

Concurrency runs on the in-memory store: every repository read yields to the
event loop, so two asyncio.gather'ed sessions interleave at each await.
"""

import asyncio
from decimal import Decimal

import pytest

from dealer_inventory.application.dtos.sale_record import SaleRecordCreate
from dealer_inventory.application.services.exclusivity_guard import ExclusivityGuard
from dealer_inventory.application.use_cases.sale_records import SaleRecordService
from dealer_inventory.domain.enums import SaleStatus
from dealer_inventory.domain.exceptions import (
    ResourceNotFoundException,
    VehicleAlreadySoldException,
)


def _guard(session) -> ExclusivityGuard:
    return ExclusivityGuard(session.vehicle_repo, session.sale_record_repo)


async def test_allows_first_sold_record(store) -> None:
    vehicle = store.seed_vehicle()
    await _guard(store.session("dealer-a")).assert_sale_allowed("dealer-a", vehicle.id)


async def test_rejects_second_sold_record(store) -> None:
    vehicle = store.seed_vehicle()
    existing = store.seed_sale_record(vehicle.id)
    with pytest.raises(VehicleAlreadySoldException) as exc_info:
        await _guard(store.session("dealer-a")).assert_sale_allowed("dealer-a", vehicle.id)
    assert exc_info.value.error_code == "CONFLICT"
    assert exc_info.value.message == "item already sold via another record"
    assert exc_info.value.details["existing_sale_record_id"] == existing.id


async def test_non_sold_records_do_not_block(store) -> None:
    vehicle = store.seed_vehicle()
    store.seed_sale_record(vehicle.id, status=SaleStatus.PENDING)
    store.seed_sale_record(vehicle.id, status=SaleStatus.CANCELLED)
    await _guard(store.session("dealer-a")).assert_sale_allowed("dealer-a", vehicle.id)


async def test_excluding_own_record_allows_resave(store) -> None:
    vehicle = store.seed_vehicle()
    record = store.seed_sale_record(vehicle.id)
    await _guard(store.session("dealer-a")).assert_sale_allowed(
        "dealer-a", vehicle.id, excluding_record_id=record.id
    )


async def test_vehicle_of_other_dealership_is_not_found(store) -> None:
    vehicle = store.seed_vehicle("dealer-b")
    with pytest.raises(ResourceNotFoundException):
        await _guard(store.session("dealer-a")).assert_sale_allowed("dealer-a", vehicle.id)


async def test_deleted_vehicle_cannot_be_sold(store) -> None:
    vehicle = store.seed_vehicle(deleted_at=store.now())
    with pytest.raises(ResourceNotFoundException):
        await _guard(store.session("dealer-a")).assert_sale_allowed("dealer-a", vehicle.id)


def _sold(vehicle_id: int, buyer: str) -> SaleRecordCreate:
    return SaleRecordCreate(
        vehicle_id=vehicle_id,
        final_price=Decimal("19999.00"),
        buyer_name=buyer,
        buyer_address="1 Main St",
    )


async def _race(store, vehicle_id: int):
    calls = []
    for buyer in ("Ann", "Bob"):
        session = store.session("dealer-a")
        svc = SaleRecordService(session.sale_record_repo, session.vehicle_repo, session.uow)
        calls.append(svc.create_sale_record("dealer-a", _sold(vehicle_id, buyer)))
    return await asyncio.gather(*calls, return_exceptions=True)


async def test_unguarded_check_then_act_admits_two_sold_records(make_store) -> None:
    """Without the row lock and unique rule, the check alone lets both writers through."""
    store = make_store(lock_rows=False, enforce_sold_unique=False)
    vehicle = store.seed_vehicle()
    results = await _race(store, vehicle.id)
    assert not any(isinstance(r, Exception) for r in results)
    assert len(store.sold_records(vehicle.id)) == 2


async def test_row_lock_serializes_concurrent_sold_creates(make_store) -> None:
    store = make_store(lock_rows=True, enforce_sold_unique=False)
    vehicle = store.seed_vehicle()
    results = await _race(store, vehicle.id)
    errors = [r for r in results if isinstance(r, Exception)]
    assert len(errors) == 1
    assert isinstance(errors[0], VehicleAlreadySoldException)
    assert len(store.sold_records(vehicle.id)) == 1


async def test_unique_rule_alone_rejects_second_sold_record(make_store) -> None:
    store = make_store(lock_rows=False, enforce_sold_unique=True)
    vehicle = store.seed_vehicle()
    results = await _race(store, vehicle.id)
    errors = [r for r in results if isinstance(r, Exception)]
    assert len(errors) == 1
    assert isinstance(errors[0], VehicleAlreadySoldException)
    assert len(store.sold_records(vehicle.id)) == 1


async def test_both_layers_together_admit_exactly_one(store) -> None:
    vehicle = store.seed_vehicle()
    results = await _race(store, vehicle.id)
    assert sum(1 for r in results if not isinstance(r, Exception)) == 1
    assert len(store.sold_records(vehicle.id)) == 1
