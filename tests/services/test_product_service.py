"""Unit tests for ProductService over the in-memory gateway."""

import pytest

from product_api.services.product_service import ProductService
from product_api.services.types import NotFound, Ok, ProductRecord, ValidationFailed
from tests.fakes import InMemoryProductGateway


def _setup(
    products: list[ProductRecord] | None = None,
) -> tuple[ProductService, InMemoryProductGateway]:
    gateway = InMemoryProductGateway(products)
    return ProductService(gateway), gateway


def _create(service: ProductService, name: str, price: float) -> ProductRecord:
    outcome = service.create(ProductRecord(name=name, price=price))
    assert isinstance(outcome, Ok)
    return outcome.value


class TestCreate:

    def test_assigns_id_and_keeps_fields(self):
        service, _ = _setup()
        created = _create(service, "Laptop", 999.99)
        assert created.id is not None
        assert (created.name, created.price) == ("Laptop", 999.99)

    def test_ignores_supplied_id(self):
        service, gateway = _setup([ProductRecord(name="Existing", price=1.0)])
        outcome = service.create(ProductRecord(id=1, name="New", price=2.0))
        assert isinstance(outcome, Ok)
        assert outcome.value.id != 1
        assert gateway.get(1).name == "Existing"

    def test_does_not_mutate_candidate(self):
        service, _ = _setup()
        candidate = ProductRecord(id=42, name="Phone", price=499.99)
        service.create(candidate)
        assert candidate.id == 42

    def test_invalid_candidate_is_not_persisted(self):
        service, gateway = _setup()
        outcome = service.create(ProductRecord(name="A" * 256, price=99.99))
        assert isinstance(outcome, ValidationFailed)
        assert outcome.fields == ["name"]
        assert "save" not in gateway.calls

    def test_duplicate_names_allowed(self):
        service, _ = _setup()
        first = _create(service, "Speaker", 79.99)
        second = _create(service, "Speaker", 89.99)
        assert first.id != second.id

    def test_round_trip(self):
        service, _ = _setup()
        created = _create(service, "Phone", 499.99)
        assert service.get_by_id(created.id) == Ok(created)


class TestLookups:

    @pytest.mark.parametrize("product_id", [2**63, 10**30])
    def test_out_of_range_id_skips_store(self, product_id):
        service, gateway = _setup()
        assert isinstance(service.get_by_id(product_id), NotFound)
        assert service.exists_by_id(product_id) is False
        assert isinstance(service.delete(product_id), NotFound)
        assert isinstance(service.partial_update(product_id, {"price": 1.0}), NotFound)
        assert gateway.calls == []

    @pytest.mark.parametrize("product_id", [None, 0, -1])
    def test_get_by_invalid_id_skips_store(self, product_id):
        service, gateway = _setup()
        assert isinstance(service.get_by_id(product_id), NotFound)
        assert gateway.calls == []

    def test_get_unknown_id(self):
        service, _ = _setup()
        assert isinstance(service.get_by_id(9999), NotFound)

    @pytest.mark.parametrize("product_id", [None, 0, -5])
    def test_exists_by_invalid_id_skips_store(self, product_id):
        service, gateway = _setup()
        assert service.exists_by_id(product_id) is False
        assert gateway.calls == []

    def test_exists_by_id(self):
        service, _ = _setup()
        created = _create(service, "Test Product", 123.45)
        assert service.exists_by_id(created.id) is True
        assert service.exists_by_id(9999) is False

    def test_get_all_in_insertion_order(self):
        service, _ = _setup()
        _create(service, "Mouse", 29.99)
        _create(service, "Keyboard", 59.99)
        assert [p.name for p in service.get_all()] == ["Mouse", "Keyboard"]

    def test_get_all_empty(self):
        service, _ = _setup()
        assert service.get_all() == []

    def test_get_all_filters_by_name(self):
        service, _ = _setup()
        _create(service, "Web Camera", 69.99)
        _create(service, "Headset", 49.99)
        assert [p.name for p in service.get_all(name="camera")] == ["Web Camera"]


class TestFullUpdate:

    def test_overwrites_both_fields(self):
        service, _ = _setup()
        created = _create(service, "Tablet", 299.99)
        outcome = service.full_update(
            created.id, ProductRecord(name="Updated Tablet", price=349.99)
        )
        assert outcome == Ok(ProductRecord(id=created.id, name="Updated Tablet", price=349.99))

    def test_null_fields_are_left_unchanged(self):
        service, _ = _setup()
        created = _create(service, "Tablet", 299.99)
        outcome = service.full_update(created.id, ProductRecord(name=None, price=10.0))
        assert isinstance(outcome, Ok)
        assert (outcome.value.name, outcome.value.price) == ("Tablet", 10.0)

    def test_unknown_id(self):
        service, gateway = _setup()
        outcome = service.full_update(9999, ProductRecord(name="Ghost", price=1.0))
        assert isinstance(outcome, NotFound)
        assert "save" not in gateway.calls

    def test_invalid_id_skips_store(self):
        service, gateway = _setup()
        assert isinstance(service.full_update(0, ProductRecord(name="X", price=1.0)), NotFound)
        assert gateway.calls == []


class TestPartialUpdate:

    def test_updates_price_only(self):
        service, _ = _setup()
        created = _create(service, "Camera", 499.99)
        outcome = service.partial_update(created.id, {"price": 599.99})
        assert outcome == Ok(ProductRecord(id=created.id, name="Camera", price=599.99))

    def test_updates_name_only(self):
        service, _ = _setup()
        created = _create(service, "Old Camera", 499.99)
        outcome = service.partial_update(created.id, {"name": "New Camera"})
        assert isinstance(outcome, Ok)
        assert (outcome.value.name, outcome.value.price) == ("New Camera", 499.99)

    def test_integer_price_is_stored_as_float(self):
        service, _ = _setup()
        created = _create(service, "Camera", 499.99)
        outcome = service.partial_update(created.id, {"price": 600})
        assert outcome.value.price == 600.0
        assert isinstance(outcome.value.price, float)

    def test_ignores_unknown_keys_and_mismatched_types(self):
        service, _ = _setup()
        created = _create(service, "Camera", 499.99)
        outcome = service.partial_update(
            created.id,
            {"colour": "red", "name": 123, "price": "cheap", "id": 77},
        )
        assert outcome == Ok(ProductRecord(id=created.id, name="Camera", price=499.99))

    def test_boolean_is_not_a_price(self):
        service, _ = _setup()
        created = _create(service, "Camera", 499.99)
        outcome = service.partial_update(created.id, {"price": True})
        assert outcome.value.price == 499.99

    def test_invalid_supplied_value_rejected(self):
        service, gateway = _setup()
        created = _create(service, "Camera", 499.99)
        gateway.calls.clear()
        outcome = service.partial_update(created.id, {"price": -1.0})
        assert isinstance(outcome, ValidationFailed)
        assert outcome.fields == ["price"]
        assert "save" not in gateway.calls
        assert gateway.get(created.id).price == 499.99

    def test_unknown_id(self):
        service, _ = _setup()
        assert isinstance(service.partial_update(9999, {"price": 1.0}), NotFound)


class TestDelete:

    def test_delete_then_get(self):
        service, _ = _setup()
        created = _create(service, "Monitor", 199.99)
        assert service.delete(created.id) == Ok(None)
        assert isinstance(service.get_by_id(created.id), NotFound)

    def test_unknown_id(self):
        service, _ = _setup()
        assert isinstance(service.delete(9999), NotFound)

    def test_invalid_id_skips_store(self):
        service, gateway = _setup()
        assert isinstance(service.delete(-3), NotFound)
        assert gateway.calls == []


class TestCreateMany:

    def test_preserves_input_order_and_assigns_ids(self):
        service, _ = _setup()
        created = service.create_many([
            ProductRecord(name="Charger", price=19.99),
            ProductRecord(name="Headset", price=49.99),
            ProductRecord(name="Webcam", price=69.99),
        ])
        assert [p.name for p in created] == ["Charger", "Headset", "Webcam"]
        assert len({p.id for p in created}) == 3

    def test_strips_supplied_ids(self):
        service, gateway = _setup([ProductRecord(name="Existing", price=1.0)])
        created = service.create_many([ProductRecord(id=1, name="Fresh", price=2.0)])
        assert created[0].id != 1
        assert gateway.get(1).name == "Existing"

    def test_empty_batch_is_a_no_op(self):
        service, _ = _setup()
        assert service.create_many([]) == []
        assert service.get_all() == []
