import pytest

from composed_of_django import composed_of, get_aggregation, get_aggregations
from composed_of_django.descriptors import ComposedOfDescriptor
from composed_of_django.exceptions import AggregationNotFoundError, ConfigurationError, ValueClassNotFoundError
from composed_of_django.reflection import Aggregation, AggregationRegistry
from composed_of_django.value_object import UnvalidatedAdapter, ValidatingAdapter

from .testapp.models import Account, Customer, Person, Place, Shipment, VipPerson
from .testapp.values import Address, GpsLocation, Money

ORIGIN_MAPPING = [
    ("origin_street", "street"),
    ("origin_city", "city"),
    ("origin_state", "state"),
    ("origin_zip", "zip"),
]


def test_declared_metadata():
    agg = get_aggregation(Person, "address")

    assert isinstance(agg, Aggregation)
    assert agg.model is Person
    assert agg.label == "testapp.Person.address"
    assert agg.columns == ("address_street", "address_city", "address_state", "address_zip")
    assert agg.fields == ("street", "city", "state", "zip")
    assert agg.allow_nil is True
    assert agg.autosave is False
    assert agg.value_class is Address
    assert isinstance(agg.adapter, ValidatingAdapter)


def test_value_class_resolution_by_name_and_path():
    assert get_aggregation(Place, "gps_location").value_class is GpsLocation
    assert get_aggregation(Customer, "address").value_class is Address
    assert get_aggregation(Customer, "address").autosave is True


def test_functional_declaration_is_registered():
    agg = get_aggregation(Account, "balance")
    assert agg.value_class is Money
    assert isinstance(agg.adapter, UnvalidatedAdapter)
    assert isinstance(Account.balance, ComposedOfDescriptor)


def test_inherited_declarations_are_visible():
    assert get_aggregation(VipPerson, "address") is get_aggregation(Person, "address")
    assert [a.name for a in get_aggregations(VipPerson)] == ["address"]


def test_missing_aggregation():
    with pytest.raises(AggregationNotFoundError):
        get_aggregation(Person, "phone")
    with pytest.raises(LookupError):
        get_aggregation(Shipment, "destination")


def test_unresolvable_value_class_fails_on_first_use(scratch_registry):
    agg = composed_of(Shipment, "parcel", mapping=[("origin_zip", "zip")])

    with pytest.raises(ValueClassNotFoundError):
        agg.value_class
    with pytest.raises(ConfigurationError):
        Shipment().parcel = object()


def test_redeclaration_replaces_accessor_and_metadata(scratch_registry):
    first = composed_of(Shipment, "origin", class_name=Address, mapping=ORIGIN_MAPPING)
    second = composed_of(Shipment, "origin", class_name=Address, mapping=ORIGIN_MAPPING, allow_nil=True)

    assert get_aggregation(Shipment, "origin") is second
    assert Shipment.origin.aggregation is second
    assert first is not second
    assert scratch_registry.all() == (second,)
    assert Shipment().origin is None


def test_invalid_declaration_installs_nothing(scratch_registry):
    with pytest.raises(ConfigurationError):
        composed_of(Shipment, "destination", class_name=Address, colour="red")

    assert not hasattr(Shipment, "destination")
    assert scratch_registry.try_get(Shipment, "destination") is None


def test_fresh_registry_is_empty():
    registry = AggregationRegistry()
    assert registry.all() == ()
    assert registry.for_model(Person) == ()
    assert registry.try_get(Person, "address") is None
