import pytest

from composed_of_django import aggregations as aggregations_module
from composed_of_django import reflection
from composed_of_django.reflection import AggregationRegistry


@pytest.fixture
def scratch_registry(monkeypatch):
    """
    Fresh aggregation registry for declaration tests on the `Shipment` model.

    Class attributes of `Shipment` are restored afterwards so declarations do
    not bleed into other tests (or the system checks).
    """
    from .testapp.models import Shipment

    registry = AggregationRegistry()
    monkeypatch.setattr(reflection, "aggregations", registry)
    monkeypatch.setattr(aggregations_module, "aggregations", registry)

    before = dict(vars(Shipment))
    yield registry
    for name, value in list(vars(Shipment).items()):
        if name not in before:
            delattr(Shipment, name)
        elif before[name] is not value:
            setattr(Shipment, name, before[name])
