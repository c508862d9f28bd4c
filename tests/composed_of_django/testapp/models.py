from django.db import models

from composed_of_django import AggregationsMixin, ComposedOf, composed_of

from .values import Address, GpsLocation, Money  # noqa: F401  (GpsLocation is looked up by name)

ADDRESS_MAPPING = [
    ("address_street", "street"),
    ("address_city", "city"),
    ("address_state", "state"),
    ("address_zip", "zip"),
]


class Person(models.Model):
    name = models.CharField(max_length=100)
    address_street = models.CharField(max_length=255, null=True, blank=True)
    address_city = models.CharField(max_length=255, null=True, blank=True)
    address_state = models.CharField(max_length=2, null=True, blank=True)
    address_zip = models.CharField(max_length=10, null=True, blank=True)

    address = ComposedOf(class_name=Address, mapping=ADDRESS_MAPPING, allow_nil=True)


class VipPerson(Person):
    class Meta:
        proxy = True


class Customer(AggregationsMixin, models.Model):
    name = models.CharField(max_length=100)
    address_street = models.CharField(max_length=255, null=True, blank=True)
    address_city = models.CharField(max_length=255, null=True, blank=True)
    address_state = models.CharField(max_length=2, null=True, blank=True)
    address_zip = models.CharField(max_length=10, null=True, blank=True)

    address = ComposedOf(
        class_name="tests.composed_of_django.testapp.values.Address",
        mapping=ADDRESS_MAPPING,
        allow_nil=True,
        autosave=True,
    )


class Place(models.Model):
    lat = models.CharField(max_length=32, null=True, blank=True)
    lng = models.CharField(max_length=32, null=True, blank=True)

    # class_name inferred: "GpsLocation", looked up in this module
    gps_location = ComposedOf(
        mapping=[("lat", "latitude"), ("lng", "longitude")],
        constructor="from_columns",
        allow_nil=True,
    )


class Account(models.Model):
    balance_amount = models.DecimalField(max_digits=12, decimal_places=2, null=True, blank=True)
    balance_currency = models.CharField(max_length=3, null=True, blank=True)


composed_of(
    Account,
    "balance",
    class_name=Money,
    mapping=[("balance_amount", "amount"), ("balance_currency", "currency")],
    constructor=Money.from_columns,
    converter="parse",
)


class Shipment(models.Model):
    """Scratch model for declaration tests; declarations on it are redone per test."""

    origin_street = models.CharField(max_length=255, null=True, blank=True)
    origin_city = models.CharField(max_length=255, null=True, blank=True)
    origin_state = models.CharField(max_length=2, null=True, blank=True)
    origin_zip = models.CharField(max_length=10, null=True, blank=True)
