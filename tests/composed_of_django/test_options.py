import pytest

from composed_of_django.exceptions import ConfigurationError
from composed_of_django.options import VALID_KEYS, camelize, resolve_options

from .testapp.values import Address


def test_camelize_property_names():
    assert camelize("address") == "Address"
    assert camelize("gps_location") == "GpsLocation"


def test_defaults_infer_class_name_and_same_name_mapping():
    opts = resolve_options("gps_location", {})

    assert opts.class_name == "GpsLocation"
    assert opts.mapping == (("gps_location", "gps_location"),)
    assert opts.allow_nil is False
    assert opts.autosave is False
    assert opts.constructor is None
    assert opts.converter is None


def test_single_pair_is_wrapped():
    opts = resolve_options("temperature", {"mapping": ("reading", "celsius")})
    assert opts.mapping == (("reading", "celsius"),)


def test_mapping_order_is_preserved():
    mapping = [["address_zip", "zip"], ["address_street", "street"]]
    opts = resolve_options("address", {"mapping": mapping, "class_name": Address})
    assert opts.mapping == (("address_zip", "zip"), ("address_street", "street"))
    assert opts.class_name is Address


def test_unknown_keys_raise_configuration_error():
    with pytest.raises(ConfigurationError) as exc:
        resolve_options("address", {"class_name": "Address", "colour": "red", "autosaves": True})

    message = str(exc.value)
    assert "autosaves, colour" in message
    for key in VALID_KEYS:
        assert key in message


@pytest.mark.parametrize(
    "options",
    [
        {"mapping": []},
        {"mapping": "address_street"},
        {"mapping": [("address street", "street")]},
        {"mapping": [("a", "b", "c")]},
        {"allow_nil": "sometimes"},
        {"constructor": "not a name"},
        {"converter": 42},
    ],
)
def test_malformed_values_raise_configuration_error(options):
    with pytest.raises(ConfigurationError):
        resolve_options("address", options)


def test_property_name_must_be_an_identifier():
    with pytest.raises(ConfigurationError):
        resolve_options("home address", {})


def test_callable_constructor_and_converter_are_accepted():
    build = lambda *values: values  # noqa: E731
    opts = resolve_options("address", {"constructor": build, "converter": "parse"})
    assert opts.constructor is build
    assert opts.converter == "parse"


def test_project_defaults_apply_when_option_absent(settings):
    settings.COMPOSED_OF_ALLOW_NIL_DEFAULT = True
    settings.COMPOSED_OF_AUTOSAVE_DEFAULT = True

    opts = resolve_options("address", {})
    assert opts.allow_nil is True
    assert opts.autosave is True

    explicit = resolve_options("address", {"allow_nil": False, "autosave": False})
    assert explicit.allow_nil is False
    assert explicit.autosave is False
