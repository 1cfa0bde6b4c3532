import pytest

from audioswitch.catalog import (
    DeviceCatalog,
    UnknownDeviceError,
    build_devices,
    default_catalog,
)
from audioswitch.models import DeviceType, builtin_priority


def test_default_catalog_names():
    names = [d.name for d in default_catalog()]
    assert names == [
        "Internal",
        "3.5mm",
        "USB 1",
        "USB 2",
        "USB 3",
        "HDMI 1",
        "HDMI 2",
        "HDMI 3",
        "Bluetooth 1",
        "Bluetooth 2",
        "Bluetooth 3",
    ]


def test_default_catalog_is_generated_once():
    assert default_catalog() is default_catalog()


def test_build_devices_skips_zero_counts():
    devices = build_devices([(DeviceType.USB, 2), (DeviceType.HDMI, 0)])
    assert [d.name for d in devices] == ["USB 1", "USB 2"]


def test_find_prefers_exact_match():
    catalog = DeviceCatalog([(DeviceType.USB, 1), (DeviceType.HDMI, 2)])
    assert catalog.find("usb").name == "USB"
    assert catalog.find("hdmi").name == "HDMI 1"
    assert catalog.find("HDMI 2").name == "HDMI 2"
    assert catalog.find("firewire") is None


def test_get_unknown_device():
    with pytest.raises(UnknownDeviceError):
        default_catalog().get("USB 9")


def test_builtin_priorities():
    catalog = default_catalog()
    assert builtin_priority(catalog.get("3.5mm")) == 3
    assert builtin_priority(catalog.get("USB 1")) == 3
    assert builtin_priority(catalog.get("Bluetooth 2")) == 3
    assert builtin_priority(catalog.get("Internal")) == 2
    assert builtin_priority(catalog.get("HDMI 3")) == 1
