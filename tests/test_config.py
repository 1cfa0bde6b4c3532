import os
import tempfile

import pytest

from audioswitch.config import Config, ConfigError, load_config, load_config_or_default, save_config
from audioswitch.models import DeviceType


def test_save_and_load_config_roundtrip():
    cfg = Config(log_dir="C:/AudioSwitch/logs")
    cfg.catalog.usb = 2
    cfg.debug_logging = True

    with tempfile.TemporaryDirectory() as tmp:
        path = os.path.join(tmp, "audioswitch_config.yml")
        save_config(path, cfg)
        loaded = load_config(path)

    assert loaded.log_dir == "C:/AudioSwitch/logs"
    assert loaded.debug_logging is True
    assert (DeviceType.USB, 2) in loaded.catalog.to_spec()


def test_missing_config_uses_defaults():
    cfg = load_config_or_default("does-not-exist.yml")
    assert cfg.strategy == "priority_list"
    assert cfg.catalog.bluetooth == 3


def test_null_catalog_uses_defaults():
    with tempfile.TemporaryDirectory() as tmp:
        path = os.path.join(tmp, "audioswitch_config.yml")
        with open(path, "w", encoding="utf-8") as handle:
            handle.write("strategy: priority_list\ncatalog:\n")
        cfg = load_config(path)

    assert cfg.catalog.usb == 3


def test_unknown_catalog_key_raises_config_error():
    with tempfile.TemporaryDirectory() as tmp:
        path = os.path.join(tmp, "audioswitch_config.yml")
        with open(path, "w", encoding="utf-8") as handle:
            handle.write("catalog:\n  thunderbolt: 1\n")
        with pytest.raises(ConfigError) as excinfo:
            load_config(path)

    assert "thunderbolt" in str(excinfo.value)
