from pathlib import Path

import pytest
import yaml

from expander.core.controller import ControllerDescriptor
from expander.core.exceptions import ConfigurationError
from expander.utils import config_loader
from expander.utils.config_loader import (
    _get_config_path,
    _load_yaml_file,
    _parse_controller_cfg_from_dict,
    clear_config_cache,
    get_controller_config,
    load_controller,
)


@pytest.fixture(autouse=True)
def fresh_cache():
    clear_config_cache()
    yield
    clear_config_cache()


def test_get_config_path_default():
    path = Path(_get_config_path("MCP23017"))

    assert path.name == "config.yaml"
    assert path.parent.name == "mcp23017"
    assert path.exists()


def test_get_config_path_override():
    assert _get_config_path("mcp23008", "/tmp/custom.yaml") == "/tmp/custom.yaml"


def test_load_yaml_file_invalid(temp_yaml_file):
    temp_yaml_file.write_text("ports: [unclosed", encoding="utf-8")

    with pytest.raises(ConfigurationError):
        _load_yaml_file(temp_yaml_file)


def test_load_yaml_file_not_mapping(temp_yaml_file):
    temp_yaml_file.write_text("- 1\n- 2\n", encoding="utf-8")

    with pytest.raises(ConfigurationError, match="must contain a mapping"):
        _load_yaml_file(temp_yaml_file)


def test_load_yaml_file_missing(tmp_path):
    with pytest.raises(ConfigurationError):
        _load_yaml_file(tmp_path / "absent.yaml")


def test_parse_valid(valid_controller_config_dict):
    descriptor = _parse_controller_cfg_from_dict(valid_controller_config_dict)

    assert descriptor.name == "MCP23017"
    assert descriptor.port_count == 2
    assert descriptor.ports[1].gpio == 0x13


def test_parse_missing_top_level_key(valid_controller_config_dict):
    del valid_controller_config_dict["address"]

    with pytest.raises(ConfigurationError, match="Missing required config key"):
        _parse_controller_cfg_from_dict(valid_controller_config_dict)


def test_parse_missing_register(valid_controller_config_dict):
    del valid_controller_config_dict["ports"]["B"]["latch"]

    with pytest.raises(ConfigurationError) as info:
        _parse_controller_cfg_from_dict(valid_controller_config_dict)

    assert info.value.config_key == "ports.B"


def test_parse_empty_ports(valid_controller_config_dict):
    valid_controller_config_dict["ports"] = {}

    with pytest.raises(ConfigurationError) as info:
        _parse_controller_cfg_from_dict(valid_controller_config_dict)

    assert info.value.config_key == "ports"


def test_parse_bad_value(valid_controller_config_dict):
    valid_controller_config_dict["address"] = "not-a-number"

    with pytest.raises(ConfigurationError, match="Invalid config schema"):
        _parse_controller_cfg_from_dict(valid_controller_config_dict)


def test_parse_out_of_range_address(valid_controller_config_dict):
    valid_controller_config_dict["address"] = 0x80

    with pytest.raises(ConfigurationError):
        _parse_controller_cfg_from_dict(valid_controller_config_dict)


def test_load_controller_from_file(temp_config_yaml_file):
    descriptor = load_controller("mcp23017", path=str(temp_config_yaml_file))

    assert isinstance(descriptor, ControllerDescriptor)
    assert descriptor.pin_count == 16


def test_load_three_port_file_rejected(temp_yaml_file, valid_controller_config_dict):
    valid_controller_config_dict["ports"]["C"] = dict(valid_controller_config_dict["ports"]["B"])
    with open(temp_yaml_file, "w", encoding="utf-8") as f:
        yaml.dump(valid_controller_config_dict, f)

    with pytest.raises(ConfigurationError):
        load_controller("mcp23017", path=str(temp_yaml_file))


@pytest.mark.parametrize(
    "name, pins, gpio",
    [("MCP23008", 8, 0x09), ("MCP23017", 16, 0x12)],
)
def test_bundled_configs(name, pins, gpio):
    descriptor = load_controller(name)

    assert descriptor.name == name
    assert descriptor.address == 0x20
    assert descriptor.pin_count == pins
    assert descriptor.ports[0].gpio == gpio


def test_get_controller_config_caches():
    first = get_controller_config("MCP23008")

    assert get_controller_config("mcp23008") is first
    assert "mcp23008" in config_loader._LOADER_CACHE


def test_clear_config_cache_reloads():
    first = get_controller_config("MCP23008")
    clear_config_cache()

    second = get_controller_config("MCP23008")

    assert second == first
    assert second is not first
