import dataclasses
from configparser import ConfigParser, ExtendedInterpolation
from unittest.mock import patch

import pytest
from nsidc.bounds import config, constants
from nsidc.bounds.models import Region

# Unit tests for the 'config' module functions.
#
# The test boundary is the config module's interface with the filesystem, so
# in addition to testing the config module's behavior, the tests should mock
# filesystem checks where needed and assert that config functions correctly
# handle missing files and bad values.


@pytest.fixture
def expected_keys():
    return set(
        [
            "method",
            "algorithm",
            "delimiter",
            "record",
            "skip",
            "distance",
            "increment",
            "region",
            "growth_factor",
            "timeout",
            "output_format",
            "layer_name",
            "header",
        ]
    )


@pytest.fixture
def cfg_parser():
    cp = ConfigParser(interpolation=ExtendedInterpolation())
    cp["Input"] = {"delimiter": ",", "record": "zdyx", "skip": 1}
    cp["Boundary"] = {
        "method": "block",
        "increment": 0.25,
        "west": -10,
        "region": "${west}/10/-5/5",
    }
    cp["Output"] = {"format": "gmt", "name": "survey", "header": False}
    return cp


@pytest.fixture
def test_config():
    return config.Config(
        "concave",
        "monotone_chain",
        None,
        "xy",
        0,
        0.0,
        0.0,
        "",
        2.0,
        0.0,
        "text",
        "bounds",
        True,
    )


def test_config_parser_without_filename():
    with pytest.raises(ValueError):
        config.config_parser_factory(None)


def test_config_parser_missing_file(tmp_path):
    with pytest.raises(ValueError, match="Unable to find"):
        config.config_parser_factory(str(tmp_path / "missing.ini"))


@patch("nsidc.bounds.config.os.path.exists", return_value=True)
def test_config_parser_return_type(mock):
    result = config.config_parser_factory("foo.ini")
    assert isinstance(result, ConfigParser)


def test_config_parser_reads_file(tmp_path):
    ini = tmp_path / "bounds.ini"
    ini.write_text("[Boundary]\nmethod = box\n")

    cfg = config.configuration(config.config_parser_factory(str(ini)), {})
    assert cfg.method == "box"


def test_config_from_config_parser(cfg_parser):
    cfg = config.configuration(cfg_parser, {})
    assert isinstance(cfg, config.Config)


def test_config_values(cfg_parser, expected_keys):
    cfg = config.configuration(cfg_parser, {})

    assert set(cfg.__dict__) == expected_keys
    assert cfg.method == "block"
    assert cfg.delimiter == ","
    assert cfg.record == "zdyx"
    assert cfg.skip == 1
    assert cfg.increment == 0.25
    assert cfg.region == "-10/10/-5/5"
    assert cfg.output_format == "gmt"
    assert cfg.layer_name == "survey"
    assert not cfg.header


def test_config_defaults():
    cfg = config.configuration(config.default_config_parser(), {})

    assert cfg.method == constants.DEFAULT_METHOD
    assert cfg.algorithm == constants.DEFAULT_ALGORITHM
    assert cfg.delimiter is None
    assert cfg.record == constants.DEFAULT_RECORD
    assert cfg.skip == 0
    assert cfg.distance == 0.0
    assert cfg.growth_factor == constants.DEFAULT_GROWTH_FACTOR
    assert cfg.region == ""
    assert cfg.output_format == "text"
    assert cfg.header


def test_config_overrides(cfg_parser):
    cfg = config.configuration(
        cfg_parser, {"method": "convex", "format": "geojson", "skip": 3, "header": None}
    )

    assert cfg.method == "convex"
    assert cfg.output_format == "geojson"
    assert cfg.skip == 3
    assert not cfg.header


def test_config_bad_value(cfg_parser):
    cfg_parser.set("Input", "skip", "lots")
    with pytest.raises(ValueError, match="Unable to read the configuration"):
        config.configuration(cfg_parser, {})


def test_boundary_region(test_config):
    assert test_config.boundary_region() is None
    cfg = dataclasses.replace(test_config, region="0/1/2/3")
    assert cfg.boundary_region() == Region(0, 1, 2, 3)


def test_show(test_config, capsys):
    test_config.show()
    output = capsys.readouterr().out

    for key in ["method", "record", "distance", "growth_factor", "output_format"]:
        assert f"+ {key}:" in output


def test_validate_with_valid_config(test_config):
    assert config.validate(test_config)


def test_validate_from_config_parser(cfg_parser):
    assert config.validate(config.configuration(cfg_parser, {}))


@pytest.mark.parametrize(
    "field, value",
    [
        ("method", "alpha"),
        ("algorithm", "quickhull"),
        ("record", "zz"),
        ("skip", -1),
        ("distance", -0.5),
        ("growth_factor", 1.0),
        ("timeout", -1.0),
        ("region", "1/2/3"),
        ("output_format", "kml"),
    ],
)
def test_validate_rejects(test_config, field, value):
    cfg = dataclasses.replace(test_config, **{field: value})
    with pytest.raises(config.ValidationError) as exc_info:
        config.validate(cfg)
    assert len(exc_info.value.errors) == 1


def test_validate_block_needs_increment(test_config):
    cfg = dataclasses.replace(test_config, method="block")
    with pytest.raises(config.ValidationError, match="positive increment"):
        config.validate(cfg)

    assert config.validate(dataclasses.replace(cfg, increment=0.1))


def test_validate_reports_every_error(test_config):
    cfg = dataclasses.replace(test_config, method="block", skip=-1, output_format="kml")
    with pytest.raises(config.ValidationError) as exc_info:
        config.validate(cfg)
    assert len(exc_info.value.errors) == 3
