import configparser
import dataclasses
import os.path
from typing import Optional

from nsidc.bounds import constants
from nsidc.bounds.models import BoundaryMethod, HullAlgorithm, OutputFormat, Region
from nsidc.bounds.region import parse_region


class ValidationError(Exception):
    errors: list[str]

    def __init__(self, errors):
        self.errors = errors
        super().__init__("; ".join(errors))


@dataclasses.dataclass
class Config:
    method: str
    algorithm: str
    delimiter: Optional[str]
    record: str
    skip: int
    distance: float
    increment: float
    region: str
    growth_factor: float
    timeout: float
    output_format: str
    layer_name: str
    header: bool

    def show(self):
        print()
        print('Using configuration:')
        for k, v in self.__dict__.items():
            print(f'  + {k}: {v}')

    def boundary_region(self) -> Optional[Region]:
        return parse_region(self.region)


def config_parser_factory(configuration_file):
    """
    Returns a ConfigParser by reading the specified file.
    """
    if configuration_file is None or not os.path.exists(configuration_file):
        raise ValueError(f'Unable to find configuration file {configuration_file}')
    cfg_parser = default_config_parser()
    cfg_parser.read(configuration_file)
    return cfg_parser


def default_config_parser():
    """
    Returns an empty ConfigParser, for running on defaults and command-line
    options alone.
    """
    return configparser.ConfigParser(interpolation=configparser.ExtendedInterpolation())


def _get_configuration_value(section, name, value_type, config_parser, overrides):
    """
    Returns a value from the provided config parser; any value for the key that
    is provided in the 'overrides' dictionary will take precedence.
    """
    if overrides.get(name) is not None:
        return overrides.get(name)

    if value_type is bool:
        return config_parser.getboolean(section, name)
    elif value_type is int:
        return config_parser.getint(section, name)
    elif value_type is float:
        return config_parser.getfloat(section, name)
    else:
        return config_parser.get(section, name)


def configuration(config_parser, overrides):
    """
    Returns a Config object populated from the provided config parser, with
    values overriden with anything provided in 'overrides'.
    """
    config_parser['DEFAULT'] = {
        'method': constants.DEFAULT_METHOD,
        'algorithm': constants.DEFAULT_ALGORITHM,
        'delimiter': '',
        'record': constants.DEFAULT_RECORD,
        'skip': constants.DEFAULT_SKIP,
        'distance': constants.DEFAULT_DISTANCE,
        'increment': constants.DEFAULT_INCREMENT,
        'region': '',
        'growth_factor': constants.DEFAULT_GROWTH_FACTOR,
        'timeout': constants.DEFAULT_TIMEOUT,
        'format': constants.DEFAULT_OUTPUT_FORMAT,
        'name': constants.DEFAULT_LAYER_NAME,
        'header': constants.DEFAULT_HEADER,
    }
    for section in (constants.INPUT_SECTION_NAME,
                    constants.BOUNDARY_SECTION_NAME,
                    constants.OUTPUT_SECTION_NAME):
        if not config_parser.has_section(section):
            config_parser.add_section(section)

    try:
        return Config(
            _get_configuration_value(constants.BOUNDARY_SECTION_NAME, 'method', str, config_parser, overrides),
            _get_configuration_value(constants.BOUNDARY_SECTION_NAME, 'algorithm', str, config_parser, overrides),
            _get_configuration_value(constants.INPUT_SECTION_NAME, 'delimiter', str, config_parser, overrides) or None,
            _get_configuration_value(constants.INPUT_SECTION_NAME, 'record', str, config_parser, overrides),
            _get_configuration_value(constants.INPUT_SECTION_NAME, 'skip', int, config_parser, overrides),
            _get_configuration_value(constants.BOUNDARY_SECTION_NAME, 'distance', float, config_parser, overrides),
            _get_configuration_value(constants.BOUNDARY_SECTION_NAME, 'increment', float, config_parser, overrides),
            _get_configuration_value(constants.BOUNDARY_SECTION_NAME, 'region', str, config_parser, overrides),
            _get_configuration_value(constants.BOUNDARY_SECTION_NAME, 'growth_factor', float, config_parser, overrides),
            _get_configuration_value(constants.BOUNDARY_SECTION_NAME, 'timeout', float, config_parser, overrides),
            _get_configuration_value(constants.OUTPUT_SECTION_NAME, 'format', str, config_parser, overrides),
            _get_configuration_value(constants.OUTPUT_SECTION_NAME, 'name', str, config_parser, overrides),
            _get_configuration_value(constants.OUTPUT_SECTION_NAME, 'header', bool, config_parser, overrides),
        )
    except ValueError as e:
        raise ValueError(f'Unable to read the configuration: {e}') from e


def _valid_region(text):
    try:
        parse_region(text)
    except ValueError:
        return False
    return True


def validate(configuration):
    """
    Validates each value in the configuration.

    Raises a ValidationError listing every failed check.
    """
    methods = [m.value for m in BoundaryMethod]
    algorithms = [a.value for a in HullAlgorithm]
    formats = [f.value for f in OutputFormat]

    validations = [
        ['method', lambda method: method in methods, f'The method must be one of {methods}.'],
        ['algorithm', lambda algorithm: algorithm in algorithms, f'The algorithm must be one of {algorithms}.'],
        ['record', lambda record: 'x' in record and 'y' in record, "The record must contain both 'x' and 'y'."],
        ['skip', lambda skip: skip >= 0, 'The skip count must not be negative.'],
        ['distance', lambda distance: distance >= 0, 'The distance must not be negative.'],
        ['growth_factor', lambda factor: factor > 1, 'The growth factor must be greater than 1.'],
        ['timeout', lambda timeout: timeout >= 0, 'The timeout must not be negative.'],
        ['region', _valid_region, 'The region must be west/east/south/north.'],
        ['output_format', lambda fmt: fmt in formats, f'The output format must be one of {formats}.'],
    ]
    errors = [msg for name, fn, msg in validations if not fn(getattr(configuration, name))]

    if configuration.method == BoundaryMethod.BLOCK.value and not configuration.increment > 0:
        errors.append('The block method requires a positive increment.')

    if errors:
        raise ValidationError(errors)
    return True
