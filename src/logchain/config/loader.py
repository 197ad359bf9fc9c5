import configparser
import inspect
import logging
import os
from typing import Dict, Any, List

import yaml

from ..errors import ConfigurationError
from ..formats import (
    Format,
    align,
    chain,
    cli,
    colorize,
    json_format,
    label,
    logstash,
    metadata,
    ms,
    pad_levels,
    passthrough,
    pretty_print,
    simple,
    timestamp,
    uncolorize,
)

logger = logging.getLogger(__name__)

DEFAULT_LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

# stage name -> factory; printf needs a callable and cannot come from a file
FORMATS = {
    'align': align,
    'cli': cli,
    'colorize': colorize,
    'json': json_format,
    'label': label,
    'logstash': logstash,
    'metadata': metadata,
    'ms': ms,
    'pad_levels': pad_levels,
    'passthrough': passthrough,
    'pretty_print': pretty_print,
    'simple': simple,
    'timestamp': timestamp,
    'uncolorize': uncolorize
}

LIST_OPTIONS = ('levels', 'fill_except', 'fill_with')
MAPPING_OPTIONS = ('widths', 'colors')


def load_config(path: str) -> Dict[str, Any]:
    """
    Load a logchain configuration from an INI or YAML file.

    Args:
        path: Path to configuration file (``.yaml``/``.yml`` for YAML,
            anything else is read as INI)

    Returns:
        Configuration dictionary with ``logging`` and ``format`` keys
    """
    if not os.path.exists(path):
        raise FileNotFoundError(f"Config file not found: {path}")

    if path.endswith(('.yaml', '.yml')):
        raw = _read_yaml(path)
    else:
        raw = _read_ini(path)

    return _process_config(raw)


def _read_yaml(path: str) -> Dict[str, Any]:
    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigurationError(f"Top level of {path} must be a mapping")

    return {
        'logging': data.get('logging') or {},
        'format': _yaml_stages(data.get('format') or [])
    }


def _yaml_stages(items: Any) -> List[Dict[str, Any]]:
    if not isinstance(items, list):
        raise ConfigurationError("'format' must be a list of stages")

    stages = []
    for item in items:
        if isinstance(item, str):
            stages.append({'name': item, 'options': {}})
        elif isinstance(item, dict) and len(item) == 1:
            name, options = next(iter(item.items()))
            if options is not None and not isinstance(options, dict):
                raise ConfigurationError(f"Options for stage '{name}' must be a mapping")
            stages.append({'name': name, 'options': options or {}})
        else:
            raise ConfigurationError(f"Invalid stage entry: {item!r}")
    return stages


def _read_ini(path: str) -> Dict[str, Any]:
    config = configparser.ConfigParser(interpolation=None)
    try:
        config.read(path, encoding='utf-8')
    except configparser.Error as e:
        raise ConfigurationError(f"Invalid INI in {path}: {e}") from e

    cfg_dict = {section: dict(config[section]) for section in config.sections()}

    names = [n.strip() for n in cfg_dict.get('format', {}).get('chain', '').split(',') if n.strip()]
    stages = []
    for name in names:
        section = cfg_dict.get(f"format.{name}", {})
        options = {key: _coerce_ini_value(key, value) for key, value in section.items()}
        stages.append({'name': name, 'options': options})

    return {
        'logging': cfg_dict.get('logging', {}),
        'format': stages
    }


def _coerce_ini_value(key: str, value: str) -> Any:
    """
    Convert an INI string to the type its option expects.

    Args:
        key: Option name
        value: Raw string value

    Returns:
        list for list options, dict for mapping options (``a: 1, b: 2``),
        otherwise bool, int or the stripped string
    """
    value = value.strip()

    if key in LIST_OPTIONS:
        return [item.strip() for item in value.split(',') if item.strip()]

    if key in MAPPING_OPTIONS:
        mapping = {}
        for pair in value.split(','):
            if not pair.strip():
                continue
            if ':' not in pair:
                raise ConfigurationError(f"Expected 'name: value' pairs for {key}, got {pair.strip()!r}")
            name, item = pair.split(':', 1)
            mapping[name.strip()] = _coerce_scalar(item.strip())
        return mapping

    return _coerce_scalar(value)


def _coerce_scalar(value: str) -> Any:
    if value.lower() in ('true', 'false'):
        return value.lower() == 'true'
    try:
        return int(value)
    except ValueError:
        return value


def _process_config(config: Dict[str, Any]) -> Dict[str, Any]:
    """
    Fill in defaults and validate stage names.

    Args:
        config: Raw configuration dictionary

    Returns:
        Processed configuration
    """
    logging_config = config.get('logging') or {}

    processed = {
        'logging': {
            'level': str(logging_config.get('level', 'INFO')),
            'format': logging_config.get('format', DEFAULT_LOG_FORMAT),
            'file': logging_config.get('file')
        },
        'format': []
    }

    for stage in config.get('format', []):
        if stage['name'] not in FORMATS:
            raise ConfigurationError(
                f"Unknown format '{stage['name']}', expected one of {sorted(FORMATS)}"
            )
        processed['format'].append(stage)

    return processed


def build_format(config: Dict[str, Any]) -> Format:
    """
    Build the format chain described by a configuration.

    Args:
        config: Configuration from ``load_config``

    Returns:
        Chained format

    Raises:
        ConfigurationError: If no stages are configured, a stage is unknown,
            or its options are rejected
    """
    formats = []
    for stage in config.get('format', []):
        name, options = stage['name'], stage.get('options', {})
        factory = FORMATS.get(name)
        if factory is None:
            raise ConfigurationError(f"Unknown format '{name}'")

        try:
            inspect.signature(factory).bind(**options)
        except TypeError as e:
            raise ConfigurationError(f"Invalid options for format '{name}': {e}") from e

        formats.append(factory(**options))
        logger.debug(f"Configured format '{name}' with options {options}")

    return chain(*formats)


def setup_logging(config: Dict[str, Any]):
    """
    Setup logging based on configuration.

    Args:
        config: Configuration dictionary
    """
    logging_config = config.get('logging', {})

    level = getattr(logging, logging_config.get('level', 'INFO').upper(), logging.INFO)
    format_str = logging_config.get('format') or DEFAULT_LOG_FORMAT

    logging.basicConfig(
        level=level,
        format=format_str,
        filename=logging_config.get('file')
    )


def create_sample_config(output_path: str):
    """
    Write a sample YAML configuration.

    Args:
        output_path: Path to create sample file
    """
    sample_config = {
        'logging': {
            'level': 'INFO',
            'format': DEFAULT_LOG_FORMAT
        },
        'format': [
            {'timestamp': {'pattern': '%Y-%m-%d %H:%M:%S', 'alias': 'time'}},
            {'label': {'label': 'app', 'message': False}},
            {'metadata': {'fill_except': ['timestamp', 'time', 'label']}},
            'ms',
            'json'
        ]
    }

    with open(output_path, 'w', encoding='utf-8') as f:
        yaml.dump(sample_config, f, default_flow_style=False, indent=2, sort_keys=False)

    print(f"Sample configuration created at: {output_path}")
