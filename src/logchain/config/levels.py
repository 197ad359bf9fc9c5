"""
Level and color presets used as defaults by the padding and color formats.
"""

from typing import Dict

# name -> (severity, style)
_PRESETS = {
    'default': {
        'error': (0, 'red'),
        'warn': (1, 'yellow'),
        'info': (2, 'green'),
        'debug': (3, 'blue'),
        'trace': (4, 'magenta')
    },
    'cli': {
        'error': (0, 'red'),
        'warn': (1, 'yellow'),
        'help': (2, 'cyan'),
        'data': (3, 'grey'),
        'info': (4, 'green'),
        'debug': (5, 'blue'),
        'prompt': (6, 'grey'),
        'verbose': (7, 'cyan'),
        'input': (8, 'grey'),
        'silly': (9, 'magenta')
    },
    'syslog': {
        'emerg': (0, 'red'),
        'alert': (1, 'yellow'),
        'crit': (2, 'red'),
        'error': (3, 'red'),
        'warning': (4, 'red'),
        'notice': (5, 'yellow'),
        'info': (6, 'green'),
        'debug': (7, 'blue')
    }
}

DEFAULT = 'default'
CLI = 'cli'
SYSLOG = 'syslog'


def levels(preset: str = DEFAULT) -> Dict[str, int]:
    """
    Level severities for a preset.

    Args:
        preset: One of ``default``, ``cli`` or ``syslog``

    Returns:
        Mapping of level name to severity (0 is most severe)
    """
    return {name: severity for name, (severity, _) in _get(preset).items()}


def colors(preset: str = DEFAULT) -> Dict[str, str]:
    """Level name to style name for a preset."""
    return {name: style for name, (_, style) in _get(preset).items()}


def _get(preset: str):
    try:
        return _PRESETS[preset]
    except KeyError:
        raise KeyError(f"Unknown level preset '{preset}', expected one of {sorted(_PRESETS)}") from None
