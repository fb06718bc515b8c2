"""
Bracket manager settings: built-in defaults overlaid with a YAML file.
"""
import logging
import os

import yaml

logger = logging.getLogger(__name__)

BASE_DIR = os.path.dirname(os.path.dirname(__file__))
SETTINGS_FILE = os.environ.get('BRACKET_SETTINGS_FILE', os.path.join(BASE_DIR, 'data', 'settings.yaml'))


def get_default_settings():
    """Return default settings."""
    return {
        'max_participants': 32,
        'default_tournament_name': 'Tournament',
        'strict_match_lookups': True,
        'log_level': 'INFO',
    }


def load_settings(file_path=None):
    """Load settings from YAML, falling back to defaults for missing keys."""
    settings = get_default_settings()
    file_path = file_path or SETTINGS_FILE
    if not os.path.exists(file_path):
        return settings

    try:
        with open(file_path, mode='r', encoding='utf-8') as file:
            data = yaml.safe_load(file) or {}
    except yaml.YAMLError as e:
        logger.warning(f'Failed to parse {file_path}: {e}')
        return settings

    if not isinstance(data, dict):
        logger.warning(f'Ignoring {file_path}: expected a mapping of settings')
        return settings

    unknown = set(data) - set(settings)
    if unknown:
        logger.warning(f'Unknown settings in {file_path}: {", ".join(sorted(unknown))}')
    settings.update({key: value for key, value in data.items() if key in settings})
    return settings
