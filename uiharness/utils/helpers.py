"""Helper utilities"""
import re
from datetime import datetime
from typing import Any, Dict

TRUE_STRINGS = {'true', '1', 'yes', 'on'}
FALSE_STRINGS = {'false', '0', 'no', 'off'}


def sanitize_filename(name: str) -> str:
    """Sanitize string for use as filename"""
    name = re.sub(r'\s+', '_', name.strip())
    return re.sub(r'[<>:"/\\|?*]', '_', name)


def timestamp_slug(moment: datetime = None) -> str:
    """ISO timestamp safe for filenames"""
    moment = moment or datetime.now()
    return re.sub(r'[:.]', '-', moment.isoformat(timespec='milliseconds'))


def parse_bool(value: Any, default: bool) -> bool:
    """Interpret a boolean-as-string, keeping the default for anything else"""
    if value is None:
        return default
    text = str(value).strip().lower()
    if text in TRUE_STRINGS:
        return True
    if text in FALSE_STRINGS:
        return False
    return default


def parse_int(value: Any, default: int) -> int:
    """Interpret an integer string, keeping the default when malformed"""
    if value is None:
        return default
    try:
        return int(str(value).strip())
    except ValueError:
        return default


def deep_merge(base: Dict, override: Dict) -> Dict:
    """Deep merge two dictionaries"""
    result = base.copy()

    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = value

    return result


def mask(value: str) -> str:
    """Replace every character with an asterisk for logging secrets"""
    return '*' * len(value or '')
