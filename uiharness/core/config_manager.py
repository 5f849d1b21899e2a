"""Configuration management"""
import os
import re
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml

from uiharness.errors import SessionError
from uiharness.utils.helpers import deep_merge, parse_bool, parse_int

CONFIG_DIR = Path(__file__).resolve().parent.parent / 'config'

DEFAULT_PROFILE = 'local'
PROFILES = ('local', 'development', 'staging', 'production')
PROFILE_ALIASES = {
    'dev': 'development',
    'stage': 'staging',
    'prod': 'production',
}

ENV_VAR_PATTERN = re.compile(r'^\$\{([A-Za-z_][A-Za-z0-9_]*)(?::-(.*))?\}$')

# environment variable -> (dotted config key, converter)
ENV_OVERRIDES = (
    ('BROWSER', 'browser.type', 'str'),
    ('HEADLESS', 'browser.headless', 'bool'),
    ('SLOW_MO', 'browser.slow_mo', 'int'),
    ('VIEWPORT_WIDTH', 'browser.viewport.width', 'int'),
    ('VIEWPORT_HEIGHT', 'browser.viewport.height', 'int'),
    ('TIMEOUT', 'timeout', 'int'),
    ('ALLURE_RESULTS_DIR', 'reporting.allure_results_dir', 'str'),
    ('SCREENSHOTS_DIR', 'reporting.screenshots_dir', 'str'),
    ('SCREENSHOT_ON_FAIL', 'reporting.screenshot_on_fail', 'bool'),
    ('TEST_DATA_FILE', 'data.file', 'str'),
    ('CUCUMBER_TAGS', 'tags', 'str'),
    ('TEST_TAGS', 'tags', 'str'),
)


class BrowserFamily(Enum):
    """Browser engines Playwright can launch"""
    CHROMIUM = 'chromium'
    FIREFOX = 'firefox'
    WEBKIT = 'webkit'

    @classmethod
    def parse(cls, value: str) -> 'BrowserFamily':
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            supported = ', '.join(member.value for member in cls)
            raise SessionError(f"Unsupported browser type: {value} (expected one of: {supported})") from None


@dataclass(frozen=True)
class Settings:
    """Resolved settings for one test run"""
    environment: str
    base_url: str
    browser: str
    headless: bool
    slow_mo: int
    timeout: int
    viewport_width: int
    viewport_height: int
    allure_results_dir: str
    screenshots_dir: str
    screenshot_on_fail: bool
    data_file: str
    login_sheet: str
    key_column: str
    features_dir: str
    generated_feature: str
    tags: str
    log_level: str

    @property
    def viewport(self) -> Dict[str, int]:
        return {'width': self.viewport_width, 'height': self.viewport_height}


def normalize_profile(name: Optional[str]) -> str:
    """Map a requested environment name onto a known profile, local otherwise"""
    if not name:
        return DEFAULT_PROFILE
    key = name.strip().lower()
    key = PROFILE_ALIASES.get(key, key)
    return key if key in PROFILES else DEFAULT_PROFILE


class ConfigManager:
    """Loads profile YAML and layers environment variables on top"""

    def __init__(self, environment: Optional[str] = None, environ: Optional[Mapping[str, str]] = None,
                 config_dir: Path = CONFIG_DIR):
        self.environ = os.environ if environ is None else environ
        requested = environment or self.environ.get('TEST_ENV') or self.environ.get('NODE_ENV')
        self.environment = normalize_profile(requested)
        self.config_path = Path(config_dir) / 'config.yaml'
        self.config = {}

    def load_config(self) -> Dict[str, Any]:
        """Load and merge configuration files"""
        with open(self.config_path, 'r') as f:
            self.config = yaml.safe_load(f) or {}

        env_config_path = self.config_path.parent / 'environments' / f'{self.environment}.yaml'
        with open(env_config_path, 'r') as f:
            env_config = yaml.safe_load(f) or {}

        if 'overrides' in env_config:
            overrides = env_config.pop('overrides')
            self._apply_overrides(self.config, overrides)

        self.config = deep_merge(self.config, env_config)
        self.config = self._process_env_vars(self.config)
        self._apply_env_overrides(self.config)
        return self.config

    def _apply_overrides(self, base: Dict, overrides: Dict) -> None:
        """Apply the profile's overrides section to the base config"""
        for section, values in overrides.items():
            if section in base and isinstance(base[section], dict) and isinstance(values, dict):
                base[section] = deep_merge(base[section], values)
            else:
                base[section] = values

    def _process_env_vars(self, config: Any) -> Any:
        """Replace ${VAR} and ${VAR:-default} with environment variables"""
        if isinstance(config, dict):
            return {k: self._process_env_vars(v) for k, v in config.items()}
        elif isinstance(config, list):
            return [self._process_env_vars(item) for item in config]
        elif isinstance(config, str):
            match = ENV_VAR_PATTERN.match(config)
            if not match:
                return config
            var_name, default = match.groups()
            value = self.environ.get(var_name)
            if value:
                return value
            return default if default is not None else config
        else:
            return config

    def _apply_env_overrides(self, config: Dict) -> None:
        for var_name, key, kind in ENV_OVERRIDES:
            raw = self.environ.get(var_name)
            if raw is None or raw == '':
                continue
            current = self._lookup(config, key)
            if kind == 'bool':
                value = parse_bool(raw, current)
            elif kind == 'int':
                value = parse_int(raw, current)
            else:
                value = raw.strip()
            self._assign(config, key, value)

    @staticmethod
    def _lookup(config: Dict, key: str) -> Any:
        value = config
        for part in key.split('.'):
            if not isinstance(value, dict):
                return None
            value = value.get(part)
        return value

    @staticmethod
    def _assign(config: Dict, key: str, value: Any) -> None:
        parts = key.split('.')
        target = config
        for part in parts[:-1]:
            target = target.setdefault(part, {})
        target[parts[-1]] = value

    def get(self, key: str, default: Any = None) -> Any:
        """Get configuration value by key (supports dot notation)"""
        value = self._lookup(self.config, key)
        return default if value is None else value

    def to_settings(self) -> Settings:
        if not self.config:
            self.load_config()
        return Settings(
            environment=self.environment,
            base_url=str(self.get('base_url', '')).rstrip('/'),
            browser=str(self.get('browser.type', BrowserFamily.CHROMIUM.value)),
            headless=bool(self.get('browser.headless', True)),
            slow_mo=int(self.get('browser.slow_mo', 0)),
            timeout=int(self.get('timeout', 30000)),
            viewport_width=int(self.get('browser.viewport.width', 1920)),
            viewport_height=int(self.get('browser.viewport.height', 1080)),
            allure_results_dir=str(self.get('reporting.allure_results_dir', 'allure-results')),
            screenshots_dir=str(self.get('reporting.screenshots_dir', 'screenshots')),
            screenshot_on_fail=bool(self.get('reporting.screenshot_on_fail', True)),
            data_file=str(self.get('data.file', 'test_data.xlsx')),
            login_sheet=str(self.get('data.login_sheet', 'Login')),
            key_column=str(self.get('data.key_column', 'test_case_id')),
            features_dir=str(self.get('features.dir', 'features')),
            generated_feature=str(self.get('features.generated', 'features/generated/login_ddt.feature')),
            tags=str(self.get('tags', '') or ''),
            log_level=str(self.environ.get('LOG_LEVEL') or 'INFO').upper(),
        )


def resolve(environment_name: Optional[str] = None, environ: Optional[Mapping[str, str]] = None) -> Settings:
    """Resolve run settings for a profile from the process environment"""
    return ConfigManager(environment_name, environ).to_settings()
