import os
import re
from configparser import ConfigParser, NoOptionError, NoSectionError
from typing import Dict, Any, Optional


class ConfigManager:
    """
    Immutable configuration manager - reads config files once and provides
    session-specific configuration objects
    """

    def __init__(self, config_file: Optional[str] = None):
        self.base_config = self._load_configs(config_file)

    def _load_configs(self, config_file: Optional[str] = None) -> ConfigParser:
        """
        Load and merge configuration files
        :param config_file: optional path to a custom config file
        :return: ConfigParser object
        """
        default_config_file = os.path.join(os.path.dirname(os.path.abspath(__file__)), 'config.ini')
        if not os.path.exists(default_config_file):
            raise FileNotFoundError(f'Could not find the default config file at {default_config_file}')

        config = ConfigParser()
        config.read(default_config_file)

        # Get the user config location from the default config file and check and read it
        if 'user_config' in config['DEFAULT']:
            user_config = self.resolve_file_path(config['DEFAULT']['user_config'])
            if user_config is not None:
                config.read(user_config)

        if config_file is not None:
            file = self.resolve_file_path(config_file)
            if file is None:
                raise FileNotFoundError(f'Could not find the custom config file at {config_file}')
            config.read(file)

        return config

    def create_session_config(self, overrides: Optional[Dict[str, Any]] = None) -> 'SessionConfig':
        """Create a mutable session-specific config"""
        return SessionConfig(self, dict(overrides or {}))

    def get_option(self, section: str, option: str, fallback: Any = None) -> Any:
        """Get an option from the base configuration"""
        try:
            return self.fix_values(self.base_config.get(section, option))
        except (NoSectionError, NoOptionError):
            return fallback

    @staticmethod
    def fix_values(value: Any) -> Any:
        """Fix some values due to how they are stored and retrieved with ConfigParser"""
        if isinstance(value, str):
            value = value.strip()

            # Handle path expansion only for strings that clearly look like paths
            if value.startswith(('~', './', '/', '\\')):
                expanded = os.path.expanduser(value)
                if expanded != value:
                    value = expanded

            # Handle list-like strings
            if value.startswith('[') and value.endswith(']'):
                return [ConfigManager.fix_values(item.strip()) for item in re.findall(r'[^,\s]+', value[1:-1])]

            if value.isdigit():
                return int(value)

            lower_value = value.lower()
            if lower_value in ('true', 'yes'):
                return True
            if lower_value in ('false', 'no'):
                return False

            # Remove quotes if present
            if (value.startswith('"') and value.endswith('"')) or (value.startswith("'") and value.endswith("'")):
                return value[1:-1]

        return value

    @staticmethod
    def resolve_file_path(file_name: Optional[str]) -> Optional[str]:
        """
        Works out the path to a file; relative names resolve against the working directory
        :param file_name: name of the file to resolve the path to
        :return: absolute path to the file or None
        """
        if file_name is None:
            return None

        file_name = os.path.expanduser(file_name)
        if os.path.isabs(file_name):
            return file_name if os.path.isfile(file_name) else None

        full_path = os.path.join(os.getcwd(), file_name)
        if os.path.isfile(full_path):
            return full_path
        return None


class SessionConfig:
    """
    Per-run view over a ConfigManager; overrides (e.g. from CLI flags)
    take precedence over any section.
    """

    def __init__(self, base: ConfigManager, overrides: Dict[str, Any]):
        self.base = base
        self.overrides = overrides

    def get_option(self, section: str, option: str, fallback: Any = None) -> Any:
        """
        Get a setting from the configuration

        :param section: the section to get the setting from
        :param option: the option to get
        :param fallback: the value to return if the option is not found
        :return: the setting value
        """
        # Overrides are keyed by option name only
        if option in self.overrides:
            return self.overrides[option]
        return self.base.get_option(section, option, fallback)

