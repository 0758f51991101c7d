"""
Config module - Customer-editable configuration files.
"""

from .settings import DEFAULT_SETTINGS, PARAMETER_DEFAULTS, PROXY_ENV_VARS

__all__ = [
    'DEFAULT_SETTINGS',
    'PARAMETER_DEFAULTS',
    'PROXY_ENV_VARS',
]
