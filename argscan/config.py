"""
Options that control how a :class:`~argscan.scanner.LineScanner` converts the bytes of each line to text.

Each option may be provided explicitly, loaded from a YAML file via :meth:`ScannerConfig.from_file`, or left unset.
Unset options fall back to an environment variable, then to a built-in default.
"""

from __future__ import annotations

import codecs
import logging
import os
from pathlib import Path
from typing import Union, Callable, Any, Mapping, Optional

from yaml import safe_load

__all__ = ['ScannerConfig', 'ConfigException', 'InvalidConfigError', 'ENCODING_ENV_VAR', 'ERRORS_ENV_VAR']
log = logging.getLogger(__name__)

ENCODING_ENV_VAR = 'ARGSCAN_ENCODING'
ERRORS_ENV_VAR = 'ARGSCAN_ERRORS'


def _encoding(value: str) -> str:
    try:
        codecs.lookup(value)
    except (LookupError, TypeError) as e:
        raise InvalidConfigError(f'Invalid encoding={value!r}') from e
    return value


def _error_handler(value: str) -> str:
    try:
        codecs.lookup_error(value)
    except (LookupError, TypeError) as e:
        raise InvalidConfigError(f'Invalid decode error handler={value!r}') from e
    return value


class ScannerOption:
    """
    A validated scanner option.  When no value was set on an instance, the value of ``env_var`` is used if it is
    defined, otherwise ``default`` is used.  The fallback value is resolved and validated on first access.
    """

    __slots__ = ('name', 'env_var', 'default', 'validate')

    def __init__(self, env_var: str, default: str, validate: Callable[[Any], str]):
        self.env_var = env_var
        self.default = default
        self.validate = validate

    def __set_name__(self, owner, name: str):
        self.name = name
        owner._option_names_ = (*getattr(owner, '_option_names_', ()), name)

    def __get__(self, instance: Optional[ScannerConfig], owner):
        if instance is None:
            return self
        try:
            return instance.__dict__[self.name]
        except KeyError:
            pass
        instance.__dict__[self.name] = value = self.validate(os.environ.get(self.env_var, self.default))
        return value

    def __set__(self, instance: ScannerConfig, value: str):
        instance.__dict__[self.name] = self.validate(value)

    def __repr__(self) -> str:
        return f'<{self.__class__.__name__}[{self.name}, env={self.env_var}, default={self.default!r}]>'


class ScannerConfig:
    """
    :param config: A mapping of option names to values
    :param kwargs: Option values, which take precedence over those in ``config``
    :raises: :class:`InvalidConfigError` for unknown options or invalid values
    """

    _option_names_: tuple[str, ...]

    encoding: str = ScannerOption(ENCODING_ENV_VAR, 'utf-8', _encoding)
    errors: str = ScannerOption(ERRORS_ENV_VAR, 'surrogateescape', _error_handler)

    def __init__(self, config: Mapping[str, Any] = None, **kwargs):
        self.update(config, **kwargs)

    def __repr__(self) -> str:
        settings = ', '.join(f'{name}={getattr(self, name)!r}' for name in self._option_names_)
        return f'<{self.__class__.__name__}({settings})>'

    def update(self, config: Mapping[str, Any] = None, **kwargs):
        """Set the given options.  Nothing is changed if any of the given option names is unknown."""
        options = {**config, **kwargs} if config else kwargs
        if bad := set(options).difference(self._option_names_):
            raise InvalidConfigError(f'Invalid configuration - unsupported options: {", ".join(sorted(bad))}')
        for name, value in options.items():
            setattr(self, name, value)

    @classmethod
    def from_file(cls, path: Union[str, Path], encoding: str = 'utf-8') -> ScannerConfig:
        """
        :param path: Path to a YAML file containing a mapping of option names to values
        :param encoding: The encoding of the config file itself
        :return: A new ScannerConfig populated from the given file
        """
        path = Path(path).expanduser()
        log.debug(f'Loading scanner config from {path}')
        with path.open('r', encoding=encoding) as f:
            data = safe_load(f)
        if data is None:
            return cls()
        elif not isinstance(data, Mapping):
            type_name = type(data).__name__
            raise InvalidConfigError(f'Invalid configuration in {path} - expected a mapping, found {type_name}')
        return cls(data)


class ConfigException(Exception):
    """Base exception for config-related errors"""


class InvalidConfigError(ConfigException):
    """Raised when an unknown option or an invalid value is provided for a ScannerConfig"""
