"""
Read lines from the files named on the command line, one after another, or from stdin if no files were named.

:class:`LineScanner` is the main entry point; :mod:`argscan.default` provides module-level functions that share one
process-wide scanner.
"""

from importlib import import_module

from .__version__ import __version__

__attr_module_map = {
    # config
    'ScannerConfig': 'config',
    # exceptions
    'ScannerException': 'exceptions',
    'ScannerUsageError': 'exceptions',
    'AlreadyInitializedError': 'exceptions',
    # scanner
    'LineScanner': 'scanner',
    'process_arguments': 'scanner',
    'strip_line_ending': 'scanner',
}

# noinspection PyUnresolvedReferences
__all__ = ['config', 'default', 'exceptions', 'scanner']
__all__.extend(__attr_module_map.keys())


def __dir__():
    return sorted(__all__ + list(globals().keys()))


def __getattr__(name: str):
    try:
        module_name = __attr_module_map[name]
    except KeyError:
        pass
    else:
        module = import_module(f'.{module_name}', __name__)
        return getattr(module, name)

    if name in __all__:
        return import_module(f'.{name}', __name__)
    raise AttributeError(f'module {__name__!r} has no attribute {name!r}')
