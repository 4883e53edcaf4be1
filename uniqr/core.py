# coding: utf-8
"""
uniqr - collapse adjacent repeated lines

Configuration and logging shared by the uniqr commands.
"""

__version__ = '0.1.0'

import logging
import logging.handlers
import os
import sys
from configparser import ConfigParser
from io import StringIO

# Setup logging
LOGGER = logging.getLogger('Uniqr')

_UNIQR_CONFIG_FILES = ('.uniqr_config', 'uniqr.cfg')
_UNIQR_CONFIG_ENV = 'UNIQR_CONFIG'

# Default configuration (can be overridden by external configuration file)
_DEFAULT_CONFIG = """[system]
encoding=utf-8
fsync=1

[uniq]
count=0

[logging]
level=WARNING
file=
"""

_LOG_LEVELS = {
    'CRITICAL': logging.CRITICAL,
    'ERROR': logging.ERROR,
    'WARNING': logging.WARNING,
    'INFO': logging.INFO,
    'DEBUG': logging.DEBUG,
    'NOTSET': logging.NOTSET,
}


def load_config(no_cfgfile=False):
    """
    Build the configuration from the defaults, then update it from the
    user's config files.
    :param no_cfgfile: if True, only the defaults are used
    :type no_cfgfile: bool
    :return: the loaded configuration
    :rtype: ConfigParser
    """
    config = ConfigParser()
    config.optionxform = str  # make it preserve case

    # defaults
    config.read_file(StringIO(_DEFAULT_CONFIG))

    # update from config file
    if not no_cfgfile:
        home = os.path.expanduser('~')
        config.read(os.path.join(home, f) for f in _UNIQR_CONFIG_FILES)
        extra = os.environ.get(_UNIQR_CONFIG_ENV)
        if extra:
            config.read(extra)

    return config


def config_logging(log_setting=None):
    """
    Configure the 'Uniqr' logger.
    :param log_setting: overrides for 'level' and 'file'
    :type log_setting: dict
    :return: the configured logger
    :rtype: logging.Logger
    """
    logger = logging.getLogger('Uniqr')

    _log_setting = {
        'level': 'WARNING',
        'file': None,
    }

    _log_setting.update(log_setting or {})

    level = _LOG_LEVELS.get(str(_log_setting['level']).upper(), logging.WARNING)

    logger.setLevel(level)

    if not logger.handlers:
        if _log_setting['file']:
            _log_handler = logging.handlers.RotatingFileHandler(_log_setting['file'], mode='w')
        else:
            # stdout carries the filtered lines
            _log_handler = logging.StreamHandler(sys.stderr)
        _log_handler.setLevel(level)
        _log_handler.setFormatter(
            logging.Formatter(
                '[%(asctime)s] [%(levelname)s] [%(name)s] [%(funcName)s] [%(lineno)d] - %(message)s'
            )
        )
        logger.addHandler(_log_handler)

    return logger
