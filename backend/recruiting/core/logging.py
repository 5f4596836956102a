"""
Logging configuration.
"""
import logging
import os

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def build_logging_config(level: str = None) -> dict:
    """
    Dictionary config consumed by Django's LOGGING setting.
    """
    level = (level or os.getenv('LOG_LEVEL', 'INFO')).upper()
    return {
        'version': 1,
        'disable_existing_loggers': False,
        'formatters': {
            'standard': {'format': LOG_FORMAT},
        },
        'handlers': {
            'console': {
                'class': 'logging.StreamHandler',
                'stream': 'ext://sys.stdout',
                'formatter': 'standard',
            },
        },
        'loggers': {
            'recruiting': {'handlers': ['console'], 'level': level, 'propagate': False},
            'django': {'handlers': ['console'], 'level': 'WARNING', 'propagate': False},
        },
    }


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance.
    """
    return logging.getLogger(name)
