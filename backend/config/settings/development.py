"""
Development settings for the Evolutio IPD engine project.
"""
from .base import *

DEBUG = True

ALLOWED_HOSTS = ['localhost', '127.0.0.1', '0.0.0.0']

# Verbose engine logging
LOGGING['loggers']['apps.ipd']['level'] = 'INFO'

# Play tournament and evolution matches in a process pool
IPD_ENGINE['MAX_WORKERS'] = int(os.environ.get('IPD_MAX_WORKERS', '0')) or None
