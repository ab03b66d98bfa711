"""
Test settings for the Evolutio IPD engine project.
"""
from .base import *

DEBUG = False

ALLOWED_HOSTS = ['testserver', 'localhost']

# Fixed seed so API tests are reproducible
IPD_ENGINE['SEED'] = 1234
