"""
Base settings for the Evolutio IPD engine project.

The project has no persistent state: the database only backs Django's
own bookkeeping and is never touched by the engine.
"""
import os
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parent.parent.parent

SECRET_KEY = os.environ.get('DJANGO_SECRET_KEY', 'insecure-development-key')

DEBUG = False

ALLOWED_HOSTS = os.environ.get('DJANGO_ALLOWED_HOSTS', 'localhost').split(',')

INSTALLED_APPS = [
    'django.contrib.contenttypes',
    'django.contrib.auth',
    'rest_framework',
    'drf_spectacular',
    'apps.ipd',
]

MIDDLEWARE = [
    'django.middleware.security.SecurityMiddleware',
    'django.middleware.common.CommonMiddleware',
]

ROOT_URLCONF = 'config.urls'

ASGI_APPLICATION = 'config.asgi.application'

DATABASES = {
    'default': {
        'ENGINE': 'django.db.backends.sqlite3',
        'NAME': ':memory:',
    }
}

LANGUAGE_CODE = 'en-us'
TIME_ZONE = 'UTC'
USE_I18N = True
USE_TZ = True

DEFAULT_AUTO_FIELD = 'django.db.models.BigAutoField'

REST_FRAMEWORK = {
    'DEFAULT_AUTHENTICATION_CLASSES': [],
    'DEFAULT_PERMISSION_CLASSES': [
        'rest_framework.permissions.AllowAny',
    ],
    'UNAUTHENTICATED_USER': None,
    'DEFAULT_RENDERER_CLASSES': [
        'rest_framework.renderers.JSONRenderer',
    ],
    'DEFAULT_SCHEMA_CLASS': 'drf_spectacular.openapi.AutoSchema',
}

SPECTACULAR_SETTINGS = {
    'TITLE': 'Evolutio IPD Engine API',
    'DESCRIPTION': "Matches, tournaments and population dynamics for the Iterated Prisoner's Dilemma.",
    'VERSION': '0.4.0',
}

# Engine defaults for the service layer
IPD_ENGINE = {
    'DEFAULT_ROUNDS': 10,
    'DEFAULT_NOISE': 0.0,
    'DEFAULT_GENERATIONS': 50,
    'DEFAULT_POPULATION': 5,
    'DEFAULT_PAYOFF': {'t': 5, 'r': 3, 'p': 1, 's': 0},
    'MAX_WORKERS': None,
    'SEED': None,
}

LOGGING = {
    'version': 1,
    'disable_existing_loggers': False,
    'formatters': {
        'simple': {
            'format': '{asctime} {levelname} {name}: {message}',
            'style': '{',
        },
    },
    'handlers': {
        'console': {
            'class': 'logging.StreamHandler',
            'formatter': 'simple',
        },
    },
    'loggers': {
        'apps.ipd': {
            'handlers': ['console'],
            'level': os.environ.get('IPD_LOG_LEVEL', 'WARNING'),
        },
    },
}
