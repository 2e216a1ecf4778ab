"""Test settings for the lodging search project.

Used by pytest-django (see ``pyproject.toml``). Runs against an in-memory
SQLite database with fast password hashing and plain static storage.
"""

from .base import *  # noqa: F401,F403

DEBUG = False

DATABASES = {
    'default': {
        'ENGINE': 'django.db.backends.sqlite3',
        'NAME': ':memory:',
    }
}

PASSWORD_HASHERS = ['django.contrib.auth.hashers.MD5PasswordHasher']

STORAGES = {
    'default': {'BACKEND': 'django.core.files.storage.FileSystemStorage'},
    'staticfiles': {'BACKEND': 'django.contrib.staticfiles.storage.StaticFilesStorage'},
}

PROPERTY_SEARCH_PAGE_SIZE = 5
OWNED_PROPERTIES_PAGE_SIZE = 5
OWNED_ROOMS_PAGE_SIZE = 5
