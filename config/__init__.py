"""Top-level package for Django configuration.

This package contains settings modules for the lodging search backend in
different environments and the entry points for WSGI and ASGI.
"""
