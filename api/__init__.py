"""
API module for the quote system.
Provides the FastAPI-based read-only web interface.
"""

from .app import create_app, start_web_server

__all__ = ['app', 'routes', 'models', 'middleware', 'proxy', 'create_app', 'start_web_server']
