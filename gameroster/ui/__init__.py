"""
UI package for the Game Roster application.

This package contains the Flask web server exposing the lineup editing API.
"""
from .web_app import create_app, run_web_app, WebAppState

__all__ = ["create_app", "run_web_app", "WebAppState"]
