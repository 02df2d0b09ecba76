#!/usr/bin/env python3
"""
Main entry point for the Game Roster web application.

This script launches the Flask-based API server. Settings are read from
GAMEROSTER_* environment variables (see gameroster/utils/config.py).
"""
from gameroster.ui.web_app import run_web_app

if __name__ == "__main__":
    run_web_app()
