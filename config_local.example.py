# config_local.example.py

"""
Example local overrides.

Usage:
  1) Copy this file to `config_local.py`
  2) Adjust values for your machine
  3) Never commit `config_local.py` (it is gitignored)

Prefer `.env` for anything environment-specific. This file should contain only safe overrides.
"""

# Example: start without the console REPL
# CONSOLE_ENABLED = False
