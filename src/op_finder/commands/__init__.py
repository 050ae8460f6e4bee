# op_finder/commands/__init__.py
"""CLI command implementations."""
