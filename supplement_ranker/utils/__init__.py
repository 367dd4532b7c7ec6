"""
Small shared helpers.

Modules
-------
logging : configure_logging() for the CLI entry point.
numeric : clamp() + round_half_up().
"""
