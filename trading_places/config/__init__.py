"""
Configuration module.

Frozen defaults, YAML-backed per-dataset overrides and validation of
dataset trading configuration.
"""
