"""
Trading Places - Settlement Trading Economy Engine

A rule-based pricing and availability engine for tabletop role-playing
campaigns. Resolves settlement records into canonical ratings, derives the
number of tradeable cargo slots for a settlement and composes flag-based
trade modifiers from dataset configuration.
"""

__version__ = "1.0.0"
__author__ = "Trading Places Team"
