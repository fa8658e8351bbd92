"""
Dataset record models and normalization.

Immutable settlement, configuration and flag records, plus the resolver that
turns raw settlement fields into canonical ratings.
"""
