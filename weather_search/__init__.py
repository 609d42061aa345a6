"""
Debounced location search with cancelable weather lookups.
"""
