"""
Course synergy detection between two training providers.
"""
