"""
Data layer - models and SQLite persistence.
"""
