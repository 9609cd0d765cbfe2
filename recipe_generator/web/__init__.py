"""
Web layer - Flask JSON API.
"""
