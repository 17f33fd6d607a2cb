"""
Versioned API packages.
"""
