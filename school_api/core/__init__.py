"""
Core module - settings, authentication and the error taxonomy.
"""
