"""
LUMA Learning Platform
Blueprint registry.
"""
