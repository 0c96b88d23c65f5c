"""
Command-line interface package for equalsguard.
"""
