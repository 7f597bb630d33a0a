"""
Core Module
Configuration, constants, exceptions and shared date/id helpers.
"""
