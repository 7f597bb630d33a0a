"""
Database Module
Declarative base and session factories of the local key-value store.
"""
