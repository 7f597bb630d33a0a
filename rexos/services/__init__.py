"""
Services Module
Business logic layer of RexOS.

Services hold the transition function and the store, the rating engine,
persistence, scheduling and report building. The front end calls them and
stays thin.
"""
