"""Domain layer for the record store.

Holds the employee entity, the outcome value objects returned by every
store operation, and the error taxonomy those outcomes carry.
"""
