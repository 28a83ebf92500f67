"""
Record Store - Transactional employee records on embedded SQLite

Parameterized CRUD over a single employees table, where every operation
runs in its own transaction and is committed or rolled back on its own.
"""

__version__ = "0.1.0"
__author__ = "Systems Engineering Portfolio"
