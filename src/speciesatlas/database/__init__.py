"""Database package for Species Atlas.

Database components should be imported directly from their modules:
from speciesatlas.database.core import DatabaseService
"""
