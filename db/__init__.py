"""
db/ - Database Layer
====================
Opens the SQLite/PostgreSQL handle and owns the expenses schema.
This layer is the lowest in the architecture and has no dependencies on other layers.
"""
