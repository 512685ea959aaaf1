"""Infrastructure layer — database engine, schema, and stores.

This layer depends on stdlib, SQLAlchemy, and the domain records.
It must never import from services, commands, or output.
The service layer bridges between callers and the stores.
"""
