"""
Notes API.

- api/: HTTP routers (notes, health)
- core/: Configuration, logging, database, error handling
- models/: SQLAlchemy models
- repositories/: Persistence adapters
- schemas/: Pydantic request/response schemas
- services/: Domain operations
"""
