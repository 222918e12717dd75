"""
Todo Tracker.

- api/: HTTP routers (todos, health)
- core/: Configuration, logging, errors, security, database wiring
- domain/: Todo entity and Record/Domain/Transfer mapping
- models/: SQLAlchemy records
- repositories/: Record store
- schemas/: Pydantic request/response shapes
- services/: Todo lifecycle business rules
"""
