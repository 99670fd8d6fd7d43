"""
Pydantic schema definitions for API payloads.

Input schemas validate request bodies inside the services; output
schemas shape records from ``app.models`` for the response envelope.
Schemas are kept apart from the stores to decouple the API
representation from persistence.
"""
