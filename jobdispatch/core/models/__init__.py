"""
Model definitions for JobDispatch.

- domain: enums describing roles, statuses and activity categories.
- io: Pydantic request/response schemas used by the API layer.
"""
