"""
JobDispatch Server Package.

This package contains the web server implementation for the JobDispatch platform.
It includes the API definition, configuration, middleware and service logic.

Subpackages:
    api: FastAPI route definitions and endpoint logic.
    core: Configuration settings and constants.
    middleware: Request timing and monitoring middleware.
    exception_handlers: Mapping of domain and unhandled errors to JSON responses.
    services: Auth dependencies, job card lifecycle rules, activity logging,
        reporting and photo storage.
"""
