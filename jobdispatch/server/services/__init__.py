"""
Server services.

Request dependencies and the domain rules the API routers delegate to.
"""
