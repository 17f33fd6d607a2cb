"""Core building blocks: logging, monitoring, errors, security and the database layer."""
