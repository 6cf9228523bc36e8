"""Core data models, schemas and serialization."""
