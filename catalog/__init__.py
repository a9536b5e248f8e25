"""
Local Library Catalog Package

A server-rendered catalog of authors, genres, books and book copies.

Package Structure:
- config.py: Application configuration using Pydantic Settings
- database.py: SQLAlchemy declarative base and engine helpers
- store.py: CatalogStore, the document-style handle on persisted records
- main.py: FastAPI application factory and configuration
- dependencies.py: Dependency injection functions
- models/: SQLAlchemy ORM models
- schemas/: Pydantic read models (records with derived fields)
- forms/: Sanitize-and-validate pipeline for submitted forms
- services/: The create/update/delete workflow per entity
- routers/: HTML route handlers
- templates/: Jinja2 page templates
"""

__version__ = "0.1.0"
