"""
Test Suite for the Local Library Catalog

Test Organization:
- conftest.py: Shared fixtures (test store, client, sample records)
- test_forms.py: Sanitizing and validation rules
- test_schemas.py: Read-model derived fields
- test_store.py: CatalogStore contract
- test_authors.py / test_genres.py / test_books.py / test_bookinstances.py:
  each entity's workflow, at service level and over HTTP
- test_main.py: lifespan, home page, health check, error pages
- test_config.py: settings

Running Tests:
    # Run all tests
    pytest

    # Run with coverage
    pytest --cov=catalog --cov-report=html

    # Run specific file
    pytest tests/test_books.py

    # Run with verbose output
    pytest -v
"""
