# tests/__init__.py
"""
Test suite for the study group service.

This package contains all tests for the service:
- unit: Unit tests for individual components (in-memory fakes, no database)
- integration: Repository, service and HTTP tests against SQLite
- config: Settings loading
- factories: Test data factories using Factory Boy
"""
