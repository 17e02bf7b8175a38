"""Test suite for pagekit.

Test Structure:
- unit/graph/: Node graph models and query helpers
- unit/resolvers/: Breakpoint and style resolution
- unit/variants/: Variant state machine
- unit/config/: Config and document loading
- unit/utils/: JSON and logging utilities
- unit/test_engine.py: Resolution facade
- fixtures/documents/: Card page document and node builders
- conftest.py: Shared fixtures
"""
