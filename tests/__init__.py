"""
Test Suite for Book Reviews API

Test Organization:
- conftest.py: Shared fixtures (test database, client, sample data)
- test_security.py: Password hashing and access tokens
- test_store.py: Store-access loaders and typed store errors
- test_graphql.py: GraphQL queries and mutations
- test_app.py: Root/health endpoints and settings validation

Running Tests:
    pytest
    pytest tests/test_graphql.py -v
"""
