"""
Book Reviews API Application Package

A GraphQL API where users register, add books, and review them.

Package Structure:
- config.py: Application configuration using Pydantic Settings
- database.py: SQLAlchemy engine and per-request sessions
- main.py: FastAPI application factory and configuration
- models/: SQLAlchemy ORM models (User, Book, Review)
- schemas/: Pydantic records handed from the store layer to GraphQL
- services/: Credentials (security.py) and database access (store.py)
- graphql/: Strawberry schema, resolvers and error classes
"""

__version__ = "0.1.0"
