"""
Services Package

Business logic kept separate from GraphQL handling:
- security.py: Password hashing and JWT utilities
- store.py: Database reads and writes returning expanded records
"""
