"""
mandihub.db

Relational persistence package (SQLAlchemy async).

Responsibilities:
- Provide ORM models, engine/session setup, and the relational store repositories.
"""

# Package marker.
