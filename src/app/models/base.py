# src/app/models/base.py
"""
Declarative base and id helpers shared by all ORM models
"""

from datetime import datetime

from sqlalchemy.orm import declarative_base

from src.utils.id_helpers import generate_id

Base = declarative_base()


def new_id() -> str:
    """Column default: 32-character hex id"""
    return generate_id()


def utcnow() -> datetime:
    return datetime.utcnow()
