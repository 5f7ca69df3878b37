"""Declarative base shared by all row models."""

from sqlalchemy.orm import declarative_base

Base = declarative_base()
