"""Credential handling for the study group service."""
from .password import PasswordHasher

__all__ = ["PasswordHasher"]
