"""
Core utilities shared across the accounts package.

This package hosts configuration helpers (env vars) and the credential
cryptography used by services. Nothing in here imports FastAPI or the
storage layer.
"""
