"""
Persistence adapters.

Services depend on these helpers (and on the EmailLookup protocol in
accounts.domain) rather than touching SQLAlchemy sessions directly.
"""
