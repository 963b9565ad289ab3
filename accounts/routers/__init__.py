"""
FastAPI routers for the account area.

Each module exposes an APIRouter included by accounts.app. Routers only map
service outcomes to pages or redirects; the rules live in accounts.domain.
"""
