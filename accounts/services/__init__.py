"""
High-level use cases for the accounts area.

Each service module orchestrates repositories and the domain policy to
implement a use case (signup, profile update, password change). Routers call
these services instead of manipulating the database or sessions directly.
"""
