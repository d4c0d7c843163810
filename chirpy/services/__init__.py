"""
High-level use cases for the Chirpy API.

Each service module orchestrates the store and the core helpers to implement
business rules (post a chirp, register, log in, update an account).

Routers call these services instead of manipulating the store or tokens
directly.
"""
