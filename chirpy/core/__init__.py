"""
Core primitives shared across the Chirpy API.

This package hosts:
- configuration (env vars, .env, storage paths, hasher cost)
- the error taxonomy routers map to HTTP responses
- password hashing and session tokens
- logging setup and the file-server hit counter

Services and routers depend on these modules instead of reading os.environ or
calling argon2/jose directly.
"""
