"""
FastAPI routers grouped by domain (chirps, users, admin).

Each module exposes an APIRouter that the app factory includes. Handlers only
decode the request, call a service from the ApiContext and shape the response.
"""
