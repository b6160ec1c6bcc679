"""Core game primitives (board, status variants, notifications, scheduling).

Kept free of FastAPI concerns so it can be reused by API routes, the terminal front end, and tests.
"""
