# Middleware package init
"""
Notes API — Middleware Package
================================

Middleware Chain (order matters):
    Request → [Request ID] → [Logging] → [Rate Limit] → [GZip] → [CORS] → Route

    1. Request ID first: every response, including a 429, carries the id
    2. Logging: one access line per request, rejected ones included
    3. Rate Limit: reject abusive clients before the route runs
"""
