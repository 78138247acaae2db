# Middleware package init
"""
ContactBook Backend — Middleware Package
==========================================

What:  Cross-cutting concerns applied to every request.

Middleware Chain (order matters!):
    Request → [Request ID] → [Logging] → [GZip] → [CORS] → Route Handler

    Why this order:
    1. Request ID: Generate correlation ID before anything logs
    2. Logging: Log request details with the generated request ID
    3. GZip / CORS: Applied by Starlette's built-in middleware

    The order is reversed for responses, so the access log sees the final
    status code and the X-Request-ID header is set on every response.
"""
