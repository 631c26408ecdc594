# Middleware package init
"""
Greeter Backend - Middleware Package
======================================

What:  Cross-cutting concerns applied to every request.

Middleware Chain (order matters!):
    Request → [Request ID] → [Logging] → Route Handler

    1. Request ID: Generate correlation ID for logging and tracing
    2. Logging: Log request details with the generated request ID

    The order is reversed for responses:
    Response ← [Request ID] ← [Logging] ← Route Handler
"""
