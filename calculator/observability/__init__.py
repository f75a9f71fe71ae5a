"""Request/response audit logging.

structlog over stdlib logging for JSON records, plus the ASGI middleware that
captures every response body and pairs it with its request.
"""
