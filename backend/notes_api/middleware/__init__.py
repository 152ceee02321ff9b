# Middleware package init
"""
Notes API — Middleware Package
===============================

Middleware Chain:
    Request → [Request ID] → [Logging] → Route Handler

    RequestIDMiddleware runs first so the access log line and every log
    line emitted by handlers carry the same request ID.

CORS is handled per endpoint in routes/notes.py rather than by Starlette's
CORSMiddleware: preflight must answer 204 with endpoint-specific headers,
and error responses must not carry Access-Control-Allow-Origin.
"""
