# Middleware package init
"""
QuickNotes — Middleware Package
=================================

Middleware Chain:
    Request → [Logging] → [GZip] → [CORS] → Route Handler

    Logging is outermost so the logged status and duration cover everything
    below it, including CORS preflight responses.
"""
