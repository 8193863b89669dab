# Routes package init
"""
QuickNotes — API Routes Package
=================================

Route Inventory:
    - notes.py:   GET    /api/notes          (list, newest first)
                  POST   /api/notes          (create)
                  PUT    /api/notes/{id}     (update with fallback-on-empty)
                  DELETE /api/notes/{id}     (delete)
    - pages.py:   GET    /                   (notes page, server-rendered)
    - health.py:  GET    /health             (service health check)

Routes stay thin: parse the request, call the service, return the result.
"""
