# Services package init
"""
QuickNotes — Services Layer
=============================

Sits between routes (HTTP) and the database session.

Service Inventory:
    - NoteService: list / create / update / delete, with fallback-on-empty
      updates and storage-error mapping
"""
