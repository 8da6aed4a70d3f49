"""
BlockNotes — API Routes Package
=================================

Route Inventory:
    - notes.py:   GET/POST/PUT/DELETE /api/notes, GET /api/notes/{id}
    - health.py:  GET /health

Routes stay thin: they extract parameters, call NoteService and set
response headers. Business rules live in the service.
"""
