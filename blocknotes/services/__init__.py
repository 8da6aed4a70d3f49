"""
BlockNotes — Services Layer
=============================

Service Inventory:
    - NoteService: id validation, content normalization on write, and the
      CRUD queries behind /api/notes
"""
