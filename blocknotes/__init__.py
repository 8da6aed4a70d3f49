"""
BlockNotes — Block-Structured Notes
=====================================

Three layers share this package:

    ┌─────────────────────────────────────┐
    │  client/   API client + controllers │  ← dashboard, note page, autosave
    ├─────────────────────────────────────┤
    │  editor/   Headless block editor    │  ← blocks, keys, slash menu
    ├─────────────────────────────────────┤
    │  schemas/  Block and note models    │  ← shared by server and client
    ├─────────────────────────────────────┤
    │  routes/ services/ models/          │  ← FastAPI server over SQLAlchemy
    └─────────────────────────────────────┘

The editor never talks to the network; the controllers connect it to the
server through NotesApiClient.
"""

__version__ = "1.0.0"
