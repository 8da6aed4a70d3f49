"""
BlockNotes — Client Side
==========================

    - api_client.py: NotesApiClient (httpx)
    - debounce.py:   Debouncer used for autosave
    - note_page.py:  NotePageController (load, edit, autosave)
    - dashboard.py:  DashboardController (list, create, delete)
"""
