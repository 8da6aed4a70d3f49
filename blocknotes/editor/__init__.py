"""
BlockNotes — Headless Block Editor
====================================

Module Inventory:
    - block_editor.py: BlockEditor (block list, active block, key commands)
    - menu.py:         BlockMenu (slash-command type picker)
    - base.py:         BlockWidget interface
    - text_block.py:   TextBlockWidget and the indentation rules
    - todo_block.py:   TodoBlockWidget
    - rich_blocks.py:  heading, table and image widgets
    - renderer.py:     block type → widget class
    - keys.py:         KeyEvent, Rect, Position, TextEdit
"""
