# Services package init
"""
Notes API — Services Layer
============================

Service Inventory:
    - NoteStore: In-memory, thread-safe collection of notes (the core)
    - NoteService: Request rules on top of the store (validation, re-reads,
      conversion to response schemas)
"""
