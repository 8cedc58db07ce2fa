"""
Notes API — Application Package Initializer
=============================================

Architecture Note:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │      NoteService (Request rules)    │  ← Validation, re-reads
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← dataclasses + Pydantic
    ├─────────────────────────────────────┤
    │       NoteStore (In-memory core)    │  ← dict + lock + id counter
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"
