# Routes package init
"""
Notes API — API Routes Package
================================

Route Inventory:
    - notes.py:   POST   /api/notes          (create)
                  GET    /api/notes          (list all)
                  GET    /api/notes/{id}     (get one)
                  PATCH  /api/notes/{id}     (partial update)
                  DELETE /api/notes/{id}     (delete)
    - health.py:  GET    /health             (service health check)

Routes stay thin: parse the request, call NoteService, shape the response.
"""
