# Routes package init
"""
Notes API - Route Handlers
==========================

Route Inventory (paths shown with the global /api/v1 prefix):
    - notes.py:   POST   /api/v1/notes
                  GET    /api/v1/notes
                  GET    /api/v1/notes/{id}
                  PATCH  /api/v1/notes/{id}
                  DELETE /api/v1/notes/{id}
    - health.py:  GET    /api/v1/health

Routers never carry the global prefix themselves; the application adds it
when mounting each feature module (see application.Application.init).
Routes stay thin: parse the request, call a service, shape the response.
"""
