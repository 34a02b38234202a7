# Services package init
"""
Notes API - Services Layer
==========================

Business logic between routes (HTTP) and the database (persistence).
Services take a session and validated payloads, apply the rules, and
return response schemas.

Service Inventory:
    - NoteService: create / get / list / update / delete notes
"""
