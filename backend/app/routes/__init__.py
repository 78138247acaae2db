# Routes package init
"""
ContactBook Backend — API Routes Package
==========================================

What:  HTTP route handlers that accept requests and return responses.
How:   Each module exposes a create_*_router() factory that closes over the
       collaborators built by app.main.create_app().

Route Inventory:
    - contacts.py: GET/POST /contact, GET/PUT/DELETE /contact/{contact_id}
    - health.py:   GET /  (greeting), GET /health (document store probe)

Design Principle:
    Routes should be THIN — they handle HTTP concerns only:
    - Extract data from request (path params, JSON or form body)
    - Call the appropriate service
    - Let FastAPI serialize the result; errors go to the global handlers
"""
