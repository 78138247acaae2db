# Services package init
"""
ContactBook Backend — Services Layer
======================================

What:  Business logic layer sitting between routes (HTTP) and repositories (storage).
Why:   Routes handle HTTP, services define what each operation does.
How:   Services receive their repository at construction time and hold no
       other state, so one instance serves every concurrent request.

Service Inventory:
    - ContactService: the contact resource controller (create, list, get,
      update, delete — one store call each)
"""
