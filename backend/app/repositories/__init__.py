# Repositories package init
"""
ContactBook Backend — Repositories Package
============================================

What:  Document-store clients. Each repository owns one collection and speaks
       in documents (dicts), never in ORM objects or SQL.
Why:   Services depend on a repository instance handed to them at startup,
       which makes them testable with a plain AsyncMock.

Repository Inventory:
    - ContactRepository: the `Contact` collection (contacts table)
"""
