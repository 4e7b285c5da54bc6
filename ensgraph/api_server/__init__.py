"""
API server package: HTTP/JSON interface.

Exposes edges, activity, and ENS lookups to clients; delegates to the database,
activity store and ENS clients for data.
"""
