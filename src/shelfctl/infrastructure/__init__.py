"""Infrastructure layer — filesystem discovery and the in-memory store.

Parsing rules come from :mod:`shelfctl.domain` (infrastructure -> domain,
never the reverse).  Nothing here writes to the library.
"""
