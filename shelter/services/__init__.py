"""
Use cases sitting between the routers and the record stores.

Routers call these helpers instead of computing dashboard figures or poking
at session state directly.
"""
