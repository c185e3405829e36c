"""
Core utilities shared across the shelter app.

Configuration, credential checks and the exception hierarchy live here so
routers/services do not read os.environ or define ad-hoc errors themselves.
"""
