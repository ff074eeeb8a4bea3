"""
auth — Account authentication module.

Provides:
  • Password credential hashing & matching (bcrypt)
  • Signed bearer token issue & verification (HMAC-SHA256)
  • Signup / Login / Me API routes
  • ``get_current_user`` FastAPI dependency
"""
