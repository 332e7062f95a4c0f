"""
auth — User authentication module.

Provides:
  • JWT creation & verification (HS256, eight-hour lifetime)
  • Password hashing (bcrypt)
  • Register / Login / Me API routes
  • ``get_current_claims`` FastAPI dependency
"""
