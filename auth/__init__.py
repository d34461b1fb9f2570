"""
auth — User authentication module.

Provides:
  • JWT token creation & verification
  • Password hashing (bcrypt, per-password salt)
  • Signup / Login API routes
  • ``get_request_context`` FastAPI dependency guarding catalog routes
"""
