"""
API package containing versioned routes.

Version subpackages such as ``v1`` expose a top‑level ``router`` that
includes all of their domain routers.  ``responses`` renders service
results as the uniform envelope and ``deps`` builds the per-request
services.
"""
