"""
HTTP interface of the service.

Contents
--------
- app
    'create_app' assembles the FastAPI application from injected components,
    registers the chat routes and maps 'ChatbotError' to JSON responses.
- auth
    'AuthProvider' abstraction and the bearer-token implementation that owns
    '/api/register' and '/api/login'.
- metrics
    'RequestMetrics': request timing middleware and the '/metrics' endpoint.
- models
    Pydantic request/response schemas.
"""
