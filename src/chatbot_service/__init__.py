"""
chatbot-service: an authenticated chat backend in front of a hosted LLM.

Users register and log in with a password and receive a short-lived bearer
token. Authenticated users talk to the model through '/api/chatbot'; every
turn is stored so the full history is replayed on the next request.

The application is assembled in 'chatbot_service.main' and served with
uvicorn:

    python -m chatbot_service
"""

__version__ = "0.1.0"
