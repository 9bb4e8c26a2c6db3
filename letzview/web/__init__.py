"""Interface web (FastAPI) : proxys /api/db et /api/translate, catalogue en lecture."""
