"""
Serving — FastAPI application exposing FAQ import, search and chat.
"""
