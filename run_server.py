#!/usr/bin/env python
"""
Run the API Server

Starts the FastAPI server for the location tools.

Usage:
    python run_server.py

The server runs on http://localhost:8000

Endpoints:
    GET  /api/health          - Health check
    GET  /api/tools           - Tool catalogue
    POST /api/tools/{name}    - Invoke a tool by name
    POST /api/geocode         - Address to coordinates
    POST /api/reverse-geocode - Coordinates to address
    POST /api/timezone        - Estimated UTC offset
    POST /api/major-cities    - Major cities of a country
    POST /api/distance        - Great-circle distance
"""

import uvicorn

from location_tools.config import API_HOST, API_PORT

uvicorn.run("location_tools.server:app", host=API_HOST, port=API_PORT, reload=False)
