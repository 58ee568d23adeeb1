#!/usr/bin/env python3
"""
Entry point for the League Server.

Usage:
    python run.py

Environment Variables:
    FLASK_ENV: development or production (default: development)
    PORT: Port to run on (default: 5000)
    PLAYER_STORE: memory, sql or redis (default: memory)
"""
import logging
import os

from league_server.app import create_app


def run_server():
    """Run the league server."""
    logging.basicConfig(level=logging.INFO)

    app = create_app()
    port = int(os.getenv('PORT', 5000))
    debug = os.getenv('FLASK_ENV', 'development') == 'development'

    print(f"Starting League Server on port {port}...")
    app.run(host='0.0.0.0', port=port, debug=debug, threaded=True)


if __name__ == '__main__':
    run_server()
