#!/usr/bin/env python3
"""Floral Web - a JSON lookup service for floral formulae.

Run with:
    python web/app.py

Then visit http://localhost:8080/api/formula/rosaceae
"""

import sys
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from floral.web import create_app


if __name__ == '__main__':
    print("\n" + "=" * 50)
    print("Starting Floral Web Server...")
    print("=" * 50 + "\n")

    app = create_app()

    print("\n" + "=" * 50)
    print("Server ready!")
    print("Visit: http://127.0.0.1:8080/api/families")
    print("Health check: http://127.0.0.1:8080/health")
    print("=" * 50 + "\n")

    app.run(debug=True, port=8080, host='127.0.0.1')
