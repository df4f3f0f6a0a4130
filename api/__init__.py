"""
Minimal API (FastAPI)

HTTP API for the allowlist issuance gate:
- POST /claim - Claim a token for the caller
- POST /admin/* - Admin-gated configuration
- GET /status, /tokens/{id}, /claimants/{address} - Reads
- GET /health - Health check

Usage:
    uvicorn api.app:app --reload
"""

__version__ = "0.1.0"
