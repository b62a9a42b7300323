"""
Distributor HTTP API (FastAPI)

HTTP API for a Merkle airdrop distributor:
- GET /health - Health check
- GET /root - Committed root and signing domain
- GET /token - Token ledger info
- GET /digest - Message digest an account signs to claim
- GET /claims/{account} - Claim status of one account
- POST /claim - Submit a claim
- POST /claim/check - Dry-run a claim without touching state

Usage:
    uvicorn api.app:app --reload
"""

__version__ = "0.1.0"
