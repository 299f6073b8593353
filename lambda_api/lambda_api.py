"""
AWS Lambda handler for the Lead Chat relay

This module routes API Gateway events through the FastAPI application.
"""

from mangum import Mangum
from leadchat.main import app

# Create Mangum adapter for FastAPI
handler = Mangum(app, lifespan="off")
