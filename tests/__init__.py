"""
Test suite for the appointment booking backend.

Contains unit tests for the account registry and appointment ledger, and
integration tests for the HTTP API.
"""
import os

# Set environment for testing
os.environ["TESTING"] = "1"
