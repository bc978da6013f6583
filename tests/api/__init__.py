"""
HTTP API test suite: routers exercised through TestClient.
"""
