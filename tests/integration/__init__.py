"""Integration tests for components working together as a system.

Coverage:
    - Complete turns through ChatOrchestrator over streamed bodies
    - Preflight and mid-stream failures with the error collapse
    - Loading flag lifecycle and the single-turn guard
    - A FastAPI chat server served in-process via ASGITransport
"""
