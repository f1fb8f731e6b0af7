"""Test package for the streaming chat client.

Structure:
    - unit/: Transcript store, decoder, reducer, config and profile tests
    - integration/: Full chat turns over streamed HTTP responses

Leverages pytest with pytest-asyncio for async tests and pytest-check
for soft assertions.
"""
