"""
VIP Access Test Suite

Tests for:
- Access resolution (trial, subscription, expiry, precedence)
- Date parsing and countdown metrics
- Presentation helpers and locale labels
- Expiry notifications and trial panel data
- Live refresh watcher
- Access API and WebSocket

Run tests with:
    pytest tests/ -v

Run fast tests only:
    pytest tests/ -v -m "not slow"
"""
