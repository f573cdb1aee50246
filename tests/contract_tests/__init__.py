"""Property tests for whiteboard ordering invariants."""
