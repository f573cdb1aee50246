"""
Whiteboard Tests Package

TEST AXIOMS:
=============
1. Determinism: same input set = same bottom-to-top order
2. Ownership: callers never reach live engine state
3. Explicit failure: every structural violation raises a typed error
"""
