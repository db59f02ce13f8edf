"""
Test suite for statechunk.

Focus areas:
- Validation totality and sanitization rules
- Leaf reducer semantics and purity
- Compiled tree shape (reducers/actions/selectors)
- Combined action equivalence and reset-all scoping
"""
