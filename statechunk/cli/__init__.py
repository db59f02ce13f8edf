"""
statechunk CLI - developer tooling for structure definitions

Commands:
- statechunk inspect - Show compiled leaves, action types and default state
- statechunk replay - Replay a JSON-lines action log against a structure
- statechunk version - Show version information
"""
