"""
Test suite for fantasy-ai.

Covers provider orchestration for fantasy football analysis:
- Domain tests: backends, tool catalog and executor, cache, router, sanitizer
- Service tests: analysts and wiring over scripted backends
- Integration tests for the health API
"""
