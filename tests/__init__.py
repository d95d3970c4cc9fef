"""
applauncher Test Suite

This package contains tests for the launcher including:
- Unit tests for the registry, launcher, stopper and startup orchestration
- Controller tests with the OS layer mocked out
- Platform-specific tests that spawn real processes
"""
