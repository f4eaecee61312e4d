"""Test suite for cglue.

Test Structure:
- domain/models/: Tests for entities, qualifiers, scopes and name resolution
- domain/services/: Tests for the text front end, std types and C emitters
- config/: Tests for configuration management
- infrastructure/: Tests for logging and progress tracking
- utils/: Tests for path helpers
- test_main.py: End-to-end runs of the command line tool

Run tests with pytest:
    pytest                    # Run all tests
    pytest -m unit            # Run unit tests only
    pytest -m integration     # Run integration tests only
"""

# This file intentionally kept minimal to avoid import issues with pytest
# Individual test modules are discovered automatically by pytest
__version__ = "0.3.0"
