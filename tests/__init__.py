"""
ukforge test suite
==================

Test Modules
------------
- test_models.py: Parameter record and builder
- test_templating.py: Template parsing and rendering
- test_generator.py: Library tree generation
- test_repository.py: Git repository bootstrap
- test_cli.py: Command-line interface

Running Tests
-------------
    # Run all tests
    pytest

    # Skip tests that need the git binary
    pytest -m "not integration"

    # Run specific test class
    pytest tests/test_generator.py::TestGenerateLibrary
"""
