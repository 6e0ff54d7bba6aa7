"""
Tests Package.

This package contains test suites for the timeline publisher, including unit
tests for frame reduction, mask tracking, shape compilation and rendering, and
end-to-end tests that compile the bundled sample timelines.
"""

# Tests Package
