"""Schema modules used by the test suite."""
