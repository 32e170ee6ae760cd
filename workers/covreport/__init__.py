"""
covreport — coverage report decoder for instrumented JavaScript binaries.

See LOCK.md for the v0 scope contract, guarantees, and non-goals.
"""

__version__ = "0.1.0"
DECODER_VERSION = "v0"
PACKAGE_NAME = "covreport"
SCHEMA_VERSION = "0.1"
