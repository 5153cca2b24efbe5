"""
Constants used across the codec modules.

Consolidates the version markers and framing sizes of the supported save
formats.
"""

# Leading version markers
ME2_SAVE_VERSION = 29
ME3_SAVE_VERSION = 59

# Framing sizes (bytes)
VERSION_SIZE = 4
CHECKSUM_SIZE = 4

# Round trip comparison granularity (bytes)
COMPARE_CHUNK_SIZE = 4
