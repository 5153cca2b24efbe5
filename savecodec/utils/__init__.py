# Shared utilities
from .logging import log, logWarning, logError, logDebug, init_logging, close_logging, print_summary, get_counts
from .binary import SaveWriter, write_property_header
from .checksum import crc32_bzip2
