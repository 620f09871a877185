# Content compiler utilities
from .logging import log, logWarning, logError, logDebug, init_logging, close_logging, print_summary, get_counts, reset_counts
from .binary import write_u8, write_bool, write_u32, write_i32, write_string, write_bytes, write_array, write_header
