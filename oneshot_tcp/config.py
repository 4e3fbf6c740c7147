# Network settings
DEFAULT_HOST = "0.0.0.0"  # Wildcard address, listen on all interfaces
BACKLOG = 5
MIN_PORT = 1
MAX_PORT = 65535

# Message settings
BUFFER_SIZE = 100  # bytes, including the terminator
MAX_PAYLOAD_SIZE = BUFFER_SIZE - 2  # one byte for the terminator, one left unread
TERMINATOR = b"\0"
ENCODING = "utf-8"
RESPONSE = "Server acknowledged your message!"

# Logging
LOG_LEVEL = "INFO"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
CONSOLE_LOG_FORMAT = "%(levelname)s: %(message)s"
LOG_FILE_PREFIX = "oneshot_tcp"
LOG_MAX_SIZE = 10 * 1024 * 1024  # 10MB
LOG_BACKUP_COUNT = 5
