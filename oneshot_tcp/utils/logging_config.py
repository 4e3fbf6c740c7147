import logging
import logging.handlers
from pathlib import Path
from datetime import datetime
from typing import Optional

from oneshot_tcp.config import (
    LOG_LEVEL, LOG_FORMAT, CONSOLE_LOG_FORMAT, LOG_FILE_PREFIX,
    LOG_MAX_SIZE, LOG_BACKUP_COUNT
)

_HANDLER_MARK = "_oneshot_tcp_handler"

def setup_logging(log_dir: Optional[str] = None, verbose: bool = False) -> Optional[Path]:
    """Set up logging configuration for the client and server programs.
    
    Args:
        log_dir: Directory to store a rotating log file in, or None for console only
        verbose: Show DEBUG messages on the console
        
    Returns:
        Path of the log file, if one was created
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)
    
    # Drop handlers from an earlier call so they don't stack
    for handler in list(root_logger.handlers):
        if getattr(handler, _HANDLER_MARK, False):
            root_logger.removeHandler(handler)
            handler.close()
    
    # Console handler (stderr, keeps stdout for the operator transcript)
    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.DEBUG if verbose else getattr(logging, LOG_LEVEL))
    console_handler.setFormatter(logging.Formatter(CONSOLE_LOG_FORMAT))
    setattr(console_handler, _HANDLER_MARK, True)
    root_logger.addHandler(console_handler)
    
    log_file = None
    if log_dir is not None:
        log_path = Path(log_dir)
        log_path.mkdir(parents=True, exist_ok=True)
        
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        log_file = log_path / f"{LOG_FILE_PREFIX}_{timestamp}.log"
        
        # File handler (for all levels)
        file_handler = logging.handlers.RotatingFileHandler(
            log_file,
            maxBytes=LOG_MAX_SIZE,
            backupCount=LOG_BACKUP_COUNT,
            encoding='utf-8'
        )
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
        setattr(file_handler, _HANDLER_MARK, True)
        root_logger.addHandler(file_handler)
    
    logging.debug("Logging system initialized")
    if log_file is not None:
        logging.debug(f"Log file: {log_file}")
    return log_file

def get_logger(name: str) -> logging.Logger:
    """Get a logger instance with the specified name.
    
    Args:
        name: Name of the logger
        
    Returns:
        Logger instance
    """
    return logging.getLogger(name)
