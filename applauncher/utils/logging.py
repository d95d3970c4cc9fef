"""
Launcher Logging Utilities

This module provides structured logging for the launcher
with proper formatting and configuration management.
"""

import logging
import os
import sys
from pathlib import Path
from typing import Optional, Union


def get_logger(
    name: str, 
    level: Optional[Union[str, int]] = None,
    log_file: Optional[Union[str, Path]] = None
) -> logging.Logger:
    """
    Get a configured logger instance.
    
    Args:
        name: Logger name (usually __name__)
        level: Logging level, defaults to APPLAUNCHER_LOG_LEVEL or INFO
        log_file: Optional file for logging output
        
    Returns:
        logging.Logger: Configured logger
    """
    logger = logging.getLogger(name)
    
    # Avoid duplicate handlers
    if logger.handlers:
        return logger
    
    if level is None:
        level = os.environ.get("APPLAUNCHER_LOG_LEVEL", "INFO")
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.INFO)
    logger.setLevel(level)
    
    formatter = logging.Formatter(
        fmt='%(asctime)s | %(name)s | %(levelname)s | %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )
    
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)
    
    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        
        file_handler = logging.FileHandler(log_path, encoding='utf-8')
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)
    
    return logger


def configure_logging(
    level: Union[str, int] = logging.INFO,
    log_file: Optional[Union[str, Path]] = None
) -> logging.Logger:
    """
    Configure package logging once at process start.
    
    Module loggers created with get_logger keep their console handlers;
    this adjusts levels across the package and attaches the optional log
    file to the package logger, which module records propagate to.
    """
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.INFO)
    
    package_logger = logging.getLogger("applauncher")
    package_logger.setLevel(level)
    
    for name, existing in list(logging.root.manager.loggerDict.items()):
        if name.startswith("applauncher.") and isinstance(existing, logging.Logger):
            existing.setLevel(level)
    
    if log_file and not any(
        isinstance(h, logging.FileHandler) for h in package_logger.handlers
    ):
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        
        file_handler = logging.FileHandler(log_path, encoding='utf-8')
        file_handler.setFormatter(logging.Formatter(
            fmt='%(asctime)s | %(name)s | %(levelname)s | %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        ))
        package_logger.addHandler(file_handler)
    
    return package_logger
