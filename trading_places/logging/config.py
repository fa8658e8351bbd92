"""
Centralized logging configuration for the Trading Places engine.

This module provides standardized logging configuration using structlog
for all components. All logging throughout the package should use this
configuration to ensure consistent formatting and structured logging.
"""
import logging
import sys
from typing import Any, Optional

import structlog
from structlog.types import FilteringBoundLogger


def configure_logging(
    level: str = "INFO",
    format_json: bool = False,
    include_timestamp: bool = True,
    include_caller: bool = False,
    extra_processors: Optional[list] = None
) -> None:
    """
    Configure structlog for the entire application.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        format_json: If True, output JSON format; otherwise human-readable
        include_timestamp: Include timestamp in log output
        include_caller: Include caller information (filename, line number)
        extra_processors: Additional structlog processors to include
    """
    log_level = getattr(logging, level.upper())

    logging.basicConfig(
        level=log_level,
        stream=sys.stdout,
        format="%(message)s"  # structlog will handle formatting
    )

    processors = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    if include_timestamp:
        processors.append(structlog.processors.TimeStamper(fmt="iso"))

    if include_caller:
        processors.append(structlog.processors.CallsiteParameterAdder(
            parameters=[structlog.processors.CallsiteParameter.FILENAME,
                       structlog.processors.CallsiteParameter.LINENO]
        ))

    if extra_processors:
        processors.extend(extra_processors)

    if format_json:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=False))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> FilteringBoundLogger:
    """
    Get a configured structlog logger instance.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured structlog logger instance
    """
    return structlog.get_logger(name)


def get_calculation_logger(name: str) -> FilteringBoundLogger:
    """
    Get a logger for economy calculations.

    Binds the economy subsystem so breakdown steps and degraded results
    can be filtered out of the general module log.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured structlog logger for calculation tracing
    """
    logger = get_logger(name)

    return logger.bind(
        subsystem="economy",
        audit_trail=True
    )


def log_calculation_step(
    logger: FilteringBoundLogger,
    calculation: str,
    settlement: str,
    step: str,
    total: float,
    context: Optional[dict[str, Any]] = None
) -> None:
    """
    Log one step of a calculation with its running total.

    Args:
        logger: Structlog logger instance
        calculation: Name of the calculation (e.g. "cargo_slots")
        settlement: Settlement name the calculation runs for
        step: Human-readable step label
        total: Running total after the step
        context: Additional context data
    """
    bound_logger = logger.bind(
        calculation=calculation,
        settlement=settlement,
        step=step,
        running_total=round(total, 2),
    )

    if context:
        bound_logger = bound_logger.bind(context=context)

    bound_logger.debug("Calculation step")
