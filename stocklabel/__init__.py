"""
stocklabel
==========

Barcode labels for inventory items.

Этот пакет предоставляет:
    - Нормализацию названий товаров (path-safe / barcode-safe)
    - Кодирование Code 39 в последовательность модулей
    - Вывод в JSON, SVG, PNG и PNG с подписями
    - Фоновую (detached) запись файлов штрихкодов

Пример базового использования:
    >>> from stocklabel import BarcodeRequest, BarcodeService, get_logger
    >>>
    >>> logger = get_logger(__name__)
    >>> with BarcodeService() as service:
    ...     response = service.generate(BarcodeRequest("Product One", "XL"))
    >>> logger.info("Barcode at %s", response.file_path)

Управление конфигурацией:
    >>> import os
    >>> os.environ['STOCKLABEL_LOG_LEVEL'] = 'DEBUG'
    >>>
    >>> from stocklabel import load_config, LabelSettings
    >>> settings = LabelSettings.from_config(load_config())
"""

import json
import logging
import logging.handlers
import os
import sys
from pathlib import Path
from typing import Any, Dict, Optional

# =============================================================================
# МЕТАДАННЫЕ ВЕРСИИ
# =============================================================================

__version__ = "0.1.0"
__description__ = "Code 39 barcode labels for inventory items"
__license__ = "Apache-2.0"

VERSION_MAJOR = 0
VERSION_MINOR = 1
VERSION_PATCH = 0

ENV_PREFIX = "STOCKLABEL_"

# =============================================================================
# КОНФИГУРАЦИЯ ЛОГИРОВАНИЯ
# =============================================================================


def _setup_logging() -> None:
    """
    Configure the package logger once.

    - stderr handler for WARNING and above
    - rotating file handler for all levels when STOCKLABEL_LOG_FILE is set
    - level from STOCKLABEL_LOG_LEVEL (DEBUG, INFO, WARNING, ERROR, CRITICAL)

    Idempotent: a logger that already has handlers is left alone.
    """
    log_level_str = os.environ.get(f"{ENV_PREFIX}LOG_LEVEL", "INFO").upper()
    log_level_map = {
        "DEBUG": logging.DEBUG,
        "INFO": logging.INFO,
        "WARNING": logging.WARNING,
        "ERROR": logging.ERROR,
        "CRITICAL": logging.CRITICAL,
    }
    log_level = log_level_map.get(log_level_str, logging.INFO)

    root_logger = logging.getLogger("stocklabel")
    if root_logger.handlers:
        return

    root_logger.setLevel(log_level)

    formatter = logging.Formatter(
        fmt="[%(asctime)s] %(levelname)-8s [%(name)s.%(funcName)s:%(lineno)d] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(logging.WARNING)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    log_file = os.environ.get(f"{ENV_PREFIX}LOG_FILE")
    if log_file:
        try:
            log_path = Path(log_file)
            log_path.parent.mkdir(parents=True, exist_ok=True)
            file_handler = logging.handlers.RotatingFileHandler(
                filename=log_path,
                maxBytes=10 * 1024 * 1024,  # 10 МБ
                backupCount=5,
                encoding="utf-8",
            )
            file_handler.setLevel(log_level)
            file_handler.setFormatter(formatter)
            root_logger.addHandler(file_handler)
        except OSError as e:
            root_logger.warning(
                "Failed to initialize file logging: %s. Using console only.", e
            )


def get_logger(module_name: str) -> logging.Logger:
    """
    Return a logger in the 'stocklabel' namespace.

    Example:
        >>> logger = get_logger(__name__)
        >>> logger.info("Barcode generation started")
    """
    if module_name.startswith("stocklabel"):
        return logging.getLogger(module_name)
    if module_name == "__main__":
        return logging.getLogger("stocklabel.main")
    return logging.getLogger(f"stocklabel.{module_name.lstrip('.')}")


# =============================================================================
# УПРАВЛЕНИЕ КОНФИГУРАЦИЕЙ
# =============================================================================

from stocklabel.model.settings import DEFAULT_CONFIG, LabelSettings  # noqa: E402


def _env_overrides() -> Dict[str, Any]:
    """STOCKLABEL_<KEY>=value for every known config key; JSON literals are decoded."""
    overrides: Dict[str, Any] = {}
    for key in DEFAULT_CONFIG:
        raw = os.environ.get(f"{ENV_PREFIX}{key.upper()}")
        if raw is None:
            continue
        try:
            overrides[key] = json.loads(raw)
        except json.JSONDecodeError:
            overrides[key] = raw
    return overrides


def load_config(config_path: Optional[Path] = None) -> Dict[str, Any]:
    """
    Load configuration from config.json, falling back to defaults.

    Args:
        config_path: Path to a JSON file. None looks for 'config.json' in the
            current directory.

    Returns:
        Dict with every default key; file values override defaults and
        STOCKLABEL_<KEY> environment variables override both.

    Note:
        Invalid JSON, unreadable files and non-object content are logged as
        warnings and ignored.
    """
    logger = get_logger(__name__)

    if config_path is None:
        config_path = Path("config.json")
    config_path = Path(config_path)

    config = dict(DEFAULT_CONFIG)

    if config_path.exists():
        try:
            with open(config_path, "r", encoding="utf-8") as f:
                user_config = json.load(f)

            if not isinstance(user_config, dict):
                raise ValueError(
                    f"Config file must contain a JSON object, got {type(user_config).__name__}"
                )

            config.update(user_config)
            logger.info("Configuration loaded from %s", config_path)
        except json.JSONDecodeError as e:
            logger.warning(
                "Failed to parse %s: invalid JSON at line %d, column %d. Using defaults.",
                config_path,
                e.lineno,
                e.colno,
            )
        except OSError as e:
            logger.warning("Failed to read %s: %s. Using defaults.", config_path, e)
        except ValueError as e:
            logger.warning("Invalid configuration format: %s. Using defaults.", e)
    else:
        logger.info("Config file %s not found. Using defaults.", config_path)

    config.update(_env_overrides())
    logger.debug("Configuration: %s", config)
    return config


# =============================================================================
# ПУБЛИЧНЫЙ API
# =============================================================================

from stocklabel.barcodegen import (  # noqa: E402
    ArtifactWriteError,
    BarcodeFormatError,
    BarcodeGenError,
    BarcodeInputError,
    BarcodeService,
    EmptyInputError,
    UnsupportedCharacterError,
    barcode_safe,
    encode,
    path_safe,
)
from stocklabel.model import (  # noqa: E402
    BarcodeDocument,
    BarcodeRequest,
    BarcodeResponse,
    ModuleTrain,
    RenderTarget,
)

__all__ = [
    "__version__",
    "__description__",
    "__license__",
    "VERSION_MAJOR",
    "VERSION_MINOR",
    "VERSION_PATCH",
    "get_logger",
    "load_config",
    "LabelSettings",
    "DEFAULT_CONFIG",
    "ArtifactWriteError",
    "BarcodeFormatError",
    "BarcodeGenError",
    "BarcodeInputError",
    "BarcodeService",
    "EmptyInputError",
    "UnsupportedCharacterError",
    "barcode_safe",
    "encode",
    "path_safe",
    "BarcodeDocument",
    "BarcodeRequest",
    "BarcodeResponse",
    "ModuleTrain",
    "RenderTarget",
]

# =============================================================================
# ИНИЦИАЛИЗАЦИЯ ПАКЕТА
# =============================================================================

_setup_logging()
get_logger(__name__).debug("stocklabel v%s initialized", __version__)
