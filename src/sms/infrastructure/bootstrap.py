"""Composition root — wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.

Configuration comes from the environment:

- ``SMS_DATA_DIR``: directory holding ``sales.json``.  Defaults to the
  ``data`` directory at the project root.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

from sms.application.event_dispatcher import SaleEventDispatcher, default_dispatcher
from sms.infrastructure.persistence.json_sale_repository import JsonSaleRepository

DATA_DIR_ENV = "SMS_DATA_DIR"
SALES_FILE = "sales.json"

# When installed in editable mode the project root is the repo root.
_DEFAULT_DATA_DIR = Path(__file__).resolve().parents[3] / "data"

logger = logging.getLogger(__name__)


def data_dir() -> Path:
    configured = os.environ.get(DATA_DIR_ENV)
    if configured:
        return Path(configured).expanduser()
    return _DEFAULT_DATA_DIR


def sale_repository() -> JsonSaleRepository:
    path = data_dir() / SALES_FILE
    logger.debug("Using sales store at %s", path)
    return JsonSaleRepository(path)


def event_dispatcher() -> SaleEventDispatcher:
    return default_dispatcher()


def configure_logging(verbose: bool = False) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
