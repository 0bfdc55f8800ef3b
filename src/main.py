"""Entry point for the Snake Cashout game."""

from __future__ import annotations

import logging
import os

from snake_cashout.config import LOG_LEVEL_ENV
from snake_cashout.game import CashoutApp


def main() -> None:
    logging.basicConfig(
        level=os.getenv(LOG_LEVEL_ENV, "WARNING").upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    game = CashoutApp()
    game.start()


if __name__ == "__main__":
    main()
