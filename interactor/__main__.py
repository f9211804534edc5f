#!/usr/bin/env python3
"""
Entry point for running as module: python -m interactor
"""

import asyncio

from interactor.app import main


def run() -> None:
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        pass


if __name__ == "__main__":
    run()
