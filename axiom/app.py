"""Replay runner: dispatches configured actions through a store wired with the pipeline."""
from __future__ import annotations

import argparse
import asyncio
import logging
from typing import List

from prometheus_client import start_http_server

from axiom.config import AxiomConfig, load_config
from axiom.pipeline import ActionPipeline
from axiom.store import Store, record_actions

log = logging.getLogger("axiom")


class ReplayRunner:
    def __init__(self, config: AxiomConfig):
        self.config = config
        self.pipeline = ActionPipeline(config=config.pipeline)
        self.store = Store(record_actions, state=[], middleware=[self.pipeline])

    async def run(self) -> List:
        for action in self.config.actions:
            self.store.dispatch(action)
        await self.pipeline.drain()
        return self.store.get_state()

    async def close(self) -> None:
        await self.pipeline.close()


async def main_async(args) -> int:
    config = load_config(args.config)
    if config.metrics_port:
        start_http_server(config.metrics_port)
    runner = ReplayRunner(config)
    try:
        reached = await runner.run()
    finally:
        await runner.close()
    for action in reached:
        log.info("%s payload=%r", action.kind, action.payload)
    log.info("replayed %d actions, %d reached the store", len(config.actions), len(reached))
    return 0


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s [%(levelname)s] %(name)s: %(message)s")
    parser = argparse.ArgumentParser(description="Replay actions through the axiom interception pipeline")
    parser.add_argument("--config", default="config/actions.yaml")
    args = parser.parse_args()
    try:
        raise SystemExit(asyncio.run(main_async(args)))
    except KeyboardInterrupt:
        pass


if __name__ == "__main__":
    main()
