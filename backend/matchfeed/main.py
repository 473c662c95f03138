"""FastAPI application entrypoint."""

from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import FastAPI

from matchfeed import __version__
from matchfeed.api import discovery, ops
from matchfeed.api.errors import install_error_handlers
from matchfeed.infra import postgres
from matchfeed.obs import init as obs_init


@asynccontextmanager
async def lifespan(app: FastAPI):
	await postgres.init_pool()
	try:
		yield
	finally:
		await postgres.close_pool()


app = FastAPI(title="matchfeed discovery", version=__version__, lifespan=lifespan)
install_error_handlers(app)
obs_init(app)

app.include_router(discovery.router)
app.include_router(ops.router)
