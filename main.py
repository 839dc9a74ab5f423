from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse

from config import settings
from database import Base, engine
from exceptions import WalletError
from routers import transactions
from utils.logger import get_logger

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Create the transactions table if it does not exist yet
    Base.metadata.create_all(bind=engine)
    yield


app = FastAPI(title="Wallet App", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(WalletError)
async def wallet_error_handler(request: Request, exc: WalletError):
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


app.include_router(transactions.router, prefix="/transactions", tags=["transactions"])


@app.get("/health", response_class=PlainTextResponse)
def health():
    return "OK"


@app.get("/", response_class=PlainTextResponse)
def root():
    return "Welcome to the Wallet App Backend"


if __name__ == "__main__":
    logger.info("Server running on http://%s:%s", settings.HOST, settings.PORT)
    uvicorn.run("main:app", host=settings.HOST, port=settings.PORT)
