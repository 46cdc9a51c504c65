import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from payonerupee.auth import TokenIssuer
from payonerupee.config import Settings
from payonerupee.counter import CounterStore, new_store
from payonerupee.errors import PaymentServiceError, ValidationError
from payonerupee.razorpay_service import OrderGateway
from payonerupee.routes import router
from payonerupee.verification import PaymentVerifier

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(level=level, format=LOG_FORMAT)


async def payment_service_error_handler(request: Request,
                                        exc: PaymentServiceError):
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


async def request_validation_error_handler(request: Request,
                                           exc: RequestValidationError):
    err = ValidationError()
    return JSONResponse(status_code=err.status_code, content=err.to_dict())


def create_app(settings: Optional[Settings] = None,
               store: Optional[CounterStore] = None,
               gateway: Optional[OrderGateway] = None) -> FastAPI:
    settings = settings or Settings.from_env()
    store = store or new_store(settings)
    gateway = gateway or OrderGateway(settings)
    tokens = TokenIssuer(settings.jwt_secret)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("starting with %s counter backend",
                    settings.counter_backend)
        await store.init()
        yield
        await store.close()

    app = FastAPI(title="Pay One Rupee", lifespan=lifespan)
    app.state.settings = settings
    app.state.store = store
    app.state.gateway = gateway
    app.state.tokens = tokens
    app.state.verifier = PaymentVerifier(settings.razorpay_key_secret,
                                         store, tokens)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(PaymentServiceError,
                              payment_service_error_handler)
    app.add_exception_handler(RequestValidationError,
                              request_validation_error_handler)
    app.include_router(router)
    return app
