import logging
from fastapi import FastAPI
from app.api.exceptions import register_error_handler
from app.api.v1.routes import scan, seat_maps, theaters, seat_categories
from app.core.middleware.http_ctx import HttpContextMiddleware
from app.core.redis import create_redis

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s"
)


async def lifespan(app: FastAPI):
    r = await create_redis()
    app.state.redis = r
    try:
        yield
    finally:
        if r is not None:
            await r.aclose()


app = FastAPI(lifespan=lifespan)
app.add_middleware(HttpContextMiddleware, request_id_header="X-Request-ID")
register_error_handler(app)
app.include_router(scan.router)
app.include_router(theaters.router)
app.include_router(seat_maps.router)
app.include_router(seat_categories.router)
